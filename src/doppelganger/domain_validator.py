"""
Target domain validation and parsing module.

Turns the operator's input (a bare domain or a URL) into the registrable
label and public suffix the permutation generator works on. Any failure
here is a configuration error: nothing is generated and no network
activity happens.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import idna
import tldextract

from .enums import DomainValidationErrorCode
from .exceptions import ValidationError
from .models import TargetDomain


# Forbidden characters in a host name (control chars, spaces, special symbols)
# Based on RFC 1035 and RFC 5891 (IDNA2008)
FORBIDDEN_CHARS_PATTERN = re.compile(
    r'[\x00-\x1f\x7f'           # Control characters
    r'\s'                        # Whitespace
    r'!@#$%^&*()+=\[\]{}|\\:;"\'<>,?/`~]'  # Special symbols not allowed
)


@dataclass
class DomainValidationError:
    """Structured error information for target validation failures."""

    code: DomainValidationErrorCode
    message: str
    details: dict


@dataclass
class DomainValidationResult:
    """Result of target validation."""

    valid: bool
    target: Optional[TargetDomain]
    error: Optional[DomainValidationError]


class DomainValidator:
    """
    Validates and parses target domains.

    Handles:
    - Bare domains and URLs (scheme, path, port and credentials are dropped)
    - Public suffix aware splitting via tldextract (``www.example.co.uk``
      gives label ``example`` and suffix ``co.uk``)
    - Rejection of forbidden characters
    - IDNA checks for international labels; punycode labels are decoded
      so permutations operate on the human-readable form
    """

    def __init__(self, fetch_suffix_list: bool = False) -> None:
        """
        Initialize the validator.

        Args:
            fetch_suffix_list: If True, refresh the public suffix list over
                the network; otherwise use the snapshot bundled with tldextract
        """
        if fetch_suffix_list:
            self._extractor = tldextract.TLDExtract()
        else:
            self._extractor = tldextract.TLDExtract(suffix_list_urls=())

    def validate(self, raw: str) -> DomainValidationResult:
        """
        Validate a target without raising.

        Args:
            raw: Domain name or URL

        Returns:
            DomainValidationResult with the parsed target or error
        """
        try:
            target = self.parse_target(raw)
        except ValidationError as e:
            return DomainValidationResult(
                valid=False,
                target=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode(e.code),
                    message=e.message,
                    details=e.details,
                ),
            )
        return DomainValidationResult(valid=True, target=target, error=None)

    def parse_target(self, raw: str) -> TargetDomain:
        """
        Parse a domain name or URL into a TargetDomain.

        Args:
            raw: Domain name or URL, e.g. ``example.com`` or
                ``https://www.example.com/login``

        Returns:
            TargetDomain with label and suffix populated

        Raises:
            ValidationError: If the input cannot be parsed
        """
        if not raw or not raw.strip():
            raise self._error(
                DomainValidationErrorCode.EMPTY_INPUT,
                "Domain input is empty",
                {"raw_input": raw},
            )

        host = self._extract_host(raw.strip())

        if FORBIDDEN_CHARS_PATTERN.search(host):
            raise self._error(
                DomainValidationErrorCode.FORBIDDEN_CHARS,
                "Domain contains forbidden characters",
                {
                    "raw_input": raw,
                    "forbidden_chars": FORBIDDEN_CHARS_PATTERN.findall(host),
                },
            )

        extracted = self._extractor(host)

        if not extracted.suffix:
            raise self._error(
                DomainValidationErrorCode.MISSING_SUFFIX,
                f"Could not find a public suffix in '{host}'",
                {"raw_input": raw, "host": host},
            )
        if not extracted.domain:
            raise self._error(
                DomainValidationErrorCode.MISSING_LABEL,
                f"Could not parse {raw}",
                {"raw_input": raw, "host": host, "suffix": extracted.suffix},
            )

        label = self._to_unicode(extracted.domain, raw)
        is_idn = any(ord(c) > 127 for c in label)
        if is_idn:
            self._check_idna(label, raw)

        return TargetDomain(
            raw=raw,
            label=label,
            suffix=extracted.suffix,
            subdomain=extracted.subdomain,
            is_idn=is_idn,
        )

    def _extract_host(self, value: str) -> str:
        """Return the lowercase host part of a domain or URL."""
        # urlparse only finds the host after a scheme separator
        if "://" not in value:
            value = f"https://{value}"

        parsed = urlparse(value)
        host = (parsed.hostname or "").strip().rstrip(".")
        if not host:
            raise self._error(
                DomainValidationErrorCode.INVALID_URL,
                f"Could not parse {value}",
                {"raw_input": value},
            )
        return host.lower()

    def _to_unicode(self, label: str, raw: str) -> str:
        if not label.startswith("xn--"):
            return label
        try:
            return idna.decode(label)
        except idna.IDNAError as e:
            raise self._error(
                DomainValidationErrorCode.IDNA_ERROR,
                f"IDNA decoding failed: {e}",
                {"raw_input": raw, "label": label, "idna_error": str(e)},
            )

    def _check_idna(self, label: str, raw: str) -> None:
        try:
            idna.encode(label, uts46=True)
        except idna.IDNAError as e:
            raise self._error(
                DomainValidationErrorCode.IDNA_ERROR,
                f"IDNA encoding failed: {e}",
                {"raw_input": raw, "label": label, "idna_error": str(e)},
            )

    @staticmethod
    def _error(
        code: DomainValidationErrorCode, message: str, details: dict
    ) -> ValidationError:
        return ValidationError(code=code.value, message=message, details=details)
