"""
WHOIS response parser.

Raw text from the port-43 client is handed to python-whois, which picks
the TLD-specific layout and extracts registrar, dates and name servers.
A response that carries no registration record (a "no match" answer, an
empty body, a query-limit notice or simply no registration fields) is
reported as a ProtocolError, which the availability resolver reads as
"no proof of registration".
"""

from datetime import datetime
from typing import Any, Optional

from whois.exceptions import PywhoisError
from whois.parser import WhoisEntry

from .enums import WHOISErrorCode
from .exceptions import ProtocolError
from .models import WHOISRecord


class WHOISParser:
    """
    Turns raw WHOIS text into a WHOISRecord.

    Registration fields are looked at first, so boilerplate such as
    "the reseller contact was not found" inside a registered record cannot
    turn it into a free one.
    """

    # Fields whose presence proves a registration
    REGISTRATION_FIELDS: tuple[str, ...] = (
        "registrar",
        "registrar_url",
        "creation_date",
        "expiration_date",
        "name_servers",
    )

    # Phrases meaning the server refused to answer
    LIMIT_SIGNALS: tuple[str, ...] = (
        "limit exceeded",
        "quota exceeded",
        "exceeded the query limit",
        "too many requests",
        "rate limit",
    )

    def parse(self, domain: str, raw: Optional[str]) -> WHOISRecord:
        """
        Parse a raw WHOIS response.

        Args:
            domain: The queried name; selects the TLD-specific layout
            raw: Response text as returned by the WHOIS server

        Returns:
            WHOISRecord with whatever fields could be extracted

        Raises:
            ProtocolError: If the response holds no registration record
        """
        if raw is None or not raw.strip():
            raise ProtocolError(
                code=WHOISErrorCode.EMPTY_RESPONSE.value,
                message="WHOIS response is empty",
                details={"domain": domain},
            )

        try:
            entry = WhoisEntry.load(domain, raw)
        except PywhoisError as e:
            raise ProtocolError(
                code=WHOISErrorCode.NOT_FOUND.value,
                message=f"No registration record for {domain}",
                details={"domain": domain, "reason": str(e).strip()[:200]},
            )

        if any(entry.get(name) for name in self.REGISTRATION_FIELDS):
            return self._build_record(entry, raw)

        lowered = raw.lower()
        for signal in self.LIMIT_SIGNALS:
            if signal in lowered:
                raise ProtocolError(
                    code=WHOISErrorCode.LIMIT_EXCEEDED.value,
                    message=f"WHOIS server refused the query ({signal!r})",
                    details={"domain": domain, "signal": signal},
                )

        raise ProtocolError(
            code=WHOISErrorCode.NOT_FOUND.value,
            message=f"No registration fields in WHOIS response for {domain}",
            details={"domain": domain},
        )

    def _build_record(self, entry: WhoisEntry, raw: str) -> WHOISRecord:
        return WHOISRecord(
            # Referral URL when the registry gives one, else the registrar name
            registrar=_text(entry.get("registrar_url")) or _text(entry.get("registrar")),
            created=_text(entry.get("creation_date")),
            updated=_text(entry.get("updated_date")),
            expires=_text(entry.get("expiration_date")),
            name_servers=self._name_servers(entry.get("name_servers")),
            raw=raw,
        )

    @staticmethod
    def _name_servers(value: Any) -> list[str]:
        if not value:
            return []
        if isinstance(value, str):
            value = [value]

        servers: list[str] = []
        for item in value:
            parts = str(item).split()
            if not parts:
                continue
            # 'ns1.example.com 192.0.2.1' -> 'ns1.example.com'
            name = parts[0].rstrip(".").lower()
            if name and name not in servers:
                servers.append(name)
        return servers


def _text(value: Any) -> str:
    """First value of a python-whois field as text ('' when missing)."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value).strip()
