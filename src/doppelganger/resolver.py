"""
Availability Resolver for generated candidates.

Decides for each candidate whether it appears registered and, if so,
enriches it with addresses and reverse DNS names. The policy is
conservative in the "free" direction: any failure of the WHOIS lookup or
of the parser marks the domain as available, so only positively
registered domains are reported as such.

Note that this makes broken WHOIS infrastructure indistinguishable from an
unregistered domain.
"""

from typing import Optional

import idna

from .dns_resolver import DNSResolver
from .enums import LogLevel
from .models import Candidate, WHOISRecord
from .scan_logger import ScanLogger
from .whois_client import WHOISClient
from .whois_parser import WHOISParser


def to_ascii(domain: str) -> str:
    """
    Convert a domain to its IDNA ASCII form.

    Returns:
        The ASCII (punycode) form, or '' if the domain cannot be encoded
    """
    if not domain:
        return ""
    try:
        return idna.encode(domain, uts46=True).decode("ascii")
    except idna.IDNAError:
        return ""


class AvailabilityResolver:
    """Resolves a single candidate: registration status, then DNS."""

    def __init__(
        self,
        whois_client: WHOISClient,
        parser: WHOISParser,
        dns_resolver: DNSResolver,
        logger: Optional[ScanLogger] = None,
    ) -> None:
        self._whois_client = whois_client
        self._parser = parser
        self._dns = dns_resolver
        self._logger = logger

    async def is_available(self, domain: str) -> tuple[bool, Optional[WHOISRecord]]:
        """
        Look a domain up in WHOIS.

        Returns:
            (False, record) when a registration record was parsed,
            (True, None) on any lookup or parse failure
        """
        try:
            raw = await self._whois_client.query(domain)
            record = self._parser.parse(domain, raw)
        except Exception as e:
            if self._logger:
                self._logger.log_error(
                    "AvailabilityResolver",
                    f"No registration record for {domain}",
                    error=e,
                    level=LogLevel.DEBUG,
                    additional_data={"domain": domain},
                )
            return True, None
        return False, record

    async def resolve(self, candidate: Candidate) -> Candidate:
        """
        Fill in a candidate in place.

        The WHOIS lookup runs on the Unicode form first; a domain that looks
        free is asked again in its ASCII form, since many registries only
        answer punycode queries. The second query is sent for plain ASCII
        names too and only skipped when the name has no ASCII form.
        Registered domains are then resolved to
        addresses and each address reverse-resolved.

        Never raises for per-candidate failures.
        """
        available, record = await self.is_available(candidate.domain)
        candidate.ascii = to_ascii(candidate.domain)

        if available and candidate.ascii:
            available, record = await self.is_available(candidate.ascii)

        candidate.available = available
        candidate.whois = record

        if not available:
            lookup_name = candidate.ascii or candidate.domain
            addresses = await self._dns.lookup_host(lookup_name)
            names: list[str] = []
            for address in addresses:
                for name in await self._dns.lookup_addr(address):
                    if name not in names:
                        names.append(name)
            candidate.addresses = list(dict.fromkeys(addresses))
            candidate.names = names

        candidate.resolved = True
        return candidate
