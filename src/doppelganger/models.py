"""
Data models for the doppelganger scanner.

This module defines the parsed target, the per-candidate result record
and the registration data extracted from WHOIS responses.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import CandidateStatus


@dataclass
class TargetDomain:
    """The domain a scan generates look-alikes for."""

    raw: str  # Original input (domain or URL)
    label: str  # Registrable label, e.g. 'example'
    suffix: str  # Public suffix, e.g. 'com' or 'co.uk'
    subdomain: str = ""  # Ignored part, e.g. 'www'
    is_idn: bool = False  # Contains international characters

    @property
    def name(self) -> str:
        return f"{self.label}.{self.suffix}"


@dataclass
class WHOISRecord:
    """Registration data parsed from a WHOIS response."""

    registrar: str = ""  # Referral URL, or the registrar name if no URL
    created: str = ""
    updated: str = ""
    expires: str = ""
    name_servers: list[str] = field(default_factory=list)
    raw: str = ""


@dataclass
class Candidate:
    """
    One generated domain variant.

    Created by the permutation generator with only ``domain`` set and
    filled in exactly once by the availability resolver.
    """

    domain: str
    ascii: str = ""
    available: bool = False
    whois: Optional[WHOISRecord] = None
    addresses: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    resolved: bool = False

    @property
    def status(self) -> CandidateStatus:
        if self.available:
            return CandidateStatus.AVAILABLE
        return CandidateStatus.REGISTERED

    @property
    def is_live(self) -> bool:
        """Registered and resolving to at least one address."""
        return not self.available and len(self.addresses) > 0
