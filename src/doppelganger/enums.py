"""
Enumeration types for the doppelganger scanner.

These enums provide type-safe constants for status codes, error codes,
and configuration options throughout the system.
"""

from enum import Enum


class CandidateStatus(Enum):
    """Registration status of a resolved candidate."""

    AVAILABLE = "available"
    REGISTERED = "registered"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        """Numeric rank used for threshold comparisons."""
        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}


class DomainValidationErrorCode(Enum):
    """Error codes for target domain validation failures."""

    EMPTY_INPUT = "empty_input"
    FORBIDDEN_CHARS = "forbidden_chars"
    INVALID_URL = "invalid_url"
    MISSING_LABEL = "missing_label"
    MISSING_SUFFIX = "missing_suffix"
    IDNA_ERROR = "idna_error"


class WHOISErrorCode(Enum):
    """Error codes for WHOIS client and parser operations."""

    EMPTY_DOMAIN = "empty_domain"
    NO_SERVER = "no_server"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    EMPTY_RESPONSE = "empty_response"
    NOT_FOUND = "not_found"
    LIMIT_EXCEEDED = "limit_exceeded"
