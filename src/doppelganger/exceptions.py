"""
Exception classes for the doppelganger scanner.

All exceptions inherit from DoppelgangerError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class DoppelgangerError(Exception):
    """Base exception for all doppelganger errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DoppelgangerError):
    """Raised when the target domain cannot be parsed."""

    pass


class ConfigurationError(DoppelgangerError):
    """Raised when configuration files or values are invalid."""

    pass


class NetworkError(DoppelgangerError):
    """Raised when a WHOIS server cannot be reached or read."""

    pass


class ProtocolError(DoppelgangerError):
    """Raised when a WHOIS response carries no registration record."""

    pass


class OutputError(DoppelgangerError):
    """Raised when results cannot be written to their destination."""

    pass
