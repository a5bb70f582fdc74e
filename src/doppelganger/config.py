"""
Configuration dataclasses for the doppelganger scanner.

This module defines all configuration structures used throughout the system,
including WHOIS and DNS settings, output filters, and logging configuration,
plus environment overrides loaded from a ``.env`` file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError


ENV_PREFIX = "DOPPELGANGER_"


@dataclass
class WHOISConfig:
    """WHOIS client configuration."""

    timeout: float = 10.0
    custom_servers: dict[str, str] = field(default_factory=dict)
    follow_referrals: bool = True  # Ask whois.iana.org for unknown TLDs


@dataclass
class DNSConfig:
    """DNS resolver configuration."""

    nameservers: list[str] = field(default_factory=list)  # Empty = system resolvers
    timeout: float = 3.0


@dataclass
class FilterConfig:
    """Console presentation filters."""

    available_only: bool = False
    registered_only: bool = False
    live_only: bool = False


@dataclass
class OutputConfig:
    """Output destinations and options."""

    csv_path: Optional[Path] = None
    show_whois: bool = False
    language: str = "en"  # 'de' or 'en'


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "warn"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class ScanConfig:
    """Main scan configuration combining all sub-configurations."""

    limit: int = 0  # 0 = no cap on generated candidates
    concurrency: int = 0  # 0 = one worker per CPU
    dictionary_path: Optional[Path] = None
    whois: WHOISConfig = field(default_factory=WHOISConfig)
    dns: DNSConfig = field(default_factory=DNSConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    simulation_mode: bool = False


def _int_env(name: str, default: int) -> int:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            code="invalid_env",
            message=f"{ENV_PREFIX}{name} must be an integer, got {value!r}",
            details={"variable": ENV_PREFIX + name, "value": value},
        )


def _float_env(name: str, default: float) -> float:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(
            code="invalid_env",
            message=f"{ENV_PREFIX}{name} must be a number, got {value!r}",
            details={"variable": ENV_PREFIX + name, "value": value},
        )


def apply_env_overrides(config: ScanConfig, dotenv_path: Optional[Path] = None) -> ScanConfig:
    """
    Apply ``DOPPELGANGER_*`` environment variables on top of a configuration.

    A ``.env`` file is loaded first (without overriding variables that are
    already set in the process environment).

    Args:
        config: Configuration to update in place
        dotenv_path: Optional explicit path of the .env file

    Returns:
        The same configuration object

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed
    """
    load_dotenv(dotenv_path=dotenv_path)

    config.limit = _int_env("LIMIT", config.limit)
    config.concurrency = _int_env("WORKERS", config.concurrency)
    config.whois.timeout = _float_env("WHOIS_TIMEOUT", config.whois.timeout)
    config.dns.timeout = _float_env("DNS_TIMEOUT", config.dns.timeout)

    servers = os.getenv(ENV_PREFIX + "DNS_SERVERS", "")
    if servers.strip():
        config.dns.nameservers = [
            s.strip() for s in servers.replace(";", ",").split(",") if s.strip()
        ]

    language = (os.getenv(ENV_PREFIX + "LANG", "") or "").strip().lower()
    if language:
        config.output.language = language

    if os.getenv(ENV_PREFIX + "DEBUG", "0") == "1":
        config.logging.level = "debug"

    return config
