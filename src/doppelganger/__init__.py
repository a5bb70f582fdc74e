"""
Doppelganger - look-alike domain scanner.

This package generates homoglyph variations of a target domain, checks
which of them are registered via WHOIS and enriches registered ones with
forward and reverse DNS data.
"""

__version__ = "0.1.0"
__author__ = "Doppelganger Team"

from doppelganger.exceptions import (
    DoppelgangerError,
    ValidationError,
    ConfigurationError,
    NetworkError,
    ProtocolError,
    OutputError,
)
from doppelganger.enums import (
    CandidateStatus,
    LogLevel,
    DomainValidationErrorCode,
    WHOISErrorCode,
)
from doppelganger.models import (
    TargetDomain,
    WHOISRecord,
    Candidate,
)
from doppelganger.config import (
    WHOISConfig,
    DNSConfig,
    FilterConfig,
    OutputConfig,
    LoggingConfig,
    ScanConfig,
    apply_env_overrides,
)
from doppelganger.domain_validator import (
    DomainValidator,
    DomainValidationResult,
    DomainValidationError,
)
from doppelganger.dictionary import (
    DEFAULT_DICTIONARY,
    build_dictionary,
    load_dictionary,
)
from doppelganger.permutations import (
    count_permutations,
    generate_candidates,
)
from doppelganger.whois_client import WHOISClient
from doppelganger.whois_parser import WHOISParser
from doppelganger.dns_resolver import DNSResolver
from doppelganger.resolver import (
    AvailabilityResolver,
    to_ascii,
)
from doppelganger.worker_pool import (
    ProgressCounter,
    WorkerPool,
    worker_count,
)
from doppelganger.aggregator import ResultSet
from doppelganger.scan_logger import (
    ScanLogger,
    LogEntry,
)
from doppelganger.i18n import (
    get_message,
    get_all_message_keys,
    has_translation,
    get_missing_translations,
    validate_translations,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from doppelganger.output import (
    CSV_COLUMNS,
    WHOIS_COLUMNS,
    build_csv_row,
    write_csv,
    read_csv,
    print_results,
)
from doppelganger.orchestrator import (
    ScanOrchestrator,
    ScanPlan,
    ScanReport,
)
from doppelganger.cli import (
    main as cli_main,
    create_parser,
    load_config_from_file,
)

__all__ = [
    # Exceptions
    "DoppelgangerError",
    "ValidationError",
    "ConfigurationError",
    "NetworkError",
    "ProtocolError",
    "OutputError",
    # Enums
    "CandidateStatus",
    "LogLevel",
    "DomainValidationErrorCode",
    "WHOISErrorCode",
    # Models
    "TargetDomain",
    "WHOISRecord",
    "Candidate",
    # Configuration
    "WHOISConfig",
    "DNSConfig",
    "FilterConfig",
    "OutputConfig",
    "LoggingConfig",
    "ScanConfig",
    "apply_env_overrides",
    # Domain Validator
    "DomainValidator",
    "DomainValidationResult",
    "DomainValidationError",
    # Dictionary and permutations
    "DEFAULT_DICTIONARY",
    "build_dictionary",
    "load_dictionary",
    "count_permutations",
    "generate_candidates",
    # Lookups
    "WHOISClient",
    "WHOISParser",
    "DNSResolver",
    "AvailabilityResolver",
    "to_ascii",
    # Worker Pool
    "ProgressCounter",
    "WorkerPool",
    "worker_count",
    # Results
    "ResultSet",
    # Scan Logger
    "ScanLogger",
    "LogEntry",
    # I18n
    "get_message",
    "get_all_message_keys",
    "has_translation",
    "get_missing_translations",
    "validate_translations",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # Output
    "CSV_COLUMNS",
    "WHOIS_COLUMNS",
    "build_csv_row",
    "write_csv",
    "read_csv",
    "print_results",
    # Orchestrator
    "ScanOrchestrator",
    "ScanPlan",
    "ScanReport",
    # CLI
    "cli_main",
    "create_parser",
    "load_config_from_file",
]
