"""
Command-line interface for the doppelganger scanner.

Generates look-alike domains for a target, checks their registration
status and prints the results, optionally exporting them to CSV.

Configuration is layered: built-in defaults, then the JSON file given with
--config, then DOPPELGANGER_* environment variables (a .env file is read
too), then command line flags.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from . import __version__
from .config import (
    DNSConfig,
    FilterConfig,
    LoggingConfig,
    OutputConfig,
    ScanConfig,
    WHOISConfig,
    apply_env_overrides,
)
from .exceptions import ConfigurationError, OutputError, ValidationError
from .i18n import get_message
from .orchestrator import ScanOrchestrator, ScanPlan, ScanReport
from .output import console, err_console, print_results, write_csv
from .scan_logger import ScanLogger


def load_config_from_file(config_path: Path) -> ScanConfig:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        ScanConfig with file values on top of the defaults

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid values
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            code="config_unreadable",
            message=f"Could not read config {config_path}: {e}",
            details={"path": str(config_path)},
        )
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            code="invalid_config",
            message=f"Config {config_path} is not valid JSON: {e}",
            details={"path": str(config_path)},
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            code="invalid_config",
            message=f"Config {config_path} must contain a JSON object",
            details={"path": str(config_path)},
        )

    try:
        whois_data = data.get("whois", {})
        whois = WHOISConfig(
            timeout=float(whois_data.get("timeout", 10.0)),
            custom_servers={str(k).lower(): str(v) for k, v in whois_data.get("servers", {}).items()},
            follow_referrals=bool(whois_data.get("follow_referrals", True)),
        )

        dns_data = data.get("dns", {})
        dns = DNSConfig(
            nameservers=[str(s) for s in dns_data.get("nameservers", [])],
            timeout=float(dns_data.get("timeout", 3.0)),
        )

        filters_data = data.get("filters", {})
        filters = FilterConfig(
            available_only=bool(filters_data.get("available_only", False)),
            registered_only=bool(filters_data.get("registered_only", False)),
            live_only=bool(filters_data.get("live_only", False)),
        )

        output_data = data.get("output", {})
        csv_path = output_data.get("csv")
        output = OutputConfig(
            csv_path=Path(csv_path) if csv_path else None,
            show_whois=bool(output_data.get("whois", False)),
            language=str(output_data.get("language", "en")),
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", "warn")),
            output_format=str(logging_data.get("output_format", "text")),
        )

        dictionary_path = data.get("dictionary")
        return ScanConfig(
            limit=int(data.get("limit", 0)),
            concurrency=int(data.get("workers", 0)),
            dictionary_path=Path(dictionary_path) if dictionary_path else None,
            whois=whois,
            dns=dns,
            filters=filters,
            output=output,
            logging=logging_config,
            simulation_mode=bool(data.get("simulation_mode", False)),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigurationError(
            code="invalid_config",
            message=f"Invalid value in config {config_path}: {e}",
            details={"path": str(config_path)},
        )


def build_config(args: argparse.Namespace) -> ScanConfig:
    """Layer defaults, config file, environment and flags."""
    config = load_config_from_file(Path(args.config)) if args.config else ScanConfig()
    apply_env_overrides(config)

    if args.limit is not None:
        config.limit = args.limit
    if args.workers is not None:
        config.concurrency = args.workers
    if args.dictionary:
        config.dictionary_path = Path(args.dictionary)
    if args.available:
        config.filters = FilterConfig(available_only=True)
    elif args.registered:
        config.filters = FilterConfig(registered_only=True)
    elif args.live:
        config.filters = FilterConfig(live_only=True)
    if args.whois:
        config.output.show_whois = True
    if args.csv:
        config.output.csv_path = Path(args.csv)
    if args.language:
        config.output.language = args.language
    if args.dry_run:
        config.simulation_mode = True
    if args.verbose:
        config.logging.level = "debug"

    if config.limit < 0:
        raise ConfigurationError(code="invalid_limit", message="--limit must not be negative")
    if config.concurrency < 0:
        raise ConfigurationError(code="invalid_workers", message="--workers must not be negative")
    return config


def run_with_progress(
    orchestrator: ScanOrchestrator,
    plan: ScanPlan,
    language: str,
) -> ScanReport:
    """Execute a scan with a rich progress bar fed by the pool callback."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task_id = progress.add_task(
            get_message("scan.progress", language),
            total=max(len(plan.candidates), 1),
        )

        def cb(done: int, total: int) -> None:
            progress.update(task_id, total=max(total, 1), completed=done)

        return asyncio.run(orchestrator.execute(plan, progress_callback=cb))


def scan(args: argparse.Namespace) -> int:
    """Run one scan; returns the exit code."""
    language = args.language or "en"
    try:
        config = build_config(args)
        language = config.output.language
        logger = ScanLogger.from_names(
            output_format=config.logging.output_format,
            level=config.logging.level,
        )
        orchestrator = ScanOrchestrator(config, logger=logger)
        plan = orchestrator.prepare(args.domain)
    except ValidationError as e:
        err_console.print(get_message("error.validation", language, message=escape(e.message)), highlight=False)
        return 1
    except ConfigurationError as e:
        err_console.print(get_message("config.invalid", language, message=escape(e.message)), highlight=False)
        return 1
    except ValueError as e:
        # Unknown log level or output format
        err_console.print(get_message("config.invalid", language, message=escape(str(e))), highlight=False)
        return 1

    target = plan.target
    if config.simulation_mode:
        err_console.print(f"[yellow]{get_message('simulation.enabled', language)}[/yellow]")
    if target.subdomain:
        err_console.print(
            get_message("validation.subdomain_ignored", language, subdomain=target.subdomain),
            highlight=False,
        )

    if not plan.candidates:
        console.print(get_message("scan.no_candidates", language, domain=target.name), highlight=False)
    else:
        console.print(
            get_message("scan.checking", language, count=len(plan.candidates), domain=target.name),
            highlight=False,
        )
    console.print()

    report = run_with_progress(orchestrator, plan, language)
    print_results(report.results, config.filters, show_whois=config.output.show_whois)
    if report.total:
        err_console.print()
        err_console.print(get_message("scan.summary", language, **report.results.summary()), highlight=False)
        err_console.print(
            get_message("scan.duration", language, seconds=report.duration_ms / 1000),
            highlight=False,
        )

    if config.output.csv_path is not None:
        try:
            write_csv(config.output.csv_path, report.results, show_whois=config.output.show_whois)
        except OutputError as e:
            logger.log_error("cli", "CSV export failed", error=e)
            err_console.print(get_message("error.output", language, message=escape(e.message)), highlight=False)
            return 1
        console.print()
        console.print(get_message("output.saved", language, path=config.output.csv_path), highlight=False)

    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="doppelganger",
        description="Find registered look-alike (homoglyph) domains of a target domain",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--domain", "-d",
        required=True,
        help="Target domain or URL (e.g., example.com or https://www.example.com/)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Maximum number of variations to check (default: no limit)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of concurrent workers (default: number of CPUs)",
    )

    filters = parser.add_mutually_exclusive_group()
    filters.add_argument(
        "--available",
        action="store_true",
        help="Only show available domains",
    )
    filters.add_argument(
        "--registered",
        action="store_true",
        help="Only show registered domains",
    )
    filters.add_argument(
        "--live",
        action="store_true",
        help="Only show registered domains that resolve to an address",
    )

    parser.add_argument(
        "--whois",
        action="store_true",
        help="Show and export WHOIS registration details",
    )
    parser.add_argument(
        "--csv",
        help="Save all results to this CSV file",
    )
    parser.add_argument(
        "--dictionary",
        help="JSON file mapping characters to look-alike substitutes",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--language", "-l",
        choices=["de", "en"],
        help="Output language (default: en)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulation mode - no real network requests",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    return scan(args)


if __name__ == "__main__":
    sys.exit(main())
