"""
Scan Orchestrator for the doppelganger scanner.

This module wires the components together for one scan:
- Target validation and parsing
- Candidate generation from the substitution dictionary
- Availability resolution of every candidate on a bounded worker pool
- Aggregation of the results in generation order
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .aggregator import ResultSet
from .config import ScanConfig
from .dictionary import DEFAULT_DICTIONARY, Dictionary, load_dictionary
from .dns_resolver import DNSResolver
from .domain_validator import DomainValidator
from .enums import LogLevel
from .models import Candidate, TargetDomain
from .permutations import generate_candidates
from .resolver import AvailabilityResolver
from .scan_logger import ScanLogger
from .whois_client import WHOISClient
from .whois_parser import WHOISParser
from .worker_pool import ProgressCallback, WorkerPool, worker_count


@dataclass
class ScanPlan:
    """A parsed target and the candidates generated for it."""

    target: TargetDomain
    candidates: list[Candidate]


@dataclass
class ScanReport:
    """Result of a finished scan."""

    target: TargetDomain
    results: ResultSet
    workers: int
    duration_ms: int

    @property
    def total(self) -> int:
        return len(self.results)


class ScanOrchestrator:
    """
    Main orchestrator for doppelganger scans.

    The WHOIS client, parser and DNS resolver can be injected; when they
    are not, they are built from the configuration for each scan and share
    a thread pool sized to the worker count.
    """

    def __init__(
        self,
        config: ScanConfig,
        logger: Optional[ScanLogger] = None,
        dictionary: Optional[Dictionary] = None,
        whois_client: Optional[WHOISClient] = None,
        parser: Optional[WHOISParser] = None,
        dns_resolver: Optional[DNSResolver] = None,
        validator: Optional[DomainValidator] = None,
    ) -> None:
        """
        Initialize the scan orchestrator.

        Args:
            config: Scan configuration
            logger: Optional scan logger
            dictionary: Substitution dictionary; loaded from
                ``config.dictionary_path`` or the built-in one when None
            whois_client: Optional pre-built WHOIS client
            parser: Optional WHOIS parser
            dns_resolver: Optional pre-built DNS resolver
            validator: Optional target validator

        Raises:
            ConfigurationError: If the dictionary file cannot be loaded
        """
        self._config = config
        self._logger = logger
        if dictionary is not None:
            self._dictionary = dictionary
        elif config.dictionary_path is not None:
            self._dictionary = load_dictionary(config.dictionary_path)
        else:
            self._dictionary = DEFAULT_DICTIONARY
        self._whois_client = whois_client
        self._parser = parser or WHOISParser()
        self._dns_resolver = dns_resolver
        self._validator = validator or DomainValidator()

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def prepare(self, raw_target: str) -> ScanPlan:
        """
        Parse the target and generate its candidates.

        Raises:
            ValidationError: If the target cannot be parsed
        """
        target = self._validator.parse_target(raw_target)
        self._log(
            LogLevel.INFO,
            "Target parsed",
            {"raw": raw_target, "label": target.label, "suffix": target.suffix,
             "subdomain": target.subdomain},
        )

        candidates = generate_candidates(
            target.label, target.suffix, self._dictionary, limit=self._config.limit
        )
        self._log(
            LogLevel.INFO,
            "Candidates generated",
            {"target": target.name, "count": len(candidates), "limit": self._config.limit},
        )
        return ScanPlan(target=target, candidates=candidates)

    async def execute(
        self,
        plan: ScanPlan,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScanReport:
        """
        Resolve every candidate of a plan and wait for all of them.

        Candidates are updated in place; the report lists them in
        generation order regardless of completion order.
        """
        start_time = time.perf_counter()
        workers = worker_count(self._config.concurrency, len(plan.candidates))

        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            resolver = AvailabilityResolver(
                whois_client=self._whois_client or self._build_whois_client(executor),
                parser=self._parser,
                dns_resolver=self._dns_resolver or self._build_dns_resolver(executor),
                logger=self._logger,
            )
            pool = WorkerPool(
                resolver.resolve,
                concurrency=workers,
                progress_callback=progress_callback,
                logger=self._logger,
            )
            started = await pool.run(plan.candidates)
        finally:
            # Threads of timed-out socket queries finish in the background;
            # waiting for them here would block the event loop
            executor.shutdown(wait=False)

        results = ResultSet(plan.candidates)
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        self._log(
            LogLevel.INFO,
            "Scan finished",
            {"target": plan.target.name, "duration_ms": duration_ms, **results.summary()},
        )
        return ScanReport(
            target=plan.target,
            results=results,
            workers=started,
            duration_ms=duration_ms,
        )

    async def run(
        self,
        raw_target: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScanReport:
        """Parse, generate and resolve in one call."""
        plan = self.prepare(raw_target)
        return await self.execute(plan, progress_callback)

    def _build_whois_client(self, executor: ThreadPoolExecutor) -> WHOISClient:
        whois = self._config.whois
        return WHOISClient(
            timeout=whois.timeout,
            custom_servers=whois.custom_servers or None,
            follow_referrals=whois.follow_referrals,
            simulation_mode=self._config.simulation_mode,
            executor=executor,
        )

    def _build_dns_resolver(self, executor: ThreadPoolExecutor) -> DNSResolver:
        dns_config = self._config.dns
        return DNSResolver(
            nameservers=dns_config.nameservers or None,
            timeout=dns_config.timeout,
            simulation_mode=self._config.simulation_mode,
            executor=executor,
        )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        """Log a message if logger is available."""
        if self._logger:
            self._logger.log(level, "ScanOrchestrator", message, data)
