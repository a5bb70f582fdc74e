"""
Property-based tests for the scan orchestrator.

End-to-end scans run either in simulation mode or with injected fake
collaborators; no test touches the network.
"""

import asyncio
import io
import string
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from doppelganger.config import ScanConfig
from doppelganger.dictionary import build_dictionary
from doppelganger.enums import LogLevel
from doppelganger.exceptions import ConfigurationError, NetworkError, ValidationError
from doppelganger.orchestrator import ScanOrchestrator
from doppelganger.permutations import count_permutations
from doppelganger.scan_logger import ScanLogger


class SlowFakeWHOIS:
    """Registered iff an ASCII-only name contains a digit; later names answer first."""

    def __init__(self) -> None:
        self.queries: list[str] = []

    async def query(self, domain: str) -> str:
        self.queries.append(domain)
        await asyncio.sleep(0.001 * (10 - len(self.queries) % 10))
        if not domain.startswith("xn--") and any(c.isdigit() for c in domain):
            return f"Domain Name: {domain}\nRegistrar: Fake Registrar\n"
        raise NetworkError(code="network_error", message="unreachable")


class FakeDNS:
    async def lookup_host(self, name: str) -> list[str]:
        return ["192.0.2.10"]

    async def lookup_addr(self, address: str) -> list[str]:
        return ["host.example.net"]


class TestSimulatedScanProperty:
    """
    Property 31: A simulated scan resolves every generated candidate.
    """

    @given(
        label=st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=8),
        limit=st.integers(min_value=0, max_value=15),
        workers=st.integers(min_value=0, max_value=6),
    )
    @settings(max_examples=30, deadline=None)
    def test_every_candidate_resolved(self, label: str, limit: int, workers: int) -> None:
        """Property 31a: Count honors the limit and all candidates are resolved."""
        config = ScanConfig(limit=limit, concurrency=workers, simulation_mode=True)
        orchestrator = ScanOrchestrator(config)

        report = asyncio.run(orchestrator.run(f"{label}.com"))

        uncapped = count_permutations(label, orchestrator.dictionary)
        expected = min(limit, uncapped) if limit > 0 else uncapped
        assert report.total == expected
        assert all(c.resolved for c in report.results)
        # Simulated WHOIS reports every ordinary name as registered
        assert all(not c.available and c.is_live for c in report.results)

    def test_progress_reaches_total(self) -> None:
        config = ScanConfig(limit=10, concurrency=3, simulation_mode=True)
        calls: list[tuple[int, int]] = []

        report = asyncio.run(
            ScanOrchestrator(config).run(
                "example.com", progress_callback=lambda d, t: calls.append((d, t))
            )
        )

        assert calls[-1] == (10, 10)
        assert report.workers == 3

    def test_available_prefix_in_simulation(self) -> None:
        config = ScanConfig(simulation_mode=True)
        dictionary = build_dictionary({"x": ["y"]})

        report = asyncio.run(ScanOrchestrator(config, dictionary=dictionary).run("available-x.com"))

        assert [c.domain for c in report.results] == ["available-y.com"]
        assert report.results[0].available is True
        assert report.results[0].addresses == []


class TestInjectedCollaboratorsProperty:
    """
    Property 32: Results keep generation order whatever the completion order.
    """

    def test_order_and_status(self) -> None:
        dictionary = build_dictionary({"e": ["3", "е"], "a": ["4", "а"]})
        orchestrator = ScanOrchestrator(
            ScanConfig(concurrency=4),
            dictionary=dictionary,
            whois_client=SlowFakeWHOIS(),
            dns_resolver=FakeDNS(),
        )

        report = asyncio.run(orchestrator.run("https://www.example.com/"))

        assert report.target.name == "example.com"
        assert report.target.subdomain == "www"
        assert [c.domain for c in report.results] == [
            "3xample.com",
            "еxample.com",
            "ex4mple.com",
            "exаmple.com",
            "exampl3.com",
            "examplе.com",
        ]
        statuses = [c.status.value for c in report.results]
        assert statuses == [
            "registered",
            "available",
            "registered",
            "available",
            "registered",
            "available",
        ]
        for candidate in report.results.registered():
            assert candidate.addresses == ["192.0.2.10"]
            assert candidate.names == ["host.example.net"]
            assert candidate.whois.registrar == "Fake Registrar"

    def test_logging(self) -> None:
        logger = ScanLogger(level=LogLevel.INFO, output_stream=io.StringIO())
        config = ScanConfig(limit=2, simulation_mode=True)

        asyncio.run(ScanOrchestrator(config, logger=logger).run("example.com"))

        messages = [e.message for e in logger.entries]
        assert messages == ["Target parsed", "Candidates generated", "Scan finished"]
        assert logger.entries[-1].data["total"] == 2


class RecordingExecutor(ThreadPoolExecutor):
    """Thread pool that records how it was shut down."""

    shutdown_calls: list[bool] = []

    def shutdown(self, wait: bool = True, **kwargs) -> None:
        RecordingExecutor.shutdown_calls.append(wait)
        super().shutdown(wait=wait, **kwargs)


class TestExecutorLifecycleProperty:
    """
    Property 34: The lookup thread pool is released without blocking the loop.
    """

    def test_shutdown_does_not_wait(self) -> None:
        RecordingExecutor.shutdown_calls = []
        config = ScanConfig(limit=4, concurrency=2, simulation_mode=True)

        with patch("doppelganger.orchestrator.ThreadPoolExecutor", RecordingExecutor):
            report = asyncio.run(ScanOrchestrator(config).run("example.com"))

        assert report.total == 4
        assert RecordingExecutor.shutdown_calls == [False]

    def test_shutdown_after_failed_scan(self) -> None:
        RecordingExecutor.shutdown_calls = []
        orchestrator = ScanOrchestrator(ScanConfig(limit=2, simulation_mode=True))
        plan = orchestrator.prepare("example.com")

        async def broken_run(self, items) -> int:
            raise RuntimeError("pool crashed")

        with patch("doppelganger.orchestrator.ThreadPoolExecutor", RecordingExecutor), patch(
            "doppelganger.orchestrator.WorkerPool.run", broken_run
        ):
            with pytest.raises(RuntimeError):
                asyncio.run(orchestrator.execute(plan))

        assert RecordingExecutor.shutdown_calls == [False]


class TestFatalErrorsProperty:
    """
    Property 33: Configuration errors stop the scan before any lookup.
    """

    def test_invalid_target(self) -> None:
        whois = SlowFakeWHOIS()
        orchestrator = ScanOrchestrator(ScanConfig(), whois_client=whois, dns_resolver=FakeDNS())

        with pytest.raises(ValidationError):
            asyncio.run(orchestrator.run("not a domain"))
        assert whois.queries == []

    def test_missing_dictionary_file(self, tmp_path) -> None:
        config = ScanConfig(dictionary_path=tmp_path / "missing.json")
        with pytest.raises(ConfigurationError):
            ScanOrchestrator(config)

    def test_no_candidates(self) -> None:
        orchestrator = ScanOrchestrator(
            ScanConfig(simulation_mode=True), dictionary=build_dictionary({"z": ["2"]})
        )

        report = asyncio.run(orchestrator.run("example.com"))

        assert report.total == 0
        assert report.workers == 0
