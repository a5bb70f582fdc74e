"""
Property-based tests for result aggregation and presentation filters.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from doppelganger.aggregator import ResultSet
from doppelganger.models import Candidate


def candidates_strategy() -> st.SearchStrategy[list[Candidate]]:
    """Generate uniquely named resolved candidates in any of the three states."""

    def build(i: int, state: str) -> Candidate:
        if state == "available":
            return Candidate(domain=f"c{i}.com", ascii=f"c{i}.com", available=True, resolved=True)
        addresses = ["192.0.2.1"] if state == "live" else []
        return Candidate(
            domain=f"c{i}.com",
            ascii=f"c{i}.com",
            available=False,
            addresses=addresses,
            resolved=True,
        )

    return st.lists(
        st.sampled_from(["available", "registered", "live"]), max_size=40
    ).map(lambda states: [build(i, s) for i, s in enumerate(states)])


class TestFilterProperty:
    """
    Property 22: Filters select by status and keep generation order.
    """

    @given(candidates=candidates_strategy())
    @settings(max_examples=100)
    def test_no_filter_returns_everything(self, candidates: list[Candidate]) -> None:
        results = ResultSet(candidates)
        assert results.filtered() == candidates
        assert list(results) == candidates
        assert len(results) == len(candidates)

    @given(candidates=candidates_strategy())
    @settings(max_examples=100)
    def test_partition(self, candidates: list[Candidate]) -> None:
        """Property 22a: available and registered partition the set."""
        results = ResultSet(candidates)
        available = results.available()
        registered = results.registered()

        assert all(c.available for c in available)
        assert not any(c.available for c in registered)
        assert len(available) + len(registered) == len(candidates)

    @given(candidates=candidates_strategy())
    @settings(max_examples=100)
    def test_live_is_registered_with_addresses(self, candidates: list[Candidate]) -> None:
        """Property 22b: live = registered and at least one address."""
        live = ResultSet(candidates).live()
        assert live == [c for c in candidates if not c.available and c.addresses]

    @given(candidates=candidates_strategy())
    @settings(max_examples=100)
    def test_filters_preserve_order(self, candidates: list[Candidate]) -> None:
        """Property 22c: Each filtered list is a subsequence of the input."""
        results = ResultSet(candidates)
        for subset in (results.available(), results.registered(), results.live()):
            positions = [candidates.index(c) for c in subset]
            assert positions == sorted(positions)

    @given(candidates=candidates_strategy())
    @settings(max_examples=100)
    def test_summary_counts(self, candidates: list[Candidate]) -> None:
        summary = ResultSet(candidates).summary()
        assert summary["total"] == len(candidates)
        assert summary["available"] == sum(1 for c in candidates if c.available)
        assert summary["registered"] == summary["total"] - summary["available"]
        assert summary["live"] == sum(1 for c in candidates if c.is_live)

    def test_conflicting_filters_yield_nothing(self) -> None:
        results = ResultSet([
            Candidate(domain="a.com", available=True),
            Candidate(domain="b.com", available=False, addresses=["192.0.2.1"]),
        ])
        assert results.filtered(available_only=True, registered_only=True) == []
