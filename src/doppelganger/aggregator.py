"""
Result aggregation.

Holds the candidate list of a finished scan in generation order and offers
the presentation filters. Nothing here touches the network.
"""

from collections.abc import Iterator

from .models import Candidate


class ResultSet:
    """Ordered, read-only view over resolved candidates."""

    def __init__(self, candidates: list[Candidate]) -> None:
        self._candidates = list(candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __getitem__(self, index: int) -> Candidate:
        return self._candidates[index]

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates)

    def filtered(
        self,
        available_only: bool = False,
        registered_only: bool = False,
        live_only: bool = False,
    ) -> list[Candidate]:
        """
        Candidates passing all enabled filters, in generation order.

        With no filter enabled every candidate is returned. Enabling
        ``available_only`` together with either registered filter yields
        an empty list.
        """
        result = []
        for candidate in self._candidates:
            if available_only and not candidate.available:
                continue
            if registered_only and candidate.available:
                continue
            if live_only and not candidate.is_live:
                continue
            result.append(candidate)
        return result

    def available(self) -> list[Candidate]:
        return self.filtered(available_only=True)

    def registered(self) -> list[Candidate]:
        return self.filtered(registered_only=True)

    def live(self) -> list[Candidate]:
        return self.filtered(live_only=True)

    def summary(self) -> dict[str, int]:
        """Counts per status."""
        registered = self.registered()
        return {
            "total": len(self._candidates),
            "available": len(self._candidates) - len(registered),
            "registered": len(registered),
            "live": sum(1 for c in registered if c.is_live),
        }
