"""
Permutation generator.

Produces doppelganger candidates by replacing exactly one character of the
target label with a look-alike from the substitution dictionary.
"""

from collections.abc import Mapping, Sequence

from .models import Candidate


def count_permutations(label: str, dictionary: Mapping[str, Sequence[str]]) -> int:
    """Return the uncapped number of candidates for a label."""
    return sum(len(dictionary.get(char, ())) for char in label)


def generate_candidates(
    label: str,
    suffix: str,
    dictionary: Mapping[str, Sequence[str]],
    limit: int = 0,
) -> list[Candidate]:
    """
    Generate single-substitution candidates for a label.

    Positions are walked left to right and substitutes in dictionary order,
    so the output (and any truncation) is reproducible.

    Args:
        label: Registrable label, e.g. 'example'
        suffix: Public suffix, e.g. 'com'
        dictionary: Character to ordered substitutes mapping
        limit: Stop once this many candidates exist (<= 0 means no cap)

    Returns:
        Candidates with only ``domain`` populated
    """
    if not label:
        raise ValueError("label must not be empty")
    if not suffix:
        raise ValueError("suffix must not be empty")

    candidates: list[Candidate] = []
    for i, char in enumerate(label):
        for sub in dictionary.get(char, ()):
            candidates.append(
                Candidate(domain=f"{label[:i]}{sub}{label[i + 1:]}.{suffix}")
            )
            if limit > 0 and len(candidates) == limit:
                return candidates
    return candidates
