"""Chooser interface and the candidate filter shared by all choosers."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

# Number of matches a chooser shows at once.
MAX_PROSPECTS = 200


class Chooser(Protocol):
    """Interactive single selection from a list of labels."""

    def choose(self, candidates: Sequence[str], prompt: str) -> Optional[str]:
        """Return the chosen label, or ``None`` if the user cancelled."""
        ...


def _is_subsequence(needle: str, haystack: str) -> bool:
    it = iter(haystack)
    return all(ch in it for ch in needle)


def filter_candidates(query: str, candidates: Sequence[str]) -> List[str]:
    """Return the candidates matching ``query``, best matches first.

    Matching is case-insensitive. An exact match comes first, then substring
    matches, then "flex" matches where the query characters appear in order
    but not contiguously (``sdfile`` matches ``src/deep/file.txt``). Within each
    group the original order is kept. An empty query matches everything.
    """
    if not query:
        return list(candidates)

    needle = query.lower()
    exact: List[str] = []
    substring: List[str] = []
    flex: List[str] = []

    for candidate in candidates:
        lowered = candidate.lower()
        if lowered == needle:
            exact.append(candidate)
        elif needle in lowered:
            substring.append(candidate)
        elif _is_subsequence(needle, lowered):
            flex.append(candidate)

    return exact + substring + flex
