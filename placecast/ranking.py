"""Specificity scoring for address geocoding results."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

# Evaluated top-down; the first rule sharing a tag with the result wins.
SPECIFICITY_RULES: tuple[tuple[frozenset[str], int], ...] = (
    (frozenset({"street_address"}), 100),
    (frozenset({"premise", "subpremise"}), 90),
    (frozenset({"route"}), 80),
    (frozenset({"intersection"}), 70),
    (frozenset({"sublocality", "locality"}), 60),
    (frozenset({"political"}), 50),
)
DEFAULT_SCORE = 10


def specificity_score(types: Optional[Iterable[str]]) -> int:
    """Score a result's type tags; street-level beats administrative-level."""
    tags = set(types or ())
    for rule_tags, score in SPECIFICITY_RULES:
        if tags & rule_tags:
            return score
    return DEFAULT_SCORE


def pick_best(results: Optional[Sequence[Mapping[str, Any]]]) -> Optional[Mapping[str, Any]]:
    """Return the highest-scoring raw result, the earliest one on ties."""
    if not results:
        return None
    return max(results, key=lambda r: specificity_score(r.get("types")))
