"""Ranking policies for query matches."""

from __future__ import annotations

from semlens.core.types import QueryMatch, RankBy


def rank(matches: list[QueryMatch], rank_by: RankBy) -> list[QueryMatch]:
    """
    Return ``matches`` ordered by the chosen policy. Sorting is stable, so
    ties keep traversal order.

    PROXIMITY and VISIBILITY are weak stand-ins: the engine has neither
    geometry nor render state, so they order by SID and by confidence.
    """
    if rank_by == RankBy.SEMANTIC_SCORE:
        return sorted(matches, key=lambda m: m.score, reverse=True)
    if rank_by == RankBy.PROXIMITY:
        return sorted(matches, key=lambda m: m.sid)
    if rank_by == RankBy.VISIBILITY:
        return sorted(matches, key=lambda m: m.confidence, reverse=True)
    raise ValueError(f"Unknown ranking policy: {rank_by!r}")
