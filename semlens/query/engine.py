"""Query engine — scores every in-scope node and returns ranked matches."""

from __future__ import annotations

from semlens.core.types import AccessibilityNode, QueryMatch, RankBy
from semlens.core.walk import walk
from semlens.query.ranking import rank
from semlens.query.scoring import QueryPredicates, is_candidate, score_node

DEFAULT_MAX_RESULTS = 10


def find_matches(
    root: AccessibilityNode,
    predicates: QueryPredicates,
    *,
    frame_id: str,
    within_sid: str | None = None,
    explain: bool = False,
) -> list[QueryMatch]:
    """All candidate matches in traversal order."""
    matches: list[QueryMatch] = []
    for visited in walk(root, frame_id, within_sid):
        if not visited.in_scope:
            continue
        node = visited.node
        score = score_node(node, predicates)
        if not is_candidate(node, score):
            continue
        matches.append(QueryMatch(
            sid=visited.sid,
            role=node.role,
            label=node.name,
            score=score.points,
            confidence=score.confidence,
            explanation=score.explanation if explain else None,
        ))
    return matches


def run_query(
    root: AccessibilityNode,
    predicates: QueryPredicates,
    *,
    frame_id: str,
    within_sid: str | None = None,
    rank_by: RankBy = RankBy.SEMANTIC_SCORE,
    multiple: bool = False,
    max_results: int = DEFAULT_MAX_RESULTS,
    explain: bool = False,
) -> tuple[list[QueryMatch], int]:
    """
    Return (shaped matches, total candidate count).

    With ``multiple`` off only the single best match is returned; the total
    still counts every candidate.
    """
    matches = find_matches(
        root,
        predicates,
        frame_id=frame_id,
        within_sid=within_sid,
        explain=explain,
    )
    ranked = rank(matches, rank_by)[:max_results]
    if not multiple:
        ranked = ranked[:1]
    return ranked, len(matches)
