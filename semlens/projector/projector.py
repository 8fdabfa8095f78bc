"""Tree projector — flattens a captured tree into paginated, identified nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from semlens.core.types import AccessibilityNode, ProjectedNode, Scope
from semlens.core.walk import VisitedNode, walk
from semlens.projector.cursor import format_cursor, parse_cursor

DEFAULT_FIELDS: tuple[str, ...] = ("sid", "role", "label", "textSnippet", "bounds", "frameId")
DEFAULT_MAX_NODES = 5000
DEFAULT_SCAN_MULTIPLIER = 5
DEFAULT_SNIPPET_LENGTH = 50

_ELLIPSIS = "..."


@dataclass
class Projection:
    nodes: list[ProjectedNode] = field(default_factory=list)  # the requested page
    next_cursor: str | None = None
    total: int = 0  # materialized nodes before slicing
    start: int = 0
    truncated: bool = False


def text_snippet(node: AccessibilityNode, max_length: int = DEFAULT_SNIPPET_LENGTH) -> str | None:
    """First non-empty of name/description/value, cut to max_length plus an ellipsis."""
    text = node.name or node.description or node.value
    if not text:
        return None
    if len(text) > max_length:
        return text[:max_length] + _ELLIPSIS
    return text


def project(
    root: AccessibilityNode,
    *,
    frame_id: str,
    within_sid: str | None = None,
    fields: Iterable[str] = DEFAULT_FIELDS,
    max_nodes: int = DEFAULT_MAX_NODES,
    cursor: str | None = None,
    scope: Scope = Scope.DOCUMENT,
    scan_multiplier: int = DEFAULT_SCAN_MULTIPLIER,
    snippet_length: int = DEFAULT_SNIPPET_LENGTH,
) -> Projection:
    """
    Walk ``root`` depth-first and return one page of projected nodes.

    Nodes with no role, label or text are skipped but their children are
    still visited. Traversal stops once enough nodes are materialized to
    fill the requested window ``scan_multiplier`` times over.
    """
    selected = frozenset(fields)
    start = parse_cursor(cursor)
    limit = start + max_nodes * scan_multiplier

    materialized: list[ProjectedNode] = []
    truncated = False

    for visited in walk(root, frame_id, within_sid):
        if not visited.in_scope:
            continue
        if scope == Scope.VIEWPORT and visited.node.attributes.get("offscreen") == "true":
            continue
        projected = _materialize(visited, selected, snippet_length)
        if projected is None:
            continue
        materialized.append(projected)
        # One past the limit, so a truncated list always yields a next cursor
        if len(materialized) > limit:
            truncated = True
            break

    end = min(start + max_nodes, len(materialized))
    page = materialized[start:end]
    next_cursor = format_cursor(end) if end < len(materialized) else None

    return Projection(
        nodes=page,
        next_cursor=next_cursor,
        total=len(materialized),
        start=start,
        truncated=truncated,
    )


def _materialize(
    visited: VisitedNode,
    fields: frozenset[str],
    snippet_length: int,
) -> ProjectedNode | None:
    node = visited.node
    snippet = text_snippet(node, snippet_length)
    if not (node.role or node.name or snippet):
        return None

    projected = ProjectedNode()
    if "sid" in fields:
        projected.sid = visited.sid
    if "role" in fields:
        projected.role = node.role
    if "label" in fields:
        projected.label = node.name
    if "textSnippet" in fields and snippet:
        projected.text_snippet = snippet
    if "bounds" in fields and node.bounds is not None:
        projected.bounds = node.bounds
    if "frameId" in fields:
        projected.frame_id = visited.frame_id
    return projected
