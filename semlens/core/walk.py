"""Depth-first traversal shared by the projector and the query engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from semlens.core.types import AccessibilityNode
from semlens.identity.sid import derive_sid, format_segment


@dataclass
class VisitedNode:
    node: AccessibilityNode
    segments: tuple[str, ...]  # path from the root; empty for the root itself
    sid: str
    frame_id: str
    in_scope: bool


def walk(
    root: AccessibilityNode,
    frame_id: str,
    within_sid: str | None = None,
) -> Iterator[VisitedNode]:
    """
    Yield every node in pre-order with its derived SID.

    Without ``within_sid`` every node is in scope. With it, scope turns on at
    the node whose SID equals ``within_sid`` and covers only that node's
    subtree. Uses an explicit stack so deep trees don't hit the recursion limit.
    """
    # (node, segments, inherited frame, parent in scope)
    stack: list[tuple[AccessibilityNode, tuple[str, ...], str, bool]] = [
        (root, (), frame_id, within_sid is None)
    ]
    while stack:
        node, segments, inherited_frame, parent_in_scope = stack.pop()
        node_frame = node.frame_id or inherited_frame
        sid = derive_sid(node_frame, segments, node.role, node.name, node.description)
        in_scope = parent_in_scope or sid == within_sid

        yield VisitedNode(
            node=node,
            segments=segments,
            sid=sid,
            frame_id=node_frame,
            in_scope=in_scope,
        )

        for index in range(len(node.children) - 1, -1, -1):
            child = node.children[index]
            stack.append((
                child,
                segments + (format_segment(child.role, index),),
                node_frame,
                in_scope,
            ))
