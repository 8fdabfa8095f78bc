"""
Conversion of a CDP ``Accessibility.getFullAXTree`` payload into AccessibilityNode trees.

Playwright removed page.accessibility.snapshot() in 1.46, so the live provider
reads the full tree over the Chrome DevTools Protocol and rebuilds the
hierarchy from the flat node list here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from semlens.core.types import AccessibilityNode, Bounds, ax_string

# Internal Chrome role names → normalised role strings
_INTERNAL_ROLE_MAP: dict[str, str] = {
    "RootWebArea": "document",
    "StaticText": "text",
    "LineBreak": "text",
    "InlineTextBox": "text",
    "GenericContainer": "generic",
    "LayoutTable": "table",
    "LayoutTableRow": "row",
    "LayoutTableCell": "cell",
}


@dataclass
class CDPTree:
    root: AccessibilityNode | None
    # (node, backendDOMNodeId) for nodes backed by a DOM element
    dom_backed: list[tuple[AccessibilityNode, int]] = field(default_factory=list)


def _get_attributes(raw_node: dict) -> dict[str, str]:
    """Flatten the CDP properties array into lower-cased {name: value} strings."""
    attributes: dict[str, str] = {}
    for prop in raw_node.get("properties", []):
        name = prop.get("name")
        if not name:
            continue
        value = ax_string(prop.get("value"))
        if value == "":
            continue
        attributes[name.lower()] = value
    return attributes


def build_tree(nodes: list[dict]) -> CDPTree:
    if not nodes:
        return CDPTree(root=None)
    by_id: dict[str, dict] = {n["nodeId"]: n for n in nodes}
    # Root = the single node with no parentId (or empty string parentId)
    root_raw = next(
        (n for n in nodes if not n.get("parentId")),
        nodes[0],
    )
    tree = CDPTree(root=None)
    tree.root = _convert_node(root_raw, by_id, tree)
    return tree


def _convert_node(raw: dict, by_id: dict[str, dict], tree: CDPTree) -> AccessibilityNode:
    raw_role = ax_string(raw.get("role")) or "generic"
    role = _INTERNAL_ROLE_MAP.get(raw_role, raw_role)

    node = AccessibilityNode(
        role=role,
        name=ax_string(raw.get("name")),
        description=ax_string(raw.get("description")),
        value=ax_string(raw.get("value")),
        attributes=_get_attributes(raw),
        frame_id=raw.get("frameId", "") or "",
    )

    backend_id: Any = raw.get("backendDOMNodeId")
    if isinstance(backend_id, int):
        tree.dom_backed.append((node, backend_id))

    # Ignored nodes are skipped but their non-ignored descendants are kept
    for child_id in raw.get("childIds", []):
        child_raw = by_id.get(child_id)
        if child_raw is None:
            continue
        if child_raw.get("ignored"):
            node.children.extend(_collect_unignored(child_raw, by_id, tree))
        else:
            node.children.append(_convert_node(child_raw, by_id, tree))

    return node


def _collect_unignored(
    ignored_node: dict,
    by_id: dict[str, dict],
    tree: CDPTree,
) -> list[AccessibilityNode]:
    """Return non-ignored descendants of an ignored node, flattened one level up."""
    result: list[AccessibilityNode] = []
    for child_id in ignored_node.get("childIds", []):
        child_raw = by_id.get(child_id)
        if child_raw is None:
            continue
        if child_raw.get("ignored"):
            result.extend(_collect_unignored(child_raw, by_id, tree))
        else:
            result.append(_convert_node(child_raw, by_id, tree))
    return result


def bounds_from_box_model(model: dict) -> Bounds | None:
    """Border-box bounds from a ``DOM.getBoxModel`` result's ``model`` entry."""
    quad = model.get("border") or model.get("content")
    if not quad or len(quad) < 8:
        return None
    xs = quad[0::2]
    ys = quad[1::2]
    return Bounds(
        x=min(xs),
        y=min(ys),
        width=model.get("width", max(xs) - min(xs)),
        height=model.get("height", max(ys) - min(ys)),
    )
