"""Shared types and dataclasses for semlens."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Scope(str, Enum):
    VIEWPORT = "viewport"
    DOCUMENT = "document"


class RankBy(str, Enum):
    SEMANTIC_SCORE = "semantic_score"
    PROXIMITY = "proximity"  # SID order; no geometry involved
    VISIBILITY = "visibility"  # confidence order; no render state involved


# Attribute names copied off a serialized AX node when present
ATTRIBUTE_CANDIDATES: tuple[str, ...] = (
    "disabled",
    "expanded",
    "focused",
    "modal",
    "multiline",
    "multiselectable",
    "readonly",
    "required",
    "selected",
    "checked",
    "pressed",
    "level",
    "valuemin",
    "valuemax",
    "autocomplete",
    "haspopup",
    "invalid",
    "orientation",
)


def ax_string(value: Any) -> str:
    """
    Coerce an optional accessibility field to a plain string.

    AX payloads wrap names, values and properties inconsistently: bare
    strings, numbers, booleans, or ``{"type": ..., "value": ...}`` envelopes.
    Anything unrecognised becomes "".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, dict) and "value" in value:
        return ax_string(value["value"])
    return ""


@dataclass
class Bounds:
    x: float
    y: float
    width: float
    height: float

    def intersects(self, width: float, height: float) -> bool:
        """True if this box overlaps the rectangle (0, 0, width, height)."""
        return (
            self.x < width
            and self.y < height
            and self.x + self.width > 0
            and self.y + self.height > 0
        )

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class AccessibilityNode:
    """A single node of a captured accessibility tree."""

    role: str = ""
    name: str = ""  # accessible name, used as the label
    description: str = ""
    value: str = ""
    children: list[AccessibilityNode] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)  # lower-cased names
    bounds: Bounds | None = None  # supplied by the provider, never computed here
    frame_id: str = ""  # "" inherits the parent's frame

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> AccessibilityNode:
        """Build a tree from a serialized AX node (Puppeteer/Playwright snapshot shape)."""
        attributes: dict[str, str] = {}
        for candidate in ATTRIBUTE_CANDIDATES:
            if raw.get(candidate) is None:
                continue
            attributes[candidate] = ax_string(raw[candidate])

        for prop in raw.get("properties") or []:
            name = prop.get("name")
            if not isinstance(name, str) or not name:
                continue
            value = ax_string(prop.get("value"))
            if value == "":
                continue
            attributes[name.lower()] = value

        bounds = None
        raw_bounds = raw.get("bounds")
        if raw_bounds:
            bounds = Bounds(
                x=raw_bounds.get("x") or 0,
                y=raw_bounds.get("y") or 0,
                width=raw_bounds.get("width") or 0,
                height=raw_bounds.get("height") or 0,
            )

        return cls(
            role=ax_string(raw.get("role")),
            name=ax_string(raw.get("name")),
            description=ax_string(raw.get("description")),
            value=ax_string(raw.get("value")),
            children=[cls.from_dict(c) for c in raw.get("children") or []],
            attributes=attributes,
            bounds=bounds,
            frame_id=ax_string(raw.get("frameId")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "name": self.name,
            "description": self.description,
            "value": self.value,
            "attributes": self.attributes,
            "bounds": self.bounds.to_dict() if self.bounds else None,
            "frameId": self.frame_id,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class ProjectedNode:
    """A snapshot entry; only the fields the caller asked for are set."""

    sid: str | None = None
    role: str | None = None
    label: str | None = None
    text_snippet: str | None = None
    bounds: Bounds | None = None
    frame_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.sid is not None:
            result["sid"] = self.sid
        if self.role is not None:
            result["role"] = self.role
        if self.label is not None:
            result["label"] = self.label
        if self.text_snippet is not None:
            result["textSnippet"] = self.text_snippet
        if self.bounds is not None:
            result["bounds"] = self.bounds.to_dict()
        if self.frame_id is not None:
            result["frameId"] = self.frame_id
        return result


@dataclass
class QueryMatch:
    sid: str
    role: str
    label: str
    score: int
    confidence: float  # score / 100, saturated at 1.0
    explanation: str | None = None  # matched-predicate reasons, comma-joined

    def to_dict(self) -> dict[str, Any]:
        return {
            "sid": self.sid,
            "role": self.role,
            "label": self.label,
            "confidence": self.confidence,
            "score": self.score,
        }


@dataclass
class SnapshotResult:
    """What SemanticEngine.snapshot() returns."""

    snapshot_id: str
    nodes: list[ProjectedNode]
    next_cursor: str | None
    total_nodes: int = 0  # materialized before the pagination slice
    truncated: bool = False  # traversal hit the safety valve
    latency_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "snapshot_id": self.snapshot_id,
            "nodes": [n.to_dict() for n in self.nodes],
            "next_cursor": self.next_cursor,
        }


@dataclass
class QueryResult:
    """What SemanticEngine.query() returns."""

    query_id: str
    matches: list[QueryMatch]
    total_matches: int = 0  # every candidate, before shaping
    explain: bool = False
    latency_ms: float = 0.0

    @property
    def sids(self) -> list[str]:
        return [m.sid for m in self.matches]

    @property
    def explanations(self) -> list[str] | None:
        if not self.explain:
            return None
        return [m.explanation or "" for m in self.matches]

    @property
    def best(self) -> QueryMatch | None:
        return self.matches[0] if self.matches else None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "sids": self.sids,
            "elements": [m.to_dict() for m in self.matches],
        }
        if self.explain:
            result["explanations"] = self.explanations
        return result
