from semlens.core.engine import SemanticEngine
from semlens.core.errors import InvalidArgumentError, SemanticError, TreeCaptureError
from semlens.core.types import (
    AccessibilityNode,
    Bounds,
    ProjectedNode,
    QueryMatch,
    QueryResult,
    RankBy,
    Scope,
    SnapshotResult,
)
from semlens.identity.sid import derive_sid, normalize_label
from semlens.providers.base import TreeProvider
from semlens.providers.playwright import PlaywrightTreeProvider
from semlens.providers.static import StaticTreeProvider

__all__ = [
    "AccessibilityNode",
    "Bounds",
    "InvalidArgumentError",
    "PlaywrightTreeProvider",
    "ProjectedNode",
    "QueryMatch",
    "QueryResult",
    "RankBy",
    "Scope",
    "SemanticEngine",
    "SemanticError",
    "SnapshotResult",
    "StaticTreeProvider",
    "TreeCaptureError",
    "TreeProvider",
    "derive_sid",
    "normalize_label",
]
