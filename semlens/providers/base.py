"""Abstract tree provider."""

from __future__ import annotations

from abc import ABC, abstractmethod

from semlens.core.types import AccessibilityNode, Scope


class TreeProvider(ABC):
    """Supplies the accessibility tree the engine identifies and queries."""

    @abstractmethod
    async def capture_tree(self, scope: Scope) -> AccessibilityNode | None:
        """Return the current tree, or None if no tree is available."""
        ...
