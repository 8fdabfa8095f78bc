"""Provider for trees that were captured elsewhere (or built by hand)."""

from __future__ import annotations

from typing import Any, Callable, Union

from semlens.core.types import AccessibilityNode, Scope
from semlens.providers.base import TreeProvider

TreeSource = Union[AccessibilityNode, dict, None]


class StaticTreeProvider(TreeProvider):
    """
    Serves a fixed tree, a serialized AX snapshot dict, or whatever a
    zero-argument callable returns at capture time.
    """

    def __init__(self, tree: TreeSource | Callable[[], TreeSource]) -> None:
        self._source = tree

    async def capture_tree(self, scope: Scope) -> AccessibilityNode | None:
        tree: Any = self._source() if callable(self._source) else self._source
        if tree is None:
            return None
        if isinstance(tree, AccessibilityNode):
            return tree
        if isinstance(tree, dict):
            return AccessibilityNode.from_dict(tree)
        raise TypeError(f"Unsupported tree source: {type(tree).__name__}")
