"""Live accessibility tree provider for a Playwright (Chromium) page."""

from __future__ import annotations

import asyncio
import logging

from playwright.async_api import CDPSession, Page

from semlens.core.types import AccessibilityNode, Scope
from semlens.providers._cdp import CDPTree, bounds_from_box_model, build_tree
from semlens.providers.base import TreeProvider

logger = logging.getLogger(__name__)


class PlaywrightTreeProvider(TreeProvider):
    """
    Captures the full accessibility tree over CDP, tagging the root with the
    page's main frame id. With ``include_bounds`` each DOM-backed node gets its
    border box; in viewport scope nodes entirely outside the viewport are
    marked ``offscreen="true"``.
    """

    def __init__(self, page: Page, *, include_bounds: bool = True) -> None:
        self._page = page
        self._include_bounds = include_bounds

    async def capture_tree(self, scope: Scope) -> AccessibilityNode | None:
        cdp = await self._page.context.new_cdp_session(self._page)
        try:
            frame_tree = await cdp.send("Page.getFrameTree")
            result = await cdp.send("Accessibility.getFullAXTree")
            tree = build_tree(result.get("nodes", []))
            if tree.root is None:
                return None

            if not tree.root.frame_id:
                tree.root.frame_id = frame_tree.get("frameTree", {}).get("frame", {}).get("id", "")

            if self._include_bounds or scope == Scope.VIEWPORT:
                await self._attach_bounds(cdp, tree)
        finally:
            await cdp.detach()

        if scope == Scope.VIEWPORT:
            width, height = await self._viewport_size()
            _mark_offscreen(tree.root, width, height)

        return tree.root

    async def _attach_bounds(self, cdp: CDPSession, tree: CDPTree) -> None:
        async def fetch(node: AccessibilityNode, backend_id: int) -> None:
            try:
                box = await cdp.send("DOM.getBoxModel", {"backendNodeId": backend_id})
            except Exception as exc:
                # Nodes without layout (display:none, text runs) have no box model
                logger.debug("No box model for backend node %s: %s", backend_id, exc)
                return
            node.bounds = bounds_from_box_model(box.get("model", {}))

        await asyncio.gather(*(fetch(node, bid) for node, bid in tree.dom_backed))

    async def _viewport_size(self) -> tuple[float, float]:
        size = self._page.viewport_size
        if size is None:
            size = await self._page.evaluate(
                "() => ({width: window.innerWidth, height: window.innerHeight})"
            )
        return size["width"], size["height"]


def _mark_offscreen(root: AccessibilityNode, width: float, height: float) -> None:
    """
    Tag nodes whose box misses the viewport. Nodes without a box (text runs)
    follow their parent.
    """
    stack: list[tuple[AccessibilityNode, bool]] = [(root, False)]
    while stack:
        node, parent_offscreen = stack.pop()
        if node.bounds is not None:
            offscreen = not node.bounds.intersects(width, height)
        else:
            offscreen = parent_offscreen
        if offscreen:
            node.attributes["offscreen"] = "true"
        stack.extend((child, offscreen) for child in node.children)
