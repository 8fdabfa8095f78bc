from semlens.providers.base import TreeProvider
from semlens.providers.playwright import PlaywrightTreeProvider
from semlens.providers.static import StaticTreeProvider

__all__ = ["PlaywrightTreeProvider", "StaticTreeProvider", "TreeProvider"]
