"""Exceptions raised by the semantic engine."""

from __future__ import annotations


class SemanticError(Exception):
    """Base class for engine errors. ``code`` is the stable, user-facing error name."""

    code = "semantic_error"


class TreeCaptureError(SemanticError):
    """The tree provider returned no tree or raised while capturing one."""

    code = "tree_capture_failed"

    def __init__(self, message: str = "Failed to capture accessibility tree") -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(SemanticError, ValueError):
    """A snapshot/query argument is out of range or not a known option."""

    code = "invalid_argument"
