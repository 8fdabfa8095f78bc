"""SID derivation — stable, content-derived identifiers for accessibility nodes."""

from __future__ import annotations

import base64
import hashlib
import re
from typing import Sequence

SID_PREFIX = "sid_"
SID_TOKEN_LENGTH = 24

_SEPARATOR = "||"
_WHITESPACE = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Lowercase, trim, collapse internal whitespace to single spaces."""
    return _WHITESPACE.sub(" ", label.lower().strip())


def format_segment(role: str, index: int) -> str:
    """One path step: the child's role qualified by its position under the parent."""
    return f"{role or 'node'}[{index}]"


def format_path(segments: Sequence[str]) -> str:
    """Join path segments into an absolute AX path; the root is "/"."""
    return "/" + "/".join(segments)


def derive_sid(
    frame_id: str,
    segments: Sequence[str],
    role: str,
    label: str,
    description: str,
) -> str:
    """
    Map (frame, path, role, label, description) to a SID.

    The SID is a fingerprint, not a guaranteed-unique key: two nodes with the
    same frame, path, role, label and description share one.
    """
    hash_input = _SEPARATOR.join((
        frame_id,
        format_path(segments),
        role,
        normalize_label(label),
        description,
    ))
    digest = hashlib.sha256(hash_input.encode("utf-8")).digest()
    token = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
    return f"{SID_PREFIX}{token[:SID_TOKEN_LENGTH]}"


def is_sid(value: str) -> bool:
    return value.startswith(SID_PREFIX) and len(value) == len(SID_PREFIX) + SID_TOKEN_LENGTH
