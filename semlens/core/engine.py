"""SemanticEngine — snapshot and query entry points."""

from __future__ import annotations

import logging
import secrets
import string
import time
from typing import Iterable

from semlens.core.errors import InvalidArgumentError, TreeCaptureError
from semlens.core.types import AccessibilityNode, QueryResult, RankBy, Scope, SnapshotResult
from semlens.projector.projector import (
    DEFAULT_FIELDS,
    DEFAULT_MAX_NODES,
    DEFAULT_SCAN_MULTIPLIER,
    DEFAULT_SNIPPET_LENGTH,
    project,
)
from semlens.providers.base import TreeProvider
from semlens.query.engine import DEFAULT_MAX_RESULTS, run_query
from semlens.query.scoring import QueryPredicates

logger = logging.getLogger(__name__)

DEFAULT_FRAME_ID = "main"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _random_id(prefix: str) -> str:
    """Opaque per-call id for correlating log lines; not a security boundary."""
    return f"{prefix}_{''.join(secrets.choice(_ID_ALPHABET) for _ in range(6))}"


def _coerce(enum_type, value, name: str):
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_type)
        raise InvalidArgumentError(f"{name} must be one of {allowed}; got {value!r}") from None


def _require_positive(value: int, name: str) -> None:
    if value < 1:
        raise InvalidArgumentError(f"{name} must be >= 1; got {value}")


class SemanticEngine:
    """
    Sits between a tree provider and an automation agent.

    Every call captures a fresh tree and recomputes SIDs from scratch;
    nothing is kept between calls.

    Usage:
        engine = SemanticEngine(PlaywrightTreeProvider(page))
        snap = await engine.snapshot(max_nodes=200)
        result = await engine.query(role="button", label="Submit")
        # result.best.sid → stable handle for the element
    """

    def __init__(
        self,
        provider: TreeProvider,
        *,
        frame_id: str = DEFAULT_FRAME_ID,
        max_nodes: int = DEFAULT_MAX_NODES,
        scan_multiplier: int = DEFAULT_SCAN_MULTIPLIER,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> None:
        _require_positive(max_nodes, "max_nodes")
        _require_positive(scan_multiplier, "scan_multiplier")
        _require_positive(max_results, "max_results")
        _require_positive(snippet_length, "snippet_length")
        self._provider = provider
        self.frame_id = frame_id
        self.max_nodes = max_nodes
        self.scan_multiplier = scan_multiplier
        self.snippet_length = snippet_length
        self.max_results = max_results

    async def snapshot(
        self,
        *,
        scope: Scope | str = Scope.DOCUMENT,
        within_sid: str | None = None,
        fields: Iterable[str] | None = None,
        max_nodes: int | None = None,
        cursor: str | None = None,
    ) -> SnapshotResult:
        """Return one page of identified nodes from a freshly captured tree."""
        scope = _coerce(Scope, scope, "scope")
        max_nodes = self.max_nodes if max_nodes is None else max_nodes
        _require_positive(max_nodes, "max_nodes")

        t0 = time.monotonic()
        root = await self._capture(scope)

        snapshot_id = _random_id("snap")
        projection = project(
            root,
            frame_id=self.frame_id,
            within_sid=within_sid,
            fields=DEFAULT_FIELDS if fields is None else fields,
            max_nodes=max_nodes,
            cursor=cursor,
            scope=scope,
            scan_multiplier=self.scan_multiplier,
            snippet_length=self.snippet_length,
        )

        logger.debug("Created semantic snapshot: %s", snapshot_id)
        logger.debug(
            "Found %d semantic nodes%s",
            projection.total,
            " (truncated)" if projection.truncated else "",
        )
        logger.debug(
            "Returning nodes %d to %d",
            projection.start,
            projection.start + len(projection.nodes) - 1,
        )

        return SnapshotResult(
            snapshot_id=snapshot_id,
            nodes=projection.nodes,
            next_cursor=projection.next_cursor,
            total_nodes=projection.total,
            truncated=projection.truncated,
            latency_ms=(time.monotonic() - t0) * 1000,
        )

    async def query(
        self,
        *,
        role: str | None = None,
        label: str | None = None,
        text: str | None = None,
        attributes: dict[str, str] | None = None,
        within_sid: str | None = None,
        rank_by: RankBy | str = RankBy.SEMANTIC_SCORE,
        multiple: bool = False,
        max: int | None = None,
        explain: bool = False,
    ) -> QueryResult:
        """
        Score every node against the given predicates and return ranked matches.

        Predicates add up rather than filter. An empty result is a success.
        """
        rank_by = _coerce(RankBy, rank_by, "rank_by")
        max_results = self.max_results if max is None else max
        _require_positive(max_results, "max")

        predicates = QueryPredicates(
            role=role,
            label=label,
            text=text,
            attributes=dict(attributes or {}),
        )

        t0 = time.monotonic()
        root = await self._capture(Scope.DOCUMENT)

        query_id = _random_id("query")
        matches, total = run_query(
            root,
            predicates,
            frame_id=self.frame_id,
            within_sid=within_sid,
            rank_by=rank_by,
            multiple=multiple,
            max_results=max_results,
            explain=explain,
        )

        result = QueryResult(
            query_id=query_id,
            matches=matches,
            total_matches=total,
            explain=explain,
            latency_ms=(time.monotonic() - t0) * 1000,
        )

        if not multiple and result.best is not None:
            logger.debug(
                "Query %s: found best match %s (confidence: %s)",
                query_id, result.best.sid, result.best.confidence,
            )
        else:
            logger.debug(
                "Query %s: found %d matches, returning top %d",
                query_id, total, len(matches),
            )
        return result

    async def _capture(self, scope: Scope) -> AccessibilityNode:
        try:
            root = await self._provider.capture_tree(scope)
        except TreeCaptureError:
            raise
        except Exception as exc:
            logger.warning("Tree provider failed: %s", exc)
            raise TreeCaptureError(f"Failed to capture accessibility tree: {exc}") from exc
        if root is None:
            logger.warning("Tree provider returned no accessibility tree")
            raise TreeCaptureError()
        return root
