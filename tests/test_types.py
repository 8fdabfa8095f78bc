"""Tests for the data model: AX field coercion and serialized-tree conversion."""

import pytest

from semlens.core.types import (
    AccessibilityNode,
    Bounds,
    ProjectedNode,
    QueryMatch,
    QueryResult,
    SnapshotResult,
    ax_string,
)


class TestAxString:
    @pytest.mark.parametrize("raw, expected", [
        (None, ""),
        ("Submit", "Submit"),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (2.0, "2"),
        (0.5, "0.5"),
        ({"type": "computedString", "value": "Name"}, "Name"),
        ({"value": {"value": True}}, "true"),
        ({"type": "idref"}, ""),
        (["list"], ""),
    ])
    def test_coercion(self, raw, expected):
        assert ax_string(raw) == expected


class TestFromDict:
    def test_basic_fields(self):
        node = AccessibilityNode.from_dict({
            "role": "textbox",
            "name": "Search",
            "description": "Find products",
            "value": "laptop",
        })
        assert (node.role, node.name, node.description, node.value) == (
            "textbox", "Search", "Find products", "laptop",
        )
        assert node.children == []
        assert node.bounds is None

    def test_missing_fields_are_empty_strings(self):
        node = AccessibilityNode.from_dict({})
        assert (node.role, node.name, node.description, node.value) == ("", "", "", "")

    def test_candidate_attributes(self):
        node = AccessibilityNode.from_dict({
            "role": "checkbox",
            "name": "Agree",
            "checked": True,
            "disabled": False,
            "level": 2,
            "url": "https://example.com",  # not a candidate
        })
        assert node.attributes == {"checked": "true", "disabled": "false", "level": "2"}

    def test_properties_are_lowercased_and_empty_skipped(self):
        node = AccessibilityNode.from_dict({
            "role": "button",
            "properties": [
                {"name": "HasPopup", "value": {"type": "token", "value": "menu"}},
                {"name": "busy", "value": {"type": "boolean", "value": ""}},
                {"value": "nameless"},
            ],
        })
        assert node.attributes == {"haspopup": "menu"}

    def test_children_and_bounds(self):
        node = AccessibilityNode.from_dict({
            "role": "list",
            "frameId": "F1",
            "children": [
                {"role": "listitem", "name": "One", "bounds": {"x": 0, "y": 10, "width": 100, "height": 20}},
            ],
        })
        assert node.frame_id == "F1"
        assert node.children[0].bounds == Bounds(x=0, y=10, width=100, height=20)
        assert node.to_dict()["children"][0]["bounds"] == {"x": 0, "y": 10, "width": 100, "height": 20}

    def test_null_bounds_fields_become_zero(self):
        node = AccessibilityNode.from_dict({
            "role": "button",
            "bounds": {"x": None, "y": 1, "width": 2, "height": None},
        })
        assert node.bounds == Bounds(x=0, y=1, width=2, height=0)
        assert node.bounds.intersects(800, 600)
        assert node.to_dict()["bounds"] == {"x": 0, "y": 1, "width": 2, "height": 0}


class TestBounds:
    def test_intersects(self):
        viewport = (800, 600)
        assert Bounds(x=10, y=10, width=10, height=10).intersects(*viewport)
        assert Bounds(x=-5, y=590, width=10, height=20).intersects(*viewport)
        assert not Bounds(x=0, y=600, width=10, height=10).intersects(*viewport)
        assert not Bounds(x=-20, y=0, width=20, height=10).intersects(*viewport)


class TestResults:
    def test_projected_node_keys(self):
        node = ProjectedNode(sid="sid_x", text_snippet="Hi", frame_id="main")
        assert node.to_dict() == {"sid": "sid_x", "textSnippet": "Hi", "frameId": "main"}

    def test_snapshot_to_dict(self):
        result = SnapshotResult(snapshot_id="snap_abc123", nodes=[ProjectedNode(role="button")], next_cursor="1")
        assert result.to_dict() == {
            "snapshot_id": "snap_abc123",
            "nodes": [{"role": "button"}],
            "next_cursor": "1",
        }

    def test_query_result_without_explain(self):
        match = QueryMatch(sid="sid_a", role="button", label="Go", score=50, confidence=0.5)
        result = QueryResult(query_id="query_1", matches=[match], total_matches=3)
        assert result.to_dict() == {
            "sids": ["sid_a"],
            "elements": [{"sid": "sid_a", "role": "button", "label": "Go", "confidence": 0.5, "score": 50}],
        }
        assert result.explanations is None
        assert result.best is match

    def test_query_result_with_explain(self):
        match = QueryMatch(sid="sid_a", role="button", label="Go", score=50, confidence=0.5, explanation="role=button")
        result = QueryResult(query_id="query_1", matches=[match], total_matches=1, explain=True)
        assert result.to_dict()["explanations"] == ["role=button"]

    def test_empty_query_result(self):
        result = QueryResult(query_id="query_1", matches=[])
        assert result.best is None
        assert result.sids == []
