"""Predicate scoring for semantic queries."""

from __future__ import annotations

from dataclasses import dataclass, field

from semlens.core.types import AccessibilityNode

ROLE_WEIGHT = 50
LABEL_WEIGHT = 40
DESCRIPTION_WEIGHT = 30  # label predicate matched against the description instead
TEXT_WEIGHT = 35
ATTRIBUTE_WEIGHT = 20  # per matching attribute


@dataclass
class QueryPredicates:
    """All optional; matched additively, so a node may match only some of them."""

    role: str | None = None
    label: str | None = None
    text: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class Score:
    points: int = 0
    reasons: list[str] = field(default_factory=list)

    def add(self, points: int, reason: str) -> None:
        self.points += points
        self.reasons.append(reason)

    @property
    def confidence(self) -> float:
        """Heuristic 0–1 normalisation; anything at or above 100 saturates."""
        return round(min(self.points / 100, 1.0), 2)

    @property
    def explanation(self) -> str:
        return ",".join(self.reasons)


def score_node(node: AccessibilityNode, predicates: QueryPredicates) -> Score:
    score = Score()

    if predicates.role and predicates.role.lower() in node.role.lower():
        score.add(ROLE_WEIGHT, f"role={node.role}")

    if predicates.label:
        wanted = predicates.label.lower()
        if wanted in node.name.lower():
            score.add(LABEL_WEIGHT, f"label≈{node.name}")
        elif wanted in node.description.lower():
            score.add(DESCRIPTION_WEIGHT, f"description≈{node.description}")

    if predicates.text:
        haystack = f"{node.name} {node.description} {node.value}".lower()
        if predicates.text.lower() in haystack:
            score.add(TEXT_WEIGHT, f"text≈{predicates.text}")

    for attr, expected in predicates.attributes.items():
        actual = node.attributes.get(attr.lower(), "")
        if actual and actual.lower() == str(expected).lower():
            score.add(ATTRIBUTE_WEIGHT, f"{attr}={actual}")

    return score


def is_candidate(node: AccessibilityNode, score: Score) -> bool:
    """A match needs a positive score and some accessible content to show for it."""
    return score.points > 0 and bool(node.role or node.name or node.description)
