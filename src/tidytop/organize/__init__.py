"""Auto-organize: user rules and category-driven fence placement."""

from .organizer import AutoOrganizer, DecisionKind, OrganizeDecision, OrganizeReport
from .rules import evaluate_rule, parse_comparison

__all__ = [
    "AutoOrganizer",
    "DecisionKind",
    "OrganizeDecision",
    "OrganizeReport",
    "evaluate_rule",
    "parse_comparison",
]
