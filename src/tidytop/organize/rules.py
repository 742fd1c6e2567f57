"""Evaluation of user auto-organize rules against icons."""

from __future__ import annotations

import operator
import re
from collections.abc import Callable
from datetime import datetime

from tidytop.common import create_logger
from tidytop.icons import DesktopIcon
from tidytop.preferences import AutoOrganizeRule, RuleType

logger = create_logger("organize.rules")

_COMPARISON = re.compile(r"^\s*(<=|>=|==|<|>)\s*(\d+(?:\.\d+)?)\s*$")
_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
}


def parse_comparison(condition: str) -> tuple[Callable[[float, float], bool], float] | None:
    """Split ``">=1024"`` into ``(operator.ge, 1024.0)``; ``None`` if malformed."""
    match = _COMPARISON.match(condition)
    if match is None:
        return None
    return _OPERATORS[match.group(1)], float(match.group(2))


def _extensions(condition: str) -> set[str]:
    parts = (part.strip().lower() for part in condition.split(","))
    return {part if part.startswith(".") else f".{part}" for part in parts if part}


def _compare(rule: AutoOrganizeRule, value: float) -> bool:
    parsed = parse_comparison(rule.condition)
    if parsed is None:
        logger.debug("Malformed rule condition", rule_id=rule.id, condition=rule.condition)
        return False
    compare, threshold = parsed
    return compare(value, threshold)


def _age_days(moment: datetime, now: datetime) -> float:
    return (now - moment).total_seconds() / 86400


def evaluate_rule(rule: AutoOrganizeRule, icon: DesktopIcon, now: datetime | None = None) -> bool:
    if not rule.enabled or not rule.condition.strip():
        return False

    now = now or datetime.now()
    match rule.rule_type:
        case RuleType.EXTENSION:
            return bool(icon.extension) and icon.extension.lower() in _extensions(rule.condition)
        case RuleType.NAME:
            return rule.condition.strip().lower() in icon.name.lower()
        case RuleType.PATH:
            return rule.condition.strip().lower() in icon.path.lower()
        case RuleType.SIZE:
            return _compare(rule, icon.file_size)
        case RuleType.DATE_CREATED:
            return _compare(rule, _age_days(icon.created_at, now))
        case RuleType.DATE_MODIFIED:
            return _compare(rule, _age_days(icon.modified_at, now))
    return False
