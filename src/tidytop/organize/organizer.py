"""Automatic placement of icons into fences."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from result import is_err

from tidytop.categories import Category, CategoryCatalog, categorize
from tidytop.common import create_logger
from tidytop.fences import Fence, FenceMembershipIndex, FenceService
from tidytop.icons import DesktopIcon
from tidytop.preferences import AutoOrganizeRule, DesktopSettings

from .rules import evaluate_rule

logger = create_logger("organize")


class DecisionKind(str, Enum):
    RULE = "rule"
    CATEGORY = "category"
    UNASSIGNED = "unassigned"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class OrganizeDecision:
    icon_path: str
    kind: DecisionKind
    fence_id: str | None = None
    source_id: str | None = None
    reason: str = ""


@dataclass
class OrganizeReport:
    decisions: list[OrganizeDecision] = field(default_factory=list)
    ran: bool = True

    def _count(self, *kinds: DecisionKind) -> int:
        return sum(1 for decision in self.decisions if decision.kind in kinds)

    @property
    def assigned(self) -> int:
        return self._count(DecisionKind.RULE, DecisionKind.CATEGORY)

    @property
    def unassigned(self) -> int:
        return self._count(DecisionKind.UNASSIGNED)

    @property
    def skipped(self) -> int:
        return self._count(DecisionKind.SKIPPED)


class AutoOrganizer:
    """Sends icons to fences: user rules first, then category matching.

    Each category gets at most one fence, found through ``Fence.category_id``
    and created the first time an icon needs it.
    """

    def __init__(
        self,
        membership: FenceMembershipIndex,
        fences: FenceService,
        catalog: CategoryCatalog,
        settings: Callable[[], DesktopSettings] = DesktopSettings,
    ) -> None:
        self._membership = membership
        self._fences = fences
        self._catalog = catalog
        self._settings = settings
        self._fence_lock = threading.Lock()

    def organize(self, icons: Iterable[DesktopIcon], *, force: bool = False) -> OrganizeReport:
        settings = self._settings()
        if not settings.enable_auto_organize and not force:
            logger.debug("Auto-organize disabled, nothing to do")
            return OrganizeReport(ran=False)

        rules = sorted(
            (rule for rule in settings.auto_organize_rules if rule.enabled),
            key=lambda rule: -rule.priority,
        )
        categories = self._catalog.categories()
        fences = {fence.id: fence for fence in self._fences.list_fences()}
        now = datetime.now()

        report = OrganizeReport()
        for icon in icons:
            current = fences.get(icon.fence_id) if icon.fence_id else None
            if current is not None and current.is_locked:
                report.decisions.append(
                    OrganizeDecision(icon_path=icon.path, kind=DecisionKind.SKIPPED, fence_id=current.id, reason="locked fence")
                )
                continue
            report.decisions.append(self._place(icon, rules, categories, fences, now))

        logger.info(
            "Icons organized",
            assigned=report.assigned,
            unassigned=report.unassigned,
            skipped=report.skipped,
        )
        return report

    def _place(
        self,
        icon: DesktopIcon,
        rules: list[AutoOrganizeRule],
        categories: list[Category],
        fences: dict[str, Fence],
        now: datetime,
    ) -> OrganizeDecision:
        for rule in rules:
            target = fences.get(rule.target_fence_id)
            if target is None or target.is_locked or not evaluate_rule(rule, icon, now):
                continue
            if self._membership.assign(icon.path, target.id).is_ok():
                return OrganizeDecision(
                    icon_path=icon.path,
                    kind=DecisionKind.RULE,
                    fence_id=target.id,
                    source_id=rule.id,
                    reason=rule.name,
                )

        category = categorize(icon, categories)
        if category is None:
            return OrganizeDecision(icon_path=icon.path, kind=DecisionKind.UNASSIGNED, reason="no matching category")

        fence = self._fence_for(category, fences)
        if fence is None:
            return OrganizeDecision(icon_path=icon.path, kind=DecisionKind.UNASSIGNED, reason="fence unavailable")
        if fence.is_locked:
            return OrganizeDecision(icon_path=icon.path, kind=DecisionKind.SKIPPED, fence_id=fence.id, reason="locked fence")

        assigned = self._membership.assign(icon.path, fence.id)
        if is_err(assigned):
            logger.warning("Icon could not be assigned", icon=icon.path, fence_id=fence.id, error=assigned.unwrap_err().message)
            return OrganizeDecision(icon_path=icon.path, kind=DecisionKind.UNASSIGNED, reason=assigned.unwrap_err().message)

        return OrganizeDecision(
            icon_path=icon.path,
            kind=DecisionKind.CATEGORY,
            fence_id=fence.id,
            source_id=category.id,
            reason=category.name,
        )

    def _fence_for(self, category: Category, fences: dict[str, Fence]) -> Fence | None:
        with self._fence_lock:
            for fence in fences.values():
                if fence.category_id == category.id:
                    return fence
            for fence in self._fences.list_fences():
                if fence.category_id == category.id:
                    fences[fence.id] = fence
                    return fence

            created = self._fences.create(category.label or category.id, category_id=category.id)
            if is_err(created):
                logger.error("Category fence could not be created", category_id=category.id, error=created.unwrap_err().message)
                return None
            fence = created.unwrap()
            fences[fence.id] = fence
            return fence
