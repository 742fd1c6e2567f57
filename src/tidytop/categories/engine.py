"""Pure icon classification against an ordered category set."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from tidytop.icons import DesktopIcon

from .models import Category


def _contains_any(haystacks: tuple[str, ...], needles: Iterable[str]) -> bool:
    for needle in needles:
        needle = needle.lower()
        if needle and any(needle in haystack for haystack in haystacks):
            return True
    return False


def matches(icon: DesktopIcon, category: Category) -> bool:
    """True when the icon satisfies any of the category's sub-checks.

    Empty extensions, names and patterns never match; a disabled category
    never matches.
    """
    if not category.enabled:
        return False

    extension = icon.extension.lower()
    if extension and extension in category.extensions:
        return True

    haystacks = tuple(value.lower() for value in (icon.name, icon.path) if value)
    if not haystacks:
        return False

    return _contains_any(haystacks, category.patterns) or _contains_any(haystacks, category.keywords)


def categorize(icon: DesktopIcon, categories: Sequence[Category]) -> Category | None:
    """Best matching category, or ``None`` when the icon stays unassigned.

    Highest priority wins; on a tie the category declared first wins.
    """
    best: Category | None = None
    for category in categories:
        if not matches(icon, category):
            continue
        if best is None or category.priority > best.priority:
            best = category
    return best


def group_by_category(
    icons: Iterable[DesktopIcon],
    categories: Sequence[Category],
) -> tuple[dict[str, list[DesktopIcon]], list[DesktopIcon]]:
    """Bucket icons by category id, keeping the unassigned ones apart."""
    grouped: dict[str, list[DesktopIcon]] = {}
    unassigned: list[DesktopIcon] = []
    for icon in icons:
        category = categorize(icon, categories)
        if category is None:
            unassigned.append(icon)
        else:
            grouped.setdefault(category.id, []).append(icon)
    return grouped, unassigned
