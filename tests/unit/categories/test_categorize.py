from __future__ import annotations

import pytest

from tidytop.categories import Category, categorize, group_by_category, matches, system_categories
from tidytop.icons import DesktopIcon


def _icon(path: str, name: str = "", extension: str = "") -> DesktopIcon:
    return DesktopIcon(path=path, name=name, extension=extension)


def test_higher_priority_category_wins() -> None:
    low = Category(id="a", extensions=(".exe",), priority=8)
    high = Category(id="b", patterns=("steam",), priority=10)
    icon = _icon("C:/Desktop/steam.exe", name="steam", extension=".exe")

    assert categorize(icon, [low, high]) == high


def test_priority_tie_goes_to_first_declared() -> None:
    first = Category(id="first", extensions=(".txt",), priority=5)
    second = Category(id="second", keywords=("notes",), priority=5)
    icon = _icon("/d/notes.txt", name="notes", extension=".txt")

    assert categorize(icon, [first, second]).id == "first"
    assert categorize(icon, [second, first]).id == "second"


def test_disabled_category_never_matches() -> None:
    disabled = Category(id="off", extensions=(".txt",), priority=100, enabled=False)
    icon = _icon("/d/a.txt", name="a", extension=".txt")

    assert not matches(icon, disabled)
    assert categorize(icon, [disabled]) is None


def test_no_match_leaves_icon_unassigned() -> None:
    icon = _icon("/d/zzz.qqq", name="zzz", extension=".qqq")

    assert categorize(icon, system_categories()) is None


@pytest.mark.parametrize(
    ("icon", "category"),
    [
        (_icon("/d/Budget.XLSX", name="Budget", extension=".XLSX"), Category(id="c", extensions=("xlsx",))),
        (_icon("/d/Discord.lnk", name="Discord", extension=".lnk"), Category(id="c", patterns=("discord",))),
        (_icon("/home/me/games/x", name="x"), Category(id="c", keywords=("GAMES",))),
    ],
)
def test_matching_is_case_insensitive(icon: DesktopIcon, category: Category) -> None:
    assert matches(icon, category)


def test_empty_needles_and_haystacks_do_not_match() -> None:
    category = Category(id="c", patterns=("",), keywords=("",))

    assert not matches(_icon("/d/a", name="a"), category)
    assert not matches(_icon("/d/a"), Category(id="d", extensions=("",)))


def test_system_categories_place_common_apps() -> None:
    categories = system_categories()

    assert categorize(_icon("/d/steam.exe", "steam", ".exe"), categories).id == "games"
    assert categorize(_icon("/d/report.pdf", "report", ".pdf"), categories).id == "office-tools"
    assert categorize(_icon("/d/Slack.lnk", "Slack", ".lnk"), categories).id == "social-communication"
    assert categorize(_icon("/d/main.py", "main", ".py"), categories).id == "development-tools"


def test_group_by_category_separates_unassigned() -> None:
    categories = [Category(id="docs", extensions=(".txt",))]
    icons = [_icon("/d/a.txt", "a", ".txt"), _icon("/d/b.bin", "b", ".bin"), _icon("/d/c.txt", "c", ".txt")]

    grouped, unassigned = group_by_category(icons, categories)

    assert [icon.name for icon in grouped["docs"]] == ["a", "c"]
    assert [icon.name for icon in unassigned] == ["b"]
