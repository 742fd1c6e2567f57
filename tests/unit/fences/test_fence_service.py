from __future__ import annotations

from datetime import datetime

import pytest
from result import is_err, is_ok

from tidytop.common import Point, Size
from tidytop.fences import (
    DEFAULT_FENCE_TITLE,
    FenceLockedError,
    FenceMembershipIndex,
    FenceRegistry,
    FenceService,
    FenceValidationError,
    IconSortRule,
    create_fence_registry,
)
from tidytop.icons import DesktopIcon, IconRegistry, create_icon_registry
from tidytop.preferences import DesktopSettings


@pytest.fixture
def icons() -> IconRegistry:
    registry = create_icon_registry()
    registry.add("/d/b.txt", DesktopIcon(path="/d/b.txt", name="beta", extension=".txt", file_size=30, created_at=datetime(2024, 1, 3)))
    registry.add("/d/a.exe", DesktopIcon(path="/d/a.exe", name="Alpha", extension=".exe", file_size=10, created_at=datetime(2024, 1, 2)))
    registry.add("/d/c.doc", DesktopIcon(path="/d/c.doc", name="gamma", extension=".doc", file_size=20, created_at=datetime(2024, 1, 1)))
    return registry


@pytest.fixture
def fences() -> FenceRegistry:
    return create_fence_registry()


@pytest.fixture
def membership(icons: IconRegistry, fences: FenceRegistry) -> FenceMembershipIndex:
    return FenceMembershipIndex(icons, fences)


@pytest.fixture
def settings() -> DesktopSettings:
    return DesktopSettings(grid_size=10, default_fence_opacity=0.5)


@pytest.fixture
def service(fences: FenceRegistry, membership: FenceMembershipIndex, settings: DesktopSettings) -> FenceService:
    return FenceService(fences, membership, settings=lambda: settings)


def test_create_uses_settings_defaults_and_snaps(service: FenceService) -> None:
    fence = service.create("Docs", position=Point(x=13, y=27)).unwrap()

    assert fence.position == Point(x=10, y=30)
    assert fence.style.opacity == 0.5
    assert service.get(fence.id).unwrap().title == "Docs"


def test_create_without_snapping(fences: FenceRegistry, membership: FenceMembershipIndex) -> None:
    settings = DesktopSettings(enable_grid_snapping=False)
    service = FenceService(fences, membership, settings=lambda: settings)

    fence = service.create("Free", position=Point(x=13, y=27)).unwrap()

    assert fence.position == Point(x=13, y=27)


def test_resize_rejects_non_positive_sizes(service: FenceService) -> None:
    fence = service.create("Docs").unwrap()

    result = service.resize(fence.id, 0, 100)

    assert is_err(result)
    assert isinstance(result.unwrap_err(), FenceValidationError)
    assert service.resize(fence.id, 300, 120).unwrap().size == Size(width=300, height=120)


def test_locked_fence_cannot_move(service: FenceService) -> None:
    fence = service.create("Docs").unwrap()
    service.set_locked(fence.id, True)

    result = service.move(fence.id, 100, 100)

    assert is_err(result)
    assert isinstance(result.unwrap_err(), FenceLockedError)
    service.set_locked(fence.id, False)
    assert service.move(fence.id, 100, 100).unwrap().position == Point(x=100, y=100)


def test_remove_unfences_icons_without_deleting_them(
    service: FenceService, membership: FenceMembershipIndex, icons: IconRegistry
) -> None:
    fence = service.create("Docs").unwrap()
    membership.assign("/d/b.txt", fence.id)

    assert is_ok(service.remove(fence.id))

    assert icons.get("/d/b.txt").unwrap().fence_id is None
    assert is_err(service.get(fence.id))


def test_update_keeps_membership(service: FenceService, membership: FenceMembershipIndex) -> None:
    fence = service.create("Docs").unwrap()
    membership.assign("/d/b.txt", fence.id)

    updated = service.update(fence.model_copy(update={"title": "Renamed", "icons": []})).unwrap()

    assert updated.title == "Renamed"
    assert updated.icons == ["/d/b.txt"]


@pytest.mark.parametrize(
    ("rule", "expected"),
    [
        (IconSortRule.NAME_ASC, ["/d/a.exe", "/d/b.txt", "/d/c.doc"]),
        (IconSortRule.NAME_DESC, ["/d/c.doc", "/d/b.txt", "/d/a.exe"]),
        (IconSortRule.SIZE_ASC, ["/d/a.exe", "/d/c.doc", "/d/b.txt"]),
        (IconSortRule.DATE_ASC, ["/d/c.doc", "/d/a.exe", "/d/b.txt"]),
        (IconSortRule.TYPE_ASC, ["/d/c.doc", "/d/a.exe", "/d/b.txt"]),
        (IconSortRule.NONE, ["/d/b.txt", "/d/a.exe", "/d/c.doc"]),
    ],
)
def test_set_sort_rule_orders_icons(
    service: FenceService, membership: FenceMembershipIndex, rule: IconSortRule, expected: list[str]
) -> None:
    fence = service.create("All").unwrap()
    for path in ("/d/b.txt", "/d/a.exe", "/d/c.doc"):
        membership.assign(path, fence.id)

    result = service.set_sort_rule(fence.id, rule)

    assert result.unwrap().icons == expected


def test_ensure_default_fence_creates_only_once(service: FenceService) -> None:
    first = service.ensure_default_fence().unwrap()
    second = service.ensure_default_fence().unwrap()

    assert first.title == DEFAULT_FENCE_TITLE
    assert first.id == second.id
    assert len(service.list_fences()) == 1
