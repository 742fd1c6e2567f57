from __future__ import annotations

from result import is_err, is_ok

from tidytop.datastore import MemoryDataStore
from tidytop.fences import Fence
from tidytop.icons import DesktopIcon
from tidytop.layouts import DesktopLayout, FenceSnapshot, LayoutStore


def _layout() -> DesktopLayout:
    fence = Fence(id="f1", title="Docs", icons=["/d/a.txt"])
    snapshot = FenceSnapshot(
        **fence.model_dump(),
        icon_records=[DesktopIcon(path="/d/a.txt", fence_id="f1", thumbnail=b"\x00\xffpng")],
    )
    return DesktopLayout(name="Work", fences=[snapshot], unfenced_icons=[DesktopIcon(path="/d/b.txt")])


def test_layout_round_trips_including_thumbnails() -> None:
    store = LayoutStore(MemoryDataStore())
    layout = _layout()

    assert is_ok(store.save(layout))
    loaded = store.load(layout.id).unwrap()

    assert loaded == layout
    assert loaded.fences[0].icon_records[0].thumbnail == b"\x00\xffpng"


def test_load_all_skips_unreadable_entries() -> None:
    data = MemoryDataStore()
    store = LayoutStore(data)
    layout = _layout()
    store.save(layout)
    data.save("layout-broken", {"fences": "nope"})
    store.save_active(layout.id)

    loaded = store.load_all().unwrap()

    assert [item.id for item in loaded] == [layout.id]


def test_active_pointer_defaults_to_none() -> None:
    store = LayoutStore(MemoryDataStore())

    assert store.load_active().unwrap() is None
    store.save_active("abc")
    assert store.load_active().unwrap() == "abc"


def test_load_missing_layout_fails() -> None:
    assert is_err(LayoutStore(MemoryDataStore()).load("missing"))
