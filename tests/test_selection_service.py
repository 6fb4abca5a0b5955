import pytest

from core.errors import InvalidSelection
from core.services.selection_service import GallerySelection


def test_initially_closed():
    sel = GallerySelection()
    assert not sel.is_open
    assert sel.index is None
    assert sel.current_page is None


def test_open_sets_current_page():
    sel = GallerySelection()
    sel.open(3, 5)
    assert sel.is_open
    assert sel.current_page == 3
    sel.open(0, 5)
    assert sel.current_page == 0


@pytest.mark.parametrize("index", [-1, 5, 99])
def test_open_out_of_range_raises(index):
    sel = GallerySelection()
    with pytest.raises(InvalidSelection):
        sel.open(index, 5)
    assert not sel.is_open


def test_open_on_empty_view_raises():
    with pytest.raises(IndexError):
        GallerySelection().open(0, 0)


def test_close_is_idempotent():
    sel = GallerySelection()
    sel.close()
    sel.open(1, 2)
    sel.close()
    sel.close()
    assert not sel.is_open


def test_paging_ignored_while_closed():
    sel = GallerySelection()
    assert sel.next_page(3) is None
    assert sel.previous_page() is None
    assert not sel.is_open


def test_next_and_previous_clamp_at_ends():
    sel = GallerySelection()
    sel.open(1, 3)
    assert sel.next_page(3) == 2
    assert sel.next_page(3) == 2
    assert sel.previous_page() == 1
    assert sel.previous_page() == 0
    assert sel.previous_page() == 0


def test_reconcile_clamps_when_view_shrinks():
    sel = GallerySelection()
    sel.open(4, 5)
    assert sel.reconcile(2) is True
    assert sel.index == 1


def test_reconcile_closes_when_view_empty():
    sel = GallerySelection()
    sel.open(0, 1)
    assert sel.reconcile(0) is True
    assert not sel.is_open


def test_reconcile_keeps_valid_index():
    sel = GallerySelection()
    sel.open(1, 5)
    assert sel.reconcile(2) is False
    assert sel.index == 1
    closed = GallerySelection()
    assert closed.reconcile(0) is False
