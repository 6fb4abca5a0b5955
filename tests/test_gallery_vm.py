import pytest

from app.viewmodels.gallery_vm import GalleryVM
from core.errors import InvalidSelection
from core.models import SortOption


class RecordingListener:
    def __init__(self):
        self.views = []
        self.refreshing = []
        self.selections = []
        self.failures = []

    def view_changed(self, records):
        self.views.append(list(records))

    def refreshing_changed(self, refreshing):
        self.refreshing.append(refreshing)

    def selection_changed(self, index):
        self.selections.append(index)

    def fetch_failed(self, error):
        self.failures.append(error)


def loaded_vm(records):
    vm = GalleryVM()
    listener = RecordingListener()
    vm.set_listener(listener)
    vm.on_catalog_loaded(vm.begin_refresh(), records)
    return vm, listener


def test_end_to_end_filter_sort_reset(banana_apple):
    vm, _ = loaded_vm(banana_apple)
    banana, apple = banana_apple

    vm.set_filter_term("a")
    assert vm.displayed == [banana, apple]

    vm.set_sort_option(SortOption.TITLE)
    assert vm.displayed == [apple, banana]

    vm.reset()
    assert vm.displayed == [banana, apple]
    assert vm.query.filter_term == ""
    assert vm.query.sort_option is SortOption.NONE


def test_refresh_rederives_under_current_query(catalog):
    vm, listener = loaded_vm(catalog[:2])
    vm.set_filter_term("cat")
    vm.set_sort_option(SortOption.TITLE)

    vm.on_catalog_loaded(vm.begin_refresh(), catalog)

    assert [r.title for r in vm.displayed] == [
        "ALLEY CAT",
        "black cat on a wall",
        "bobcat",
        "Cathedral at dusk",
    ]
    assert listener.views[-1] == vm.displayed
    assert listener.refreshing[-2:] == [True, False]


def test_failed_fetch_keeps_view_and_reports_once(catalog):
    vm, listener = loaded_vm(catalog)
    vm.set_filter_term("cat")
    before = list(vm.displayed)
    views_before = len(listener.views)

    vm.on_catalog_failed(vm.begin_refresh(), RuntimeError("503"))

    assert vm.displayed == before
    assert vm.catalog == tuple(catalog)
    assert len(listener.failures) == 1
    assert len(listener.views) == views_before
    assert not vm.refreshing


def test_open_item_and_current_record(catalog):
    vm, listener = loaded_vm(catalog)
    vm.open_item(2)
    assert vm.selection.current_page == 2
    assert vm.current_record == catalog[2]
    assert listener.selections[-1] == 2


def test_open_item_out_of_range(catalog):
    vm, _ = loaded_vm(catalog)
    with pytest.raises(InvalidSelection):
        vm.open_item(len(catalog))


def test_filter_shrinking_view_clamps_selection(catalog):
    vm, listener = loaded_vm(catalog)
    vm.open_item(5)

    vm.set_filter_term("cat")

    assert vm.selection.index == len(vm.displayed) - 1
    assert listener.selections[-1] == 3


def test_filter_to_empty_closes_viewer(catalog):
    vm, listener = loaded_vm(catalog)
    vm.open_item(0)

    vm.set_filter_term("no such photo")

    assert not vm.selection.is_open
    assert vm.current_record is None
    assert listener.selections[-1] is None


def test_refresh_with_shorter_catalog_clamps(catalog):
    vm, _ = loaded_vm(catalog)
    vm.open_item(4)
    vm.on_catalog_loaded(vm.begin_refresh(), catalog[:2])
    assert vm.selection.index == 1
    assert vm.current_record == catalog[1]


def test_paging_and_close(catalog):
    vm, listener = loaded_vm(catalog)
    vm.open_item(4)
    vm.next_page()
    vm.next_page()
    assert vm.current_record == catalog[5]
    vm.previous_page()
    assert vm.current_record == catalog[4]
    vm.close_viewer()
    vm.close_viewer()
    assert listener.selections == [4, 5, 4, None]
    assert listener.selections.count(None) == 1


def test_previous_page_at_start_does_not_notify(catalog):
    vm, listener = loaded_vm(catalog)
    vm.open_item(0)
    vm.previous_page()
    assert vm.selection.index == 0
    assert listener.selections == [0]


def test_loaded_and_last_error_track_refreshes(catalog):
    vm = GalleryVM()
    assert not vm.loaded
    vm.on_catalog_failed(vm.begin_refresh(), "offline")
    assert not vm.loaded
    assert vm.last_error.reason == "offline"

    vm.on_catalog_loaded(vm.begin_refresh(), catalog)
    assert vm.loaded
    assert vm.last_error is None
