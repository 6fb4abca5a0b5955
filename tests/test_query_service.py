import pytest

from core.models import QueryState, SortOption
from core.services.query_service import (
    QueryEngine,
    derive_view,
    filter_records,
    parse_sort_option,
)
from core.services.sort_service import SortService


@pytest.mark.parametrize("term", ["cat", "CAT", "Cat", "a", "", "zzz", " "])
def test_filter_matches_case_insensitive_substring_in_order(catalog, term):
    out = filter_records(catalog, term)
    expected = [r for r in catalog if term.lower() in r.title.lower()]
    assert out == expected


def test_filter_cat_examples(catalog):
    titles = [r.title for r in filter_records(catalog, "cat")]
    assert titles == ["black cat on a wall", "Cathedral at dusk", "bobcat", "ALLEY CAT"]


def test_set_filter_always_starts_from_catalog(catalog):
    engine = QueryEngine()
    engine.set_filter_term(catalog, "cat")
    engine.set_filter_term(catalog, "dog")
    assert [r.id for r in engine.view] == [2]
    engine.set_filter_term(catalog, "")
    assert engine.view == catalog


def test_sort_composes_on_filtered_view(catalog):
    engine = QueryEngine()
    engine.set_filter_term(catalog, "cat")
    engine.set_sort_option(SortOption.TITLE)

    expected = SortService().sort(filter_records(catalog, "cat"), SortOption.TITLE)
    assert engine.view == expected
    assert all("cat" in r.title.lower() for r in engine.view)
    assert engine.sort_option is SortOption.TITLE


def test_filter_change_discards_previous_sort_order(catalog):
    engine = QueryEngine()
    engine.set_filter_term(catalog, "cat")
    engine.set_sort_option(SortOption.ALBUM_ID)
    engine.set_filter_term(catalog, "ca")
    assert engine.view == filter_records(catalog, "ca")
    assert engine.sort_option is SortOption.ALBUM_ID


def test_sort_accepts_option_tokens(catalog):
    engine = QueryEngine()
    engine.reset(catalog)
    engine.set_sort_option("albumId")
    assert [r.album_id for r in engine.view] == sorted(r.album_id for r in catalog)


def test_unknown_sort_option_is_noop(catalog):
    engine = QueryEngine()
    engine.set_filter_term(catalog, "a")
    engine.set_sort_option(SortOption.TITLE)
    before = list(engine.view)

    engine.set_sort_option("date")

    assert engine.view == before
    assert engine.sort_option is SortOption.TITLE


def test_sort_none_keeps_current_order(catalog):
    engine = QueryEngine()
    engine.set_filter_term(catalog, "")
    engine.set_sort_option(SortOption.TITLE)
    sorted_view = list(engine.view)
    engine.set_sort_option(SortOption.NONE)
    assert engine.view == sorted_view


def test_reset_restores_fetch_order(catalog):
    engine = QueryEngine()
    engine.set_filter_term(catalog, "cat")
    engine.set_sort_option(SortOption.TITLE)
    engine.set_sort_option(SortOption.ALBUM_ID)

    engine.reset(catalog)

    assert engine.view == catalog
    assert engine.view is not catalog
    assert engine.state == QueryState()


def test_rederive_applies_filter_then_sort(catalog):
    engine = QueryEngine()
    engine.set_filter_term([], "cat")
    engine.set_sort_option(SortOption.TITLE)
    assert engine.view == []

    engine.rederive(catalog)

    assert engine.view == derive_view(catalog, QueryState("cat", SortOption.TITLE))
    assert [r.title for r in engine.view] == [
        "ALLEY CAT",
        "black cat on a wall",
        "bobcat",
        "Cathedral at dusk",
    ]


def test_empty_catalog_gives_empty_view():
    engine = QueryEngine()
    assert engine.set_filter_term([], "x") == []
    assert engine.set_sort_option(SortOption.TITLE) == []
    assert engine.reset([]) == []


def test_parse_sort_option():
    assert parse_sort_option("title") is SortOption.TITLE
    assert parse_sort_option(SortOption.ALBUM_ID) is SortOption.ALBUM_ID
    assert parse_sort_option("") is SortOption.NONE
    assert parse_sort_option(None) is SortOption.NONE
    assert parse_sort_option("bogus") is None
