"""
Tests for the suggestion engine and search box behaviour.
"""

import pytest

from campus import MapViewController, Page, SearchBox, SuggestionEngine, UILoop
from campus.data import CAMPUS_LOCATIONS, CATEGORY_ALIASES
from campus.page import SEARCH_INPUT_ID, SUGGESTIONS_ID, card_id


@pytest.fixture
def engine():
    return SuggestionEngine()


@pytest.fixture
def loop():
    return UILoop()


@pytest.fixture
def page():
    return Page.campus()


@pytest.fixture
def controller(page, loop):
    controller = MapViewController(page, loop)
    controller.start()
    return controller


@pytest.fixture
def search(page, controller):
    return SearchBox.bind(page, controller)


def test_gy_suggests_recreation_only(engine):
    result = engine.suggest("gy")
    assert [(c.category, c.label, c.alias) for c in result.categories] == [
        ("recreation", "Recreation", "gym")
    ]
    assert result.locations == ()


@pytest.mark.parametrize("query", ["re", "a", "hall", "LIB", "e", "din", "Cent"])
def test_suggestions_match_every_alias_and_location(engine, query):
    needle = query.lower()
    result = engine.suggest(query)

    expected_categories = []
    for alias, category in CATEGORY_ALIASES.items():
        if needle in alias and category not in expected_categories:
            expected_categories.append(category)
    assert [c.category for c in result.categories] == expected_categories

    assert list(result.locations) == [n for n in CAMPUS_LOCATIONS if needle in n.lower()]


def test_aliases_for_same_category_are_deduplicated(engine):
    # "o" hits food, dorm, housing, recreation, sports
    result = engine.suggest("o")
    categories = [c.category for c in result.categories]
    assert categories == ["dining", "residence", "recreation"]


def test_single_character_query_is_accepted(engine):
    assert engine.suggest("c")


def test_min_length_threshold(engine):
    strict = SuggestionEngine(min_length=2)
    assert not strict.suggest("c")
    assert strict.suggest("ca")


def test_empty_or_unmatched_query(engine):
    assert not engine.suggest("")
    assert not engine.suggest("   ")
    assert not engine.suggest("zzzz")


def test_zero_min_length_still_ignores_blank_query():
    lenient = SuggestionEngine(min_length=0)
    assert not lenient.suggest("")
    assert not lenient.suggest("  ")
    assert lenient.suggest("c")


def test_locations_keep_list_order(engine):
    result = engine.suggest("residence hall")
    assert result.locations == ("Residence Hall A", "Residence Hall B")


def test_bind_requires_input_and_panel(controller):
    page = Page.campus()
    page.remove(SUGGESTIONS_ID)
    assert SearchBox.bind(page, controller) is None


def test_typing_renders_and_hides_panel(search, page):
    search.on_input("caf")
    panel = page.get(SUGGESTIONS_ID)
    assert panel.visible
    assert panel.items == [
        {"type": "category", "category": "dining", "label": "Dining"},
        {"type": "location", "name": "Cafeteria"},
    ]

    search.on_input("qqq")
    assert not panel.visible
    assert panel.items == []


def test_escape_hides_panel_and_keeps_input(search, page):
    search.on_input("hall")
    search.on_keydown("Escape")
    assert not page.get(SUGGESTIONS_ID).visible
    assert page.get(SEARCH_INPUT_ID).value == "hall"


def test_enter_searches_current_value(search, controller):
    search.on_input("Science")
    assert search.on_keydown("Enter") is True
    assert controller.map2d.open_popup_name == "Science Hall"


def test_outside_click_hides_panel(search, page):
    search.on_input("hall")
    search.on_document_click(SEARCH_INPUT_ID)
    assert page.get(SUGGESTIONS_ID).visible
    search.on_document_click(SUGGESTIONS_ID)
    assert page.get(SUGGESTIONS_ID).visible
    search.on_document_click("card-dining")
    assert not page.get(SUGGESTIONS_ID).visible


def test_selecting_gy_category_filters_and_highlights(search, page, controller, loop):
    search.on_input("gy")
    search.select_item(0)

    assert controller.map2d.visible_layers() == ["recreation"]
    card = page.get(card_id("recreation"))
    assert "highlight" in card.classes

    loop.advance(1.0)
    assert "highlight" in card.classes
    loop.advance(0.6)
    assert "highlight" not in card.classes


def test_selecting_location_fills_input_and_focuses(search, page, controller):
    search.on_input("main")
    search.select_item(0)
    assert page.get(SEARCH_INPUT_ID).value == "Main Library"
    assert not page.get(SUGGESTIONS_ID).visible
    assert controller.map2d.open_popup_name == "Main Library"


def test_blank_search_does_nothing(search, controller):
    search.on_input("   ")
    assert search.perform_search() is False
    assert controller.map2d.open_popup_name is None


def test_search_without_map_alerts(page):
    search = SearchBox.bind(page, None)
    search.on_input("Auditorium")
    search.perform_search()
    assert page.alerts == ["Searching for: Auditorium"]
