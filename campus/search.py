"""
Search & Suggestion Engine

Case-insensitive substring matching of the search box against the category
alias table and the static location list, plus the search box behaviour that
drives the map.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from campus.data import CAMPUS_LOCATIONS, CATEGORY_ALIASES, CATEGORY_LABELS
from campus.page import SEARCH_INPUT_ID, SUGGESTIONS_ID

logger = logging.getLogger(__name__)

DEFAULT_MIN_LENGTH = 1


@dataclass(frozen=True)
class CategorySuggestion:
    category: str
    label: str
    alias: str


@dataclass(frozen=True)
class Suggestions:
    categories: Tuple[CategorySuggestion, ...] = ()
    locations: Tuple[str, ...] = ()

    def __bool__(self):
        return bool(self.categories or self.locations)

    def to_items(self):
        items = [{'type': 'category', 'category': c.category, 'label': c.label}
                 for c in self.categories]
        items.extend({'type': 'location', 'name': name} for name in self.locations)
        return items


class SuggestionEngine:
    def __init__(self, locations=CAMPUS_LOCATIONS, aliases=CATEGORY_ALIASES,
                 labels=CATEGORY_LABELS, min_length=DEFAULT_MIN_LENGTH):
        self.locations = list(locations)
        self.aliases = dict(aliases)
        self.labels = labels
        self.min_length = min_length

    def suggest(self, query):
        """
        Match a query against categories first, then locations.

        Args:
            query (str): Raw search box value

        Returns:
            Suggestions: Categories deduplicated by canonical category in alias
            order, then matching locations in list order
        """
        needle = (query or '').strip().lower()
        if not needle or len(needle) < self.min_length:
            return Suggestions()

        categories = []
        seen = set()
        for alias, category in self.aliases.items():
            if needle in alias.lower() and category not in seen:
                seen.add(category)
                categories.append(CategorySuggestion(
                    category, self.labels.get(category, category.title()), alias
                ))

        locations = [name for name in self.locations if needle in name.lower()]
        return Suggestions(tuple(categories), tuple(locations))


class SearchBox:
    """Search input and suggestion panel bound to a page and a map controller."""

    def __init__(self, page, controller, engine=None):
        self.page = page
        self.controller = controller
        self.engine = engine or SuggestionEngine()

    @classmethod
    def bind(cls, page, controller, engine=None):
        """
        Returns:
            SearchBox or None: None when the page lacks the input or panel
        """
        if page.get(SEARCH_INPUT_ID) is None or page.get(SUGGESTIONS_ID) is None:
            logger.debug("Search elements missing, search disabled")
            return None
        return cls(page, controller, engine)

    @property
    def input(self):
        return self.page.get(SEARCH_INPUT_ID)

    @property
    def panel(self):
        return self.page.get(SUGGESTIONS_ID)

    def hide_suggestions(self):
        self.panel.visible = False

    def on_input(self, value):
        self.input.value = value
        suggestions = self.engine.suggest(value)
        self.panel.items = suggestions.to_items()
        self.panel.visible = bool(suggestions)
        return suggestions

    def on_keydown(self, key):
        if key == 'Enter':
            return self.perform_search()
        if key == 'Escape':
            self.hide_suggestions()
        return None

    def on_document_click(self, target_id):
        if target_id not in (SEARCH_INPUT_ID, SUGGESTIONS_ID):
            self.hide_suggestions()

    def select_category(self, category):
        self.hide_suggestions()
        if self.controller is not None:
            self.controller.show_category(category)

    def select_location(self, name):
        self.input.value = name
        self.hide_suggestions()
        return self.perform_search()

    def select_item(self, index):
        """Select the panel item at ``index`` as rendered by ``on_input``."""
        item = self.panel.items[index]
        if item['type'] == 'category':
            return self.select_category(item['category'])
        return self.select_location(item['name'])

    def perform_search(self):
        query = self.input.value
        if not query.strip():
            return False
        self.hide_suggestions()
        if self.controller is None:
            self.page.alert(f'Searching for: {query}')
            return False
        return self.controller.focus_on_search(query)
