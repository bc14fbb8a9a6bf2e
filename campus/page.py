"""
Page model: the DOM elements the search and map logic read and write.

Element IDs are the interop contract with the served HTML template.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from campus.data import CATEGORIES

SEARCH_INPUT_ID = 'searchInput'
SUGGESTIONS_ID = 'suggestions'
MAP_ID = 'map'
MAP_3D_ID = 'map3d'
ZOOM_IN_ID = 'zoomIn'
ZOOM_OUT_ID = 'zoomOut'
TOGGLE_3D_ID = 'toggle3d'

HIGHLIGHT_CLASS = 'highlight'


def card_id(category):
    return f'card-{category}'


@dataclass
class Element:
    id: str
    value: str = ''
    text: str = ''
    visible: bool = True
    classes: Set[str] = field(default_factory=set)
    items: List[dict] = field(default_factory=list)


class Page:
    """A page with elements addressable by ID and a set of loaded script libraries."""

    def __init__(self, element_ids=(), libraries=()):
        self.elements: Dict[str, Element] = {eid: Element(eid) for eid in element_ids}
        self.libraries = set(libraries)
        self.alerts: List[str] = []

    @classmethod
    def campus(cls, libraries=('leaflet', 'maplibre')):
        """The standard campus page with every element of the DOM contract."""
        ids = [SEARCH_INPUT_ID, SUGGESTIONS_ID, MAP_ID, MAP_3D_ID,
               ZOOM_IN_ID, ZOOM_OUT_ID, TOGGLE_3D_ID]
        ids.extend(card_id(c) for c in CATEGORIES)
        page = cls(ids, libraries)
        page.elements[SUGGESTIONS_ID].visible = False
        page.elements[MAP_3D_ID].visible = False
        page.elements[TOGGLE_3D_ID].text = '3D'
        return page

    def get(self, element_id) -> Optional[Element]:
        return self.elements.get(element_id)

    def remove(self, element_id):
        self.elements.pop(element_id, None)

    def library_loaded(self, name):
        return name in self.libraries

    def load_library(self, name):
        self.libraries.add(name)

    def alert(self, message):
        self.alerts.append(message)
