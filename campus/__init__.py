"""
Campus page logic: search suggestions, map view control and the page model
they act on.
"""

from .loop import UILoop
from .page import Page
from .search import SearchBox, SuggestionEngine, Suggestions
from .map_controller import MapViewController

__all__ = ['UILoop', 'Page', 'SearchBox', 'SuggestionEngine', 'Suggestions', 'MapViewController']
