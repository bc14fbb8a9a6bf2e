"""
Map View Controller

Owns the campus map for one page load: marker groups per category, category
filtering, focusing search results, basemap switching and the 2D/3D renderer
handoff. Constructed when the page first needs a map and torn down on unload.
"""

import logging

from campus.data import BASEMAPS, CAMPUS_CENTER, CAMPUS_MARKERS, CATEGORY_ALIASES, CATEGORIES
from campus.page import (
    HIGHLIGHT_CLASS,
    MAP_3D_ID,
    MAP_ID,
    TOGGLE_3D_ID,
    ZOOM_IN_ID,
    ZOOM_OUT_ID,
    card_id,
)
from campus.renderers import PerspectiveRenderer, TileMapRenderer
from campus.retry import FAILED, RetryTask

logger = logging.getLogger(__name__)

MODE_2D = '2d'
MODE_3D = '3d'

IDLE = 'idle'
LOADING = 'loading'
READY = 'ready'

FIT_ALL_PADDING = 0.15
FIT_CATEGORY_PADDING = 0.2
FOCUS_ZOOM = 18
PITCH_3D = 60

HIGHLIGHT_SECONDS = 1.5
RESIZE_DELAY = 0.2
LIBRARY_RETRY_ATTEMPTS = 10
LIBRARY_RETRY_INTERVAL = 0.3

MAP_LIBRARY = 'leaflet'
MAP_3D_LIBRARY = 'maplibre'

LOAD_FAILED_MESSAGE = 'Map failed to load. Please refresh the page.'


class MapViewController:
    def __init__(self, page, loop, markers=CAMPUS_MARKERS, aliases=CATEGORY_ALIASES,
                 center=CAMPUS_CENTER, initial_zoom=16):
        self.page = page
        self.loop = loop
        self.markers = tuple(markers)
        self.aliases = aliases
        self.center = center
        self.initial_zoom = initial_zoom

        self.mode = MODE_2D
        self.state = IDLE
        self.map2d = None
        self.map3d = None
        self.current_category = None
        self._loader = None
        self._deferred = []

    # -- lifecycle ---------------------------------------------------------

    def start(self):
        """
        Wait for the 2D map library, then build the map. A failed wait is
        final: later calls return the failed task without retrying.

        Returns:
            RetryTask or None: The loader task, or None when the page has no
            map container
        """
        if self.page.get(MAP_ID) is None:
            logger.debug("No map container on page, map disabled")
            return None
        if self.state != IDLE:
            return self._loader

        self.state = LOADING
        self._loader = RetryTask(
            self.loop,
            probe=lambda: self.page.library_loaded(MAP_LIBRARY),
            on_success=self._library_ready,
            on_failure=self._load_failed,
            attempts=LIBRARY_RETRY_ATTEMPTS,
            interval=LIBRARY_RETRY_INTERVAL,
            name='map library',
        )
        return self._loader.start()

    def _library_ready(self, _):
        self.init_map()
        deferred, self._deferred = self._deferred, []
        for action in deferred:
            action()

    def _load_failed(self):
        self.state = FAILED
        if self._deferred:
            logger.warning(f"Dropping {len(self._deferred)} map action(s), library never loaded")
        self._deferred = []
        container = self.page.get(MAP_ID)
        if container is not None:
            container.text = LOAD_FAILED_MESSAGE

    def _ready_or_defer(self, action=None):
        """
        Make sure the map is being loaded and report whether it is ready.

        When it is still loading, ``action`` runs once right after the map
        is built. Nothing is queued when the map is disabled or failed.

        Returns:
            bool: True if the map can be used now
        """
        if self.state == IDLE:
            self.start()
        if self.state == READY:
            return True
        if self.state == LOADING and action is not None:
            self._deferred.append(action)
        return False

    def init_map(self):
        """
        Build the 2D map and its category marker groups. Calling it again
        on the same map changes nothing.
        """
        if self.map2d is None:
            self.map2d = TileMapRenderer(self.center, self.initial_zoom)

        if not self.map2d.all_markers():
            for category in CATEGORIES:
                self.map2d.add_group(category)
            for marker in self.markers:
                self.map2d.add_group(marker.category).add(marker)
            for name in self.map2d.layer_names():
                self.map2d.set_layer_visible(name, True)
            self._fit(self.map2d.all_markers(), FIT_ALL_PADDING)
            logger.info(f"Map initialized with {len(self.markers)} markers")

        self.state = READY
        return self.map2d

    @property
    def initialized(self):
        return self.map2d is not None and bool(self.map2d.all_markers())

    def teardown(self):
        self.map2d = None
        self.map3d = None
        self.mode = MODE_2D
        self.state = IDLE
        self.current_category = None
        self._loader = None
        self._deferred = []

    # -- view helpers ------------------------------------------------------

    def active_renderer(self):
        return self.map3d if self.mode == MODE_3D else self.map2d

    def _fit(self, markers, padding):
        self.map2d.fit_bounds([m.coordinates for m in markers], padding)

    def _show(self, element_id, visible):
        element = self.page.get(element_id)
        if element is not None:
            element.visible = visible

    def highlight_card(self, category):
        """Highlight a quick-link card, clearing it after a fixed delay."""
        card = self.page.get(card_id(category))
        if card is None:
            return
        card.classes.add(HIGHLIGHT_CLASS)
        self.loop.call_later(HIGHLIGHT_SECONDS, card.classes.discard, HIGHLIGHT_CLASS)

    def zoom_in(self):
        renderer = self.active_renderer()
        if renderer is not None:
            renderer.zoom_in()

    def zoom_out(self):
        renderer = self.active_renderer()
        if renderer is not None:
            renderer.zoom_out()

    def on_control_click(self, element_id):
        """Dispatch a click on one of the map's control buttons."""
        actions = {
            ZOOM_IN_ID: self.zoom_in,
            ZOOM_OUT_ID: self.zoom_out,
            TOGGLE_3D_ID: self.toggle_3d,
        }
        action = actions.get(element_id)
        if action is None or self.page.get(element_id) is None:
            return None
        return action()

    # -- 2D / 3D handoff ---------------------------------------------------

    def toggle_3d(self):
        """
        Switch between the 2D and 3D renderers, carrying the viewport over.

        Returns:
            str: The mode after the switch
        """
        if self.mode == MODE_2D:
            self._enter_3d()
        else:
            self._enter_2d()
        return self.mode

    def _enter_3d(self):
        if not self.page.library_loaded(MAP_3D_LIBRARY):
            logger.warning("3D map library not loaded, staying in 2D")
            return
        if not self._ready_or_defer():
            logger.debug("2D map not ready, staying in 2D")
            return

        viewport = self.map2d.get_viewport()
        if self.map3d is None:
            self.map3d = PerspectiveRenderer(
                (viewport.lat, viewport.lng), pitch=PITCH_3D, layers=CATEGORIES
            )
        self.map3d.jump_to(viewport.with_zoom(max(0, viewport.zoom - 1)), pitch=PITCH_3D)
        for name in self.map3d.layer_names():
            self.map3d.set_layer_visible(name, self.map2d.is_layer_visible(name))

        self._show(MAP_ID, False)
        self._show(MAP_3D_ID, True)
        toggle = self.page.get(TOGGLE_3D_ID)
        if toggle is not None:
            toggle.text = '2D'
        self.mode = MODE_3D
        logger.debug(f"Switched to 3D at {viewport}")

    def _enter_2d(self):
        viewport = self.map3d.get_viewport()
        self.map2d.set_viewport(viewport.with_zoom(viewport.zoom + 1))

        self._show(MAP_3D_ID, False)
        self._show(MAP_ID, True)
        toggle = self.page.get(TOGGLE_3D_ID)
        if toggle is not None:
            toggle.text = '3D'
        self.mode = MODE_2D
        self.loop.call_later(RESIZE_DELAY, self._invalidate_2d)
        logger.debug(f"Switched to 2D at {viewport}")

    def _invalidate_2d(self):
        if self.map2d is not None:
            self.map2d.invalidate_size()

    def ensure_2d(self):
        if self.mode == MODE_3D:
            self._enter_2d()

    # -- filtering and search ----------------------------------------------

    def filter_by_category(self, category):
        """
        Show one category's markers and fit the view to them. An unknown
        category shows every group and fits all markers. While the map is
        still loading the filter is applied once it is ready.
        """
        self.ensure_2d()
        if not self._ready_or_defer(lambda: self.filter_by_category(category)):
            return None

        if category not in self.map2d.groups:
            for name in self.map2d.layer_names():
                self.map2d.set_layer_visible(name, True)
            self.current_category = None
            self._fit(self.map2d.all_markers(), FIT_ALL_PADDING)
            return None

        for name in self.map2d.layer_names():
            self.map2d.set_layer_visible(name, name == category)
        self.current_category = category
        group = self.map2d.groups[category]
        if len(group):
            self._fit(group.markers, FIT_CATEGORY_PADDING)
        return category

    def show_category(self, category):
        """Quick-link card action: highlight the card and filter the map."""
        self.highlight_card(category)
        return self.filter_by_category(category)

    def resolve_alias(self, query):
        return self.aliases.get(query.strip().lower())

    def focus_on_search(self, query, retry=True):
        """
        Bring a search result into view.

        A query naming a category alias filters to that category. Otherwise
        the first rendered marker whose name contains the query is centered
        and its popup opened. If the map is not built yet, the search is
        tried once more as soon as the map library loads.

        Returns:
            bool: True if something was focused
        """
        query = (query or '').strip()
        if not query:
            return False
        self.ensure_2d()

        category = self.resolve_alias(query)
        if category is not None:
            self.show_category(category)
            return True

        retry_action = (lambda: self.focus_on_search(query, retry=False)) if retry else None
        if not self._ready_or_defer(retry_action):
            return False

        needle = query.lower()
        for marker in self.map2d.rendered_markers():
            if needle in marker.name.lower():
                self.map2d.set_view(marker.coordinates, FOCUS_ZOOM)
                self.map2d.open_popup(marker)
                return True
        return False

    def set_basemap(self, key):
        """
        Switch the 2D basemap, deferring the switch while the map is still
        loading. Unknown keys raise KeyError.
        """
        basemap = BASEMAPS[key]
        if not self._ready_or_defer(lambda: self.map2d.set_basemap(key)):
            return basemap
        return self.map2d.set_basemap(key)
