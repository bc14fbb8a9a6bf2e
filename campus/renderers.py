"""
Renderer adapters for the two map views.

Both adapters expose the same capability: get/set a ``ViewportState`` and
show/hide named marker layers. ``TileMapRenderer`` is the 2D tile map and can
export itself as a folium map; ``PerspectiveRenderer`` is the pitched
pseudo-3D view.
"""

import logging
from abc import ABC, abstractmethod

import folium

from campus.data import BASEMAPS, DEFAULT_BASEMAP, CATEGORY_NAMES
from campus.viewport import LatLngBounds, ViewportState, bounds_zoom, clamp

logger = logging.getLogger(__name__)


class Renderer(ABC):
    min_zoom = 0
    max_zoom = 22

    def __init__(self, center, zoom):
        self.center = tuple(center)
        self.zoom = clamp(zoom, self.min_zoom, self.max_zoom)
        self.hidden_layers = set()

    def get_viewport(self):
        return ViewportState(self.center[0], self.center[1], self.zoom)

    def set_viewport(self, viewport):
        self.center = (viewport.lat, viewport.lng)
        self.zoom = clamp(viewport.zoom, self.min_zoom, self.max_zoom)

    def zoom_in(self, step=1):
        self.zoom = clamp(self.zoom + step, self.min_zoom, self.max_zoom)

    def zoom_out(self, step=1):
        self.zoom = clamp(self.zoom - step, self.min_zoom, self.max_zoom)

    @abstractmethod
    def layer_names(self):
        """Names of the layers this renderer knows about."""

    def set_layer_visible(self, name, visible):
        if name not in self.layer_names():
            raise KeyError(name)
        if visible:
            self.hidden_layers.discard(name)
        else:
            self.hidden_layers.add(name)

    def is_layer_visible(self, name):
        return name in self.layer_names() and name not in self.hidden_layers

    def visible_layers(self):
        return [name for name in self.layer_names() if name not in self.hidden_layers]


class LayerGroup:
    def __init__(self, name):
        self.name = name
        self.markers = []

    def add(self, marker):
        self.markers.append(marker)

    def __len__(self):
        return len(self.markers)


class TileMapRenderer(Renderer):
    """2D slippy tile map with one marker group per category."""

    max_zoom = BASEMAPS[DEFAULT_BASEMAP].max_zoom

    def __init__(self, center, zoom=16, width=800, height=600):
        super().__init__(center, zoom)
        self.width = width
        self.height = height
        self.groups = {}
        self.basemap = BASEMAPS[DEFAULT_BASEMAP]
        self.open_popup_name = None
        self.size_invalidations = 0

    def layer_names(self):
        return list(self.groups)

    def add_group(self, name):
        group = self.groups.get(name)
        if group is None:
            group = self.groups[name] = LayerGroup(name)
        return group

    def rendered_markers(self):
        """Markers in visible groups, in group then insertion order."""
        return [m for name in self.visible_layers() for m in self.groups[name].markers]

    def all_markers(self):
        return [m for group in self.groups.values() for m in group.markers]

    def fit_bounds(self, points, padding):
        points = list(points)
        if not points:
            return
        bounds = LatLngBounds.from_points(points).pad(padding)
        self.center = bounds.center
        self.zoom = bounds_zoom(bounds, self.width, self.height, self.min_zoom, self.max_zoom)

    def set_view(self, latlng, zoom):
        self.center = tuple(latlng)
        self.zoom = clamp(zoom, self.min_zoom, self.max_zoom)

    def open_popup(self, marker):
        self.open_popup_name = marker.name

    def close_popup(self):
        self.open_popup_name = None

    def invalidate_size(self):
        self.size_invalidations += 1

    def set_basemap(self, key):
        """
        Switch tile layers. The zoom ceiling follows the new layer's
        maximum and the current zoom is pulled down under it.
        """
        basemap = BASEMAPS[key]
        self.basemap = basemap
        self.max_zoom = basemap.max_zoom
        if self.zoom > self.max_zoom:
            self.zoom = self.max_zoom
        return basemap

    def to_folium(self):
        """
        Build a folium map mirroring the current view, basemap and groups.

        Returns:
            folium.Map
        """
        return build_folium_map(
            self.center, self.zoom, self.basemap, self.groups, self.is_layer_visible,
        )


class PerspectiveRenderer(Renderer):
    """Pitched vector view. Layers are named like the 2D marker groups."""

    max_zoom = 22
    max_pitch = 60

    def __init__(self, center, zoom=15, pitch=60, bearing=0, layers=()):
        super().__init__(center, zoom)
        self.pitch = clamp(pitch, 0, self.max_pitch)
        self.bearing = bearing
        self.layers = list(layers)

    def layer_names(self):
        return list(self.layers)

    def add_layer(self, name):
        if name not in self.layers:
            self.layers.append(name)

    def jump_to(self, viewport, pitch=None):
        self.set_viewport(viewport)
        if pitch is not None:
            self.pitch = clamp(pitch, 0, self.max_pitch)

    def to_folium(self, source):
        """
        Build a folium map of this view, drawing the marker groups and
        basemap of a 2D renderer with this renderer's viewport and layer
        visibility. The pitch is applied by the page, not by folium.

        Args:
            source (TileMapRenderer): Renderer owning the markers

        Returns:
            folium.Map
        """
        return build_folium_map(
            self.center, self.zoom, source.basemap, source.groups, self.is_layer_visible,
        )


def build_folium_map(center, zoom, basemap, groups, is_visible):
    """
    Folium map with every basemap as a switchable tile layer (the given one
    shown) and a feature group per marker group.
    """
    fmap = folium.Map(
        location=list(center),
        zoom_start=min(zoom, basemap.max_zoom),
        max_zoom=basemap.max_zoom,
        tiles=None,
        control_scale=True,
    )
    for option in BASEMAPS.values():
        folium.TileLayer(
            tiles=option.tiles,
            attr=option.attribution,
            name=option.name,
            max_zoom=option.max_zoom,
            show=option.key == basemap.key,
            overlay=False,
        ).add_to(fmap)

    for name, group in groups.items():
        feature_group = folium.FeatureGroup(
            name=CATEGORY_NAMES.get(name, name),
            show=is_visible(name),
        )
        for marker in group.markers:
            folium.Marker(
                list(marker.coordinates),
                tooltip=marker.name,
                popup=marker.name,
            ).add_to(feature_group)
        feature_group.add_to(fmap)

    folium.LayerControl(collapsed=True).add_to(fmap)
    return fmap
