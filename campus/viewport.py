"""
Viewport value objects and Web Mercator helpers shared by the renderers.
"""

import math
from dataclasses import dataclass, replace

TILE_SIZE = 256


def clamp(value, low, high):
    return max(low, min(high, value))


@dataclass(frozen=True)
class ViewportState:
    """Center and zoom captured from one renderer and applied to another."""

    lat: float
    lng: float
    zoom: float

    def with_zoom(self, zoom):
        return replace(self, zoom=zoom)


@dataclass(frozen=True)
class LatLngBounds:
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_points(cls, points):
        points = list(points)
        if not points:
            raise ValueError("Cannot build bounds from no points")
        lats = [p[0] for p in points]
        lngs = [p[1] for p in points]
        return cls(min(lats), min(lngs), max(lats), max(lngs))

    @property
    def center(self):
        return ((self.south + self.north) / 2, (self.west + self.east) / 2)

    def pad(self, ratio):
        """Extend each side by ``ratio`` of the bounds' span."""
        lat_buf = (self.north - self.south) * ratio
        lng_buf = (self.east - self.west) * ratio
        return LatLngBounds(
            self.south - lat_buf, self.west - lng_buf,
            self.north + lat_buf, self.east + lng_buf,
        )


def _mercator_y(lat):
    lat = clamp(lat, -85.05112878, 85.05112878)
    rad = math.radians(lat)
    return (1 - math.log(math.tan(rad) + 1 / math.cos(rad)) / math.pi) / 2


def bounds_zoom(bounds, width, height, min_zoom, max_zoom):
    """
    Largest integer zoom at which ``bounds`` fits a ``width`` x ``height``
    pixel container.
    """
    span_x = (bounds.east - bounds.west) / 360.0
    span_y = abs(_mercator_y(bounds.south) - _mercator_y(bounds.north))
    if span_x <= 0 and span_y <= 0:
        return max_zoom

    scales = []
    if span_x > 0:
        scales.append(width / (span_x * TILE_SIZE))
    if span_y > 0:
        scales.append(height / (span_y * TILE_SIZE))
    zoom = math.floor(math.log2(min(scales)))
    return clamp(zoom, min_zoom, max_zoom)
