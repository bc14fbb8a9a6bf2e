"""
Static campus data: searchable locations, category aliases, map markers and
basemap definitions.
"""

from dataclasses import dataclass
from typing import Tuple

ACADEMIC = 'academic'
DINING = 'dining'
RESIDENCE = 'residence'
RECREATION = 'recreation'

CATEGORIES = (ACADEMIC, DINING, RESIDENCE, RECREATION)

CATEGORY_NAMES = {
    ACADEMIC: 'Academic Buildings',
    DINING: 'Dining & Food',
    RESIDENCE: 'Residence Halls',
    RECREATION: 'Recreation & Sports',
}

# Shown in the suggestion dropdown
CATEGORY_LABELS = {
    ACADEMIC: 'Academic',
    DINING: 'Dining',
    RESIDENCE: 'Residence',
    RECREATION: 'Recreation',
}

CAMPUS_LOCATIONS = [
    'Main Library', 'Student Center', 'Engineering Building', 'Science Hall',
    'Administration Building', 'Cafeteria', 'Recreation Center', 'Art Building',
    'Business School', 'Computer Lab', 'Auditorium', 'Medical Center',
    'Residence Hall A', 'Residence Hall B', 'Parking Garage',
    'Campus Store', 'Career Services', 'Financial Aid Office',
]

# Insertion order is the order category suggestions are offered in.
CATEGORY_ALIASES = {
    'academic': ACADEMIC,
    'academics': ACADEMIC,
    'class': ACADEMIC,
    'lecture': ACADEMIC,
    'dining': DINING,
    'food': DINING,
    'cafe': DINING,
    'restaurant': DINING,
    'eat': DINING,
    'residence': RESIDENCE,
    'dorm': RESIDENCE,
    'housing': RESIDENCE,
    'recreation': RECREATION,
    'gym': RECREATION,
    'sports': RECREATION,
    'fitness': RECREATION,
}


@dataclass(frozen=True)
class Marker:
    name: str
    coordinates: Tuple[float, float]
    category: str

    @property
    def lat(self):
        return self.coordinates[0]

    @property
    def lng(self):
        return self.coordinates[1]


CAMPUS_CENTER = (39.9522, -75.1932)

CAMPUS_MARKERS = (
    Marker('Main Library', (39.9527, -75.1935), ACADEMIC),
    Marker('Engineering Building', (39.9520, -75.1906), ACADEMIC),
    Marker('Science Hall', (39.9512, -75.1925), ACADEMIC),
    Marker('Business School', (39.9531, -75.1960), ACADEMIC),
    Marker('Computer Lab', (39.9516, -75.1912), ACADEMIC),
    Marker('Cafeteria', (39.9524, -75.1948), DINING),
    Marker('Student Center', (39.9535, -75.1929), DINING),
    Marker('Campus Coffee House', (39.9509, -75.1941), DINING),
    Marker('Residence Hall A', (39.9544, -75.1952), RESIDENCE),
    Marker('Residence Hall B', (39.9548, -75.1938), RESIDENCE),
    Marker('Graduate Housing', (39.9501, -75.1967), RESIDENCE),
    Marker('Recreation Center', (39.9498, -75.1915), RECREATION),
    Marker('Athletic Field', (39.9490, -75.1898), RECREATION),
    Marker('Aquatics Center', (39.9503, -75.1893), RECREATION),
)


@dataclass(frozen=True)
class Basemap:
    key: str
    name: str
    tiles: str
    attribution: str
    max_zoom: int


BASEMAPS = {
    'street': Basemap(
        'street', 'Street',
        'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png',
        '&copy; OpenStreetMap contributors',
        19,
    ),
    'satellite': Basemap(
        'satellite', 'Satellite',
        'https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}',
        'Tiles &copy; Esri',
        18,
    ),
    'topo': Basemap(
        'topo', 'Topographic',
        'https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png',
        '&copy; OpenTopoMap (CC-BY-SA)',
        17,
    ),
}

DEFAULT_BASEMAP = 'street'
