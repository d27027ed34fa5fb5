"""
Geographic points and their projection into map-point space.

Map points are Web Mercator coordinates scaled so the whole world spans
[-1, 1] on both axes: x grows eastwards, y grows northwards.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from config import MERCATOR_MAX_LATITUDE, WORLD_BOUNDS
from quadtree.bounds import InvalidBoundsError, MapPoint


class InvalidCoordinateError(ValueError):
    """Raised for latitudes or longitudes outside the valid domain."""


@dataclass(frozen=True)
class LatLng:
    """Immutable geographic coordinate in degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        lat = float(self.latitude)
        lng = float(self.longitude)
        if math.isnan(lat) or not WORLD_BOUNDS["min_lat"] <= lat <= WORLD_BOUNDS["max_lat"]:
            raise InvalidCoordinateError(f"Latitude {self.latitude} outside [-90, 90]")
        if math.isnan(lng) or not WORLD_BOUNDS["min_lon"] <= lng <= WORLD_BOUNDS["max_lon"]:
            raise InvalidCoordinateError(f"Longitude {self.longitude} outside [-180, 180]")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lng)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


class LatLngBounds:
    """Closed latitude/longitude rectangle (no antimeridian wrapping)."""

    def __init__(self, min_lat: float, min_lng: float, max_lat: float, max_lng: float):
        if min_lat > max_lat or min_lng > max_lng:
            raise InvalidBoundsError(
                f"Malformed rectangle: ({min_lat}, {min_lng}) to ({max_lat}, {max_lng})"
            )
        self.south_west = LatLng(min_lat, min_lng)
        self.north_east = LatLng(max_lat, max_lng)

    def contains(self, position: LatLng) -> bool:
        return (self.south_west.latitude <= position.latitude <= self.north_east.latitude and
                self.south_west.longitude <= position.longitude <= self.north_east.longitude)

    def __repr__(self):
        return f"LatLngBounds({self.south_west}, {self.north_east})"


def project(position: LatLng) -> MapPoint:
    """Project a coordinate into map-point space."""
    lat = max(-MERCATOR_MAX_LATITUDE, min(MERCATOR_MAX_LATITUDE, position.latitude))
    x = position.longitude / 180.0
    y = math.log(math.tan(math.radians(lat) * 0.5 + math.pi / 4)) / math.pi
    return MapPoint(x, max(-1.0, min(1.0, y)))


def unproject(point: MapPoint) -> LatLng:
    """Inverse of ``project`` for points inside [-1, 1] x [-1, 1]."""
    x = max(-1.0, min(1.0, point.x))
    y = max(-1.0, min(1.0, point.y))
    latitude = math.degrees(2 * math.atan(math.exp(y * math.pi)) - math.pi / 2)
    return LatLng(latitude, x * 180.0)

