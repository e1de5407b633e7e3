"""
SRID-aware geometry wrapper around shapely.

shapely geometries are immutable and carry no factory, so every geometry built
by geoproj is wrapped in a ``Geometry`` holding the shapely object, the
``GeometryFactory`` that created it and an integer SRID (0 means unassigned).
The SRID is mirrored onto the GEOS geometry so EWKB output carries it.
"""
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence

import numpy as np
import shapely
from shapely.geometry import LinearRing, LineString, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry

from .coordinates import Coordinate


class GeometryType(str, Enum):
    POINT = "Point"
    LINESTRING = "LineString"
    LINEARRING = "LinearRing"
    POLYGON = "Polygon"
    MULTIPOLYGON = "MultiPolygon"


def _coord_rows(coordinates: Iterable[Coordinate]) -> List[tuple]:
    """Uniform (x, y) or (x, y, z) rows; 2D coordinates keep a NaN z when mixed with 3D ones"""
    coordinates = list(coordinates)
    if any(c.has_z for c in coordinates):
        return [(c.x, c.y, c.z) for c in coordinates]
    return [(c.x, c.y) for c in coordinates]


@dataclass(frozen=True)
class GeometryFactory:
    """Creates geometries bound to a single SRID with a floating precision model"""
    srid: int
    precision_model: str = "FLOATING"

    def create_point(self, coordinate: Coordinate) -> "Geometry":
        return Geometry(Point(coordinate.as_tuple()), self)

    def create_linestring(self, coordinates: Sequence[Coordinate]) -> "Geometry":
        return Geometry(LineString(_coord_rows(coordinates)), self)

    def create_linear_ring(self, coordinates: Sequence[Coordinate]) -> "Geometry":
        return Geometry(LinearRing(_coord_rows(coordinates)), self)

    def create_polygon(self, shell: "Geometry", holes: Sequence["Geometry"] = ()) -> "Geometry":
        return Geometry(Polygon(shell.shape, [hole.shape for hole in holes]), self)

    def create_multi_polygon(self, polygons: Sequence["Geometry"]) -> "Geometry":
        return Geometry(MultiPolygon([polygon.shape for polygon in polygons]), self)


@lru_cache(maxsize=None)
def gf(srid: int) -> GeometryFactory:
    """Factory for a given SRID; one shared instance per SRID."""
    return GeometryFactory(srid)


class Geometry:
    """A shapely geometry tagged with an SRID and the factory that built it."""

    def __init__(self, shape: BaseGeometry, factory: GeometryFactory, srid: Optional[int] = None):
        self.factory = factory
        self._srid = factory.srid if srid is None else srid
        self._shape = shapely.set_srid(shape, self._srid)

    @property
    def shape(self) -> BaseGeometry:
        """The wrapped shapely geometry, for use with shapely's algorithms"""
        return self._shape

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType(self._shape.geom_type)

    @property
    def srid(self) -> int:
        return self._srid

    @property
    def has_z(self) -> bool:
        return bool(shapely.has_z(self._shape))

    def set_srid(self, srid: int) -> "Geometry":
        """Re-tag this geometry in place and return it."""
        self._srid = srid
        self._shape = shapely.set_srid(self._shape, srid)
        return self

    def num_coordinates(self) -> int:
        return int(shapely.get_num_coordinates(self._shape))

    def coordinates(self) -> List[Coordinate]:
        """Every coordinate in sequence order: shell before holes, members in order."""
        rows = shapely.get_coordinates(self._shape, include_z=True)
        return [Coordinate(float(x), float(y), float(z)) for x, y, z in rows]

    def clone(self) -> "Geometry":
        """Independent copy with the same factory and SRID."""
        # shapely geometries are immutable: replacing coordinates always builds new storage
        return Geometry(self._shape, self.factory, self._srid)

    def _replace_coordinates(self, coordinates: Sequence[Coordinate]) -> None:
        # Only the transform engine calls this, and only on a clone it owns.
        include_z = self.has_z
        if include_z:
            rows = np.array([(c.x, c.y, c.z) for c in coordinates], dtype=float)
        else:
            rows = np.array([(c.x, c.y) for c in coordinates], dtype=float)
        rows = rows.reshape(-1, 3 if include_z else 2)
        shape = shapely.transform(self._shape, lambda _: rows, include_z=include_z)
        self._shape = shapely.set_srid(shape, self._srid)

    @property
    def shell(self) -> "Geometry":
        """Exterior ring of a Polygon"""
        return Geometry(self._shape.exterior, self.factory, self._srid)

    @property
    def holes(self) -> List["Geometry"]:
        """Interior rings of a Polygon"""
        return [Geometry(ring, self.factory, self._srid) for ring in self._shape.interiors]

    @property
    def polygons(self) -> List["Geometry"]:
        """Member polygons of a MultiPolygon"""
        return [Geometry(polygon, self.factory, self._srid) for polygon in self._shape.geoms]

    @property
    def __geo_interface__(self):
        return self._shape.__geo_interface__

    def __repr__(self) -> str:
        return f"<Geometry {self.geom_type.value} SRID={self._srid} {self._shape.wkt}>"
