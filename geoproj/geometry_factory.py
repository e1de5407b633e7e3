"""
Geometry constructors.

Points, line strings, linear rings, polygons and multipolygons built from
Coordinates or from WKT-style flat number lists. Every constructor takes an
optional trailing SRID; without one the geometry gets the configured default
(4326, WGS84). Constructors do not validate geometry: shapely closes an open
ring and raises for a too short one.
"""
import math
from numbers import Real
from typing import Iterable, List, Optional, Sequence

from .config import get_settings
from .models.coordinates import Coordinate, LineSegment
from .models.geometry import Geometry, GeometryFactory, gf


def _factory(srid: Optional[int]) -> GeometryFactory:
    return gf(get_settings().DEFAULT_SRID if srid is None else srid)


def gf_default() -> GeometryFactory:
    """Factory for the default SRID"""
    return _factory(None)


def get_srid(geom: Geometry) -> int:
    """Gets an integer SRID for a given geometry."""
    return geom.srid


def set_srid(geom: Geometry, srid: int) -> Geometry:
    """Sets a geometry's SRID to a new value, and returns that geometry."""
    return geom.set_srid(srid)


def get_factory(geom: Geometry) -> GeometryFactory:
    """Gets a GeometryFactory for a given geometry."""
    return geom.factory


def coordinate(x: float, y: float, z: float = math.nan) -> Coordinate:
    """Creates a Coordinate."""
    return Coordinate(x, y, z)


def point(*args) -> Geometry:
    """Creates a Point from a Coordinate, or an x,y pair. Allows an optional SRID argument at end.

    point(coordinate), point(coordinate, srid), point(x, y), point(x, y, srid)
    """
    if len(args) == 1 and isinstance(args[0], Coordinate):
        return _factory(None).create_point(args[0])
    if len(args) == 2:
        first, second = args
        if isinstance(first, Coordinate) and isinstance(second, int):
            return _factory(second).create_point(first)
        if isinstance(first, Real) and isinstance(second, Real):
            return _factory(None).create_point(coordinate(first, second))
    if len(args) == 3:
        x, y, srid = args
        return _factory(srid).create_point(coordinate(x, y))
    raise TypeError(f"point() expects a Coordinate or x, y, with an optional SRID; got {args!r}")


def coordinate_sequence(coordinates: Iterable[Coordinate]) -> List[Coordinate]:
    """Given a list of Coordinates, generates a CoordinateSequence."""
    return list(coordinates)


def wkt_to_coords_array(flat_coord_list: Sequence[float]) -> List[Coordinate]:
    """Groups a flat number list into consecutive (x, y) Coordinates; a trailing odd value is dropped."""
    values = list(flat_coord_list)
    return [coordinate(values[i], values[i + 1]) for i in range(0, len(values) - 1, 2)]


def linestring(coordinates: Sequence[Coordinate], srid: Optional[int] = None) -> Geometry:
    """Given a list of Coordinates, creates a LineString. Allows an optional SRID argument at end."""
    return _factory(srid).create_linestring(coordinates)


def linestring_wkt(coordinates: Sequence[float], srid: Optional[int] = None) -> Geometry:
    """Makes a LineString from a WKT-style data structure: a flat sequence of
    coordinate pairs, e.g. [0, 0, 1, 0, 0, 2, 0, 0]. Allows an optional SRID argument at end."""
    return linestring(wkt_to_coords_array(coordinates), srid)


def coords(line: Geometry) -> List[Coordinate]:
    return line.coordinates()


def coord(pt: Geometry) -> Coordinate:
    return pt.coordinates()[0]


def point_n(line: Geometry, idx: int) -> Geometry:
    """Get the point for a linestring at the specified index."""
    return line.factory.create_point(coords(line)[idx]).set_srid(line.srid)


def segment_at_idx(line: Geometry, idx: int) -> LineSegment:
    """LineSegment from a LineString's point at index to index + 1."""
    vertices = coords(line)
    return LineSegment(p0=vertices[idx], p1=vertices[idx + 1])


def linear_ring(coordinates: Sequence[Coordinate], srid: Optional[int] = None) -> Geometry:
    """Given a list of Coordinates, creates a LinearRing. Allows an optional SRID argument at end."""
    return _factory(srid).create_linear_ring(coordinates)


def linear_ring_wkt(coordinates: Sequence[float], srid: Optional[int] = None) -> Geometry:
    """Makes a LinearRing from a WKT-style data structure: a flat sequence of
    coordinate pairs, e.g. [0, 0, 1, 0, 0, 2, 0, 0]. Allows an optional SRID argument at end."""
    return linear_ring(wkt_to_coords_array(coordinates), srid)


def polygon(shell: Geometry, holes: Optional[Sequence[Geometry]] = None) -> Geometry:
    """Given a LinearRing shell, and a list of LinearRing holes, generates a
    polygon. The polygon is built by, and takes the SRID of, the shell's factory."""
    return shell.factory.create_polygon(shell, list(holes or []))


def polygon_wkt(rings: Sequence[Sequence[float]], srid: Optional[int] = None) -> Geometry:
    """Generates a polygon from a WKT-style data structure: a sequence of
    [outer-ring, hole1, hole2, ...], where outer-ring and each hole is a flat
    list of coordinate pairs, e.g.

        [[0, 0, 10, 0, 10, 10, 0, 0],
         [1, 1,  9, 1,  9,  9, 1, 1]]

    Allows an optional SRID argument at end."""
    built = [linear_ring_wkt(ring, srid) for ring in rings]
    return polygon(built[0], built[1:])


def multi_polygon(polygons: Sequence[Geometry]) -> Geometry:
    """Given a list of polygons, generates a MultiPolygon from the first polygon's factory."""
    polygons = list(polygons)
    return polygons[0].factory.create_multi_polygon(polygons)


def multi_polygon_wkt(wkt: Sequence[Sequence[Sequence[float]]], srid: Optional[int] = None) -> Geometry:
    """Creates a MultiPolygon from a WKT-style data structure, e.g.
    [[[0, 0, 1, 0, 2, 2, 0, 0]], [[5, 5, 10, 10, 6, 2, 5, 5]]]. Allows an optional SRID argument at end."""
    return multi_polygon([polygon_wkt(rings, srid) for rings in wkt])


def coordinates(geom: Geometry) -> List[Coordinate]:
    """Get a sequence of Coordinates from a Geometry"""
    return geom.coordinates()
