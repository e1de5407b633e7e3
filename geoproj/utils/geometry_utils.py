"""Dimension and equality checks over coordinates and geometries."""

import math
from typing import Optional

from ..models.coordinates import Coordinate
from ..models.geometry import Geometry


def coord_dimension(coord: Coordinate) -> Optional[int]:
    """Check if a Coordinate is 3D or 2D.

    3 when x, y and z are all finite, 2 when x and y are finite and z is NaN,
    None for anything else (e.g. a NaN or infinite x/y, or an infinite z).
    """
    x = math.isfinite(coord.x)
    y = math.isfinite(coord.y)
    if x and y and math.isfinite(coord.z):
        return 3
    if x and y and math.isnan(coord.z):
        return 2
    return None


def geom_dimension(geom: Geometry) -> Optional[int]:
    """In a Geometry, return 3 if any Coordinate has a Z.
    Otherwise return 2 if any Coordinate has an X and Y, else None."""
    dimensions = {coord_dimension(c) for c in geom.coordinates()}
    if 3 in dimensions:
        return 3
    if 2 in dimensions:
        return 2
    return None


def same_srid(g1: Geometry, g2: Geometry) -> bool:
    """Check if two Geometries have the same, assigned, SRID."""
    return g1.srid == g2.srid and g1.srid != 0


def same_coords(c1: Coordinate, c2: Coordinate) -> bool:
    """Check if two Coordinates have the same dimension and values."""
    d1 = coord_dimension(c1)
    if d1 is None or d1 != coord_dimension(c2):
        return False
    if d1 == 3:
        return c1.x == c2.x and c1.y == c2.y and c1.z == c2.z
    return c1.x == c2.x and c1.y == c2.y


def same_geom(g1: Geometry, g2: Geometry) -> bool:
    """Check if each vertex in two Geometries has the same coordinates and SRID."""
    if not same_srid(g1, g2):
        return False
    coords1 = g1.coordinates()
    coords2 = g2.coordinates()
    if len(coords1) != len(coords2):
        return False
    return all(same_coords(c1, c2) for c1, c2 in zip(coords1, coords2))
