"""Models package for geoproj."""

from .coordinates import Coordinate, LineSegment
from .geometry import Geometry, GeometryFactory, GeometryType, gf

__all__ = ["Coordinate", "LineSegment", "Geometry", "GeometryFactory", "GeometryType", "gf"]
