"""Coordinate value types shared by geometry construction and reprojection"""
import math
from pydantic import BaseModel, ConfigDict
from typing import Tuple


class Coordinate(BaseModel):
    """2D or 3D coordinate.

    A missing elevation is stored as NaN, never as 0.0: z=0 is a valid
    elevation. Dimension is derived from the ordinates, see
    ``geoproj.utils.geometry_utils.coord_dimension``.
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = math.nan

    def __init__(self, x: float, y: float, z: float = math.nan, **kwargs):
        super().__init__(x=x, y=y, z=z, **kwargs)

    @property
    def has_z(self) -> bool:
        return not math.isnan(self.z)

    def as_tuple(self) -> Tuple[float, ...]:
        """(x, y) for 2D coordinates, (x, y, z) when z is present"""
        if self.has_z:
            return (self.x, self.y, self.z)
        return (self.x, self.y)

    def with_xy(self, x: float, y: float) -> "Coordinate":
        """Copy with new x/y; z is carried over untouched"""
        return Coordinate(x, y, self.z)


class LineSegment(BaseModel):
    """Segment between two consecutive vertices of a LineString"""
    model_config = ConfigDict(frozen=True)

    p0: Coordinate
    p1: Coordinate

    @property
    def length(self) -> float:
        """Planar length in CRS units"""
        return math.hypot(self.p1.x - self.p0.x, self.p1.y - self.p0.y)

    @property
    def midpoint(self) -> Coordinate:
        return Coordinate((self.p0.x + self.p1.x) / 2.0, (self.p0.y + self.p1.y) / 2.0)
