"""Geometry comparison and output helpers."""

from .geometry_utils import coord_dimension, geom_dimension, same_coords, same_geom, same_srid
from .geojson_utils import calculate_geometry_bounds, geometry_to_geojson, validate_geojson_geometry
