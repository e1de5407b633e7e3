"""GeoJSON output for geoproj geometries."""

import logging
from typing import Any, Dict, List, Tuple

import geojson

from ..models.geometry import Geometry, GeometryType

logger = logging.getLogger(__name__)


def _positions(ring) -> List[List[float]]:
    return [list(position) for position in ring.coords]


def geometry_to_geojson(geom: Geometry) -> Dict[str, Any]:
    """Convert a Geometry to a GeoJSON geometry mapping.

    LinearRings have no GeoJSON type and are written as LineStrings. Positions
    are 3D when the geometry carries Z values. The SRID is not written: RFC 7946
    dropped the ``crs`` member, so callers reproject to 4326 first if needed.
    """
    shape = geom.shape
    geom_type = geom.geom_type

    if geom_type is GeometryType.POINT:
        return {"type": "Point", "coordinates": list(shape.coords[0])}

    if geom_type in (GeometryType.LINESTRING, GeometryType.LINEARRING):
        return {"type": "LineString", "coordinates": _positions(shape)}

    if geom_type is GeometryType.POLYGON:
        rings = [_positions(shape.exterior)]
        # Add interior rings (holes) if present
        rings.extend(_positions(interior) for interior in shape.interiors)
        return {"type": "Polygon", "coordinates": rings}

    if geom_type is GeometryType.MULTIPOLYGON:
        coordinates = []
        for poly in shape.geoms:
            poly_coords = [_positions(poly.exterior)]
            poly_coords.extend(_positions(interior) for interior in poly.interiors)
            coordinates.append(poly_coords)
        return {"type": "MultiPolygon", "coordinates": coordinates}

    raise ValueError(f"Unsupported geometry type: {geom_type}")


def validate_geojson_geometry(geojson_dict: Dict[str, Any]) -> bool:
    """Validate GeoJSON geometry structure."""
    try:
        # Use geojson library for validation
        geometry = geojson.loads(geojson.dumps(geojson_dict))
        return geometry.is_valid
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"GeoJSON validation failed: {e}")
        return False


def calculate_geometry_bounds(geom: Geometry) -> Tuple[float, float, float, float]:
    """Bounding box (min_x, min_y, max_x, max_y) in the geometry's own CRS units."""
    bounds = geom.shape.bounds
    return bounds[0], bounds[1], bounds[2], bounds[3]
