"""
geoproj - SRID-aware geometry construction and CRS reprojection.

Geometries are shapely objects wrapped with an SRID and the factory that built
them; reprojection goes through pyproj.
"""

from .exceptions import (
    ConfigurationError,
    CRSResolutionError,
    GeoprojError,
    MissingSRIDError,
    ProjectionError,
    TransformConstructionError,
)
from .geometry_factory import (
    coord,
    coordinate,
    coordinate_sequence,
    coordinates,
    coords,
    get_factory,
    get_srid,
    gf_default,
    linear_ring,
    linear_ring_wkt,
    linestring,
    linestring_wkt,
    multi_polygon,
    multi_polygon_wkt,
    point,
    point_n,
    polygon,
    polygon_wkt,
    segment_at_idx,
    set_srid,
    wkt_to_coords_array,
)
from .models import Coordinate, Geometry, GeometryFactory, GeometryType, LineSegment, gf
from .services import (
    CRSTransformationService,
    build_definition,
    build_transform,
    classify,
    epsg_to_srid,
    is_crs_name,
    is_epsg,
    is_proj4_string,
    reproject_coord,
    srid_to_epsg,
    transform_coord,
    transform_geom,
)
from .utils import (
    coord_dimension,
    geom_dimension,
    geometry_to_geojson,
    same_coords,
    same_geom,
    same_srid,
)

__version__ = "0.1.0"
