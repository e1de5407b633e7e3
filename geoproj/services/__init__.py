"""CRS resolution, transformer construction and geometry reprojection."""

from .crs_resolver import (
    CRSIdentifier,
    CRSKind,
    build_definition,
    classify,
    epsg_to_srid,
    is_crs_name,
    is_epsg,
    is_proj4_string,
    srid_to_epsg,
    target_srid,
)
from .crs_service import CRSTransformationService, build_transform, get_transformation_service
from .transform_service import reproject_coord, transform_coord, transform_geom
