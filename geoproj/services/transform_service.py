"""Geometry reprojection between coordinate reference systems"""
import logging
import math
from typing import List

from pyproj import Transformer
from pyproj.exceptions import ProjError

from ..exceptions import MissingSRIDError, ProjectionError
from ..logging_config import get_transform_logger
from ..models.coordinates import Coordinate
from ..models.geometry import Geometry
from .crs_resolver import CRSInput, srid_to_epsg, target_srid
from .crs_service import build_transform

logger = logging.getLogger(__name__)

_UNSET = object()


def _project(coord: Coordinate, transformer: Transformer, source_crs=None, target_crs=None) -> Coordinate:
    try:
        x, y = transformer.transform(coord.x, coord.y, errcheck=True)
    except ProjError as e:
        raise ProjectionError(coord.x, coord.y, source_crs, target_crs, str(e)) from e
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ProjectionError(coord.x, coord.y, source_crs, target_crs, "projection produced non-finite output")
    # z is never projected: elevation passes through untouched
    return coord.with_xy(x, y)


def transform_coord(coord: Coordinate, transformer: Transformer) -> Coordinate:
    """Transforms a coordinate using an existing transformer.

    Raises:
        ProjectionError: if the coordinate lies outside the target projection's domain
    """
    return _project(coord, transformer)


def reproject_coord(coord: Coordinate, crs1: CRSInput, crs2: CRSInput) -> Coordinate:
    """Transforms a coordinate between two CRS references; equal references return it as is."""
    if crs1 == crs2:
        return coord
    return _project(coord, build_transform(crs1, crs2), crs1, crs2)


def _apply_coordinate_filter(geom: Geometry, transformer: Transformer, crs1, crs2) -> None:
    """Replace every coordinate of geom, in sequence order, with its projection."""
    sequence: List[Coordinate] = geom.coordinates()
    for i in range(len(sequence)):
        sequence[i] = _project(sequence[i], transformer, crs1, crs2)
    geom._replace_coordinates(sequence)


def _tf_set_srid(geom: Geometry, crs: CRSInput) -> Geometry:
    """When the final projection is an SRID or EPSG name, set the geometry's SRID."""
    srid = target_srid(crs)
    if srid is not None:
        geom.set_srid(srid)
    return geom


def _tf(geom: Geometry, crs1: CRSInput, crs2: CRSInput) -> Geometry:
    log = get_transform_logger(crs1, crs2, geom.srid)
    clone = geom.clone()
    transformer = build_transform(crs1, crs2)
    try:
        _apply_coordinate_filter(clone, transformer, crs1, crs2)
    except ProjectionError as e:
        log.error(f"Projection failed for {geom.geom_type.value}: {e}", extra={"phase": e.phase})
        raise
    log.debug(f"Transformed {clone.geom_type.value} ({clone.num_coordinates()} coordinates)",
              extra={"geometry_type": clone.geom_type.value, "coordinate_count": clone.num_coordinates()})
    return _tf_set_srid(clone, crs2)


def transform_geom(geom: Geometry, crs1: CRSInput, crs2: CRSInput = _UNSET) -> Geometry:
    """Transform a geometry to another CRS, if needed.

    With one CRS, the geometry's own SRID is the source and the geometry is
    returned unchanged when it is already in the target system. With two, the
    transformation is forced between those systems; equal references only
    re-tag the geometry's SRID.

    A new geometry is returned whenever coordinates are transformed; the input
    is never modified except for that SRID re-tag. The result's SRID is the
    target's when the target is an integer or EPSG name, and is left as it was
    otherwise.

    Raises:
        MissingSRIDError: single-CRS form on a geometry with SRID 0
        CRSResolutionError: either CRS reference cannot be resolved
        TransformConstructionError: no transformation exists between the systems
        ProjectionError: a coordinate cannot be projected
    """
    if crs2 is _UNSET:
        target = crs1
        geom_srid = geom.srid
        if geom_srid == 0:
            raise MissingSRIDError(geom.geom_type.value)
        if geom_srid == target or srid_to_epsg(geom_srid) == target:
            logger.debug(f"{geom.geom_type.value} already in {target!r}, no transform needed")
            return geom
        return transform_geom(geom, geom_srid, target)

    if crs1 == crs2:
        return _tf_set_srid(geom, crs2)
    return _tf(geom, crs1, crs2)
