"""
Test suite for geometry reprojection.
Covers the identity short-circuits, clone-then-walk behaviour and SRID re-tagging.
"""
import math
import pytest
from unittest.mock import MagicMock, patch
from pyproj.exceptions import ProjError

from geoproj import geometry_factory as gfn
from geoproj.exceptions import CRSResolutionError, MissingSRIDError, ProjectionError
from geoproj.models.coordinates import Coordinate
from geoproj.models.geometry import GeometryType
from geoproj.services.crs_service import build_transform
from geoproj.services.transform_service import reproject_coord, transform_coord, transform_geom
from geoproj.utils.geometry_utils import geom_dimension, same_coords, same_geom
from tests.conftest import MERCATOR_X_AT_LON_10, assert_coords_close


def _shifting_transformer():
    """Mock transformer adding 1 to x and 2 to y, recording every call."""
    transformer = MagicMock()
    transformer.transform.side_effect = lambda x, y, errcheck=False: (x + 1.0, y + 2.0)
    return transformer


class TestSingleCRSForm:
    """transform_geom(g, crs): source system taken from the geometry's SRID."""

    def test_same_integer_srid_returns_same_object(self, sample_polygon):
        assert transform_geom(sample_polygon, 4326) is sample_polygon

    def test_same_epsg_name_returns_same_object(self, origin_point):
        result = transform_geom(origin_point, "EPSG:4326")
        assert result is origin_point
        assert result.srid == 4326
        assert same_geom(result, gfn.point(0, 0, 4326))

    def test_identity_keeps_dimension(self, point_3d):
        result = transform_geom(point_3d, 4326)
        assert result is point_3d
        assert geom_dimension(result) == 3

    def test_missing_srid(self, unassigned_point):
        with pytest.raises(MissingSRIDError) as exc_info:
            transform_geom(unassigned_point, 3857)
        assert "Point" in str(exc_info.value)

    def test_missing_srid_even_for_matching_target(self, unassigned_point):
        with pytest.raises(MissingSRIDError):
            transform_geom(unassigned_point, 0)

    def test_transforms_from_own_srid(self):
        pt = gfn.point(10.0, 0.0, 4326)
        result = transform_geom(pt, 3857)

        assert result is not pt
        assert result.srid == 3857
        assert_coords_close(result.coordinates(), [(MERCATOR_X_AT_LON_10, 0.0)], abs_tol=1e-3)

    def test_unrecognized_target(self, origin_point, test_crs):
        with pytest.raises(CRSResolutionError):
            transform_geom(origin_point, test_crs.NOT_A_CRS)


class TestExplicitPairForm:
    """transform_geom(g, crs1, crs2)."""

    def test_equal_references_only_retag(self, sample_polygon):
        before = sample_polygon.coordinates()
        result = transform_geom(sample_polygon, 3857, 3857)

        assert result is sample_polygon
        assert result.srid == 3857
        assert all(same_coords(a, b) for a, b in zip(before, result.coordinates()))

    def test_equal_non_epsg_references_keep_srid(self, sample_polygon, test_crs):
        result = transform_geom(sample_polygon, test_crs.MERCATOR_PROJ4, test_crs.MERCATOR_PROJ4)
        assert result is sample_polygon
        assert result.srid == 4326

    def test_equal_references_never_build_a_transformer(self, origin_point):
        with patch("geoproj.services.transform_service.build_transform") as mock_build:
            transform_geom(origin_point, "EPSG:3857", "EPSG:3857")
        mock_build.assert_not_called()

    def test_original_is_never_modified(self, sample_polygon):
        before = sample_polygon.coordinates()
        result = transform_geom(sample_polygon, 4326, 3857)

        assert result is not sample_polygon
        assert sample_polygon.srid == 4326
        assert all(same_coords(a, b) for a, b in zip(before, sample_polygon.coordinates()))
        assert result.srid == 3857

    def test_epsg_name_target_sets_srid(self, origin_point):
        assert transform_geom(origin_point, 4326, "EPSG:3857").srid == 3857

    def test_proj4_target_leaves_srid(self, test_crs):
        pt = gfn.point(10.0, 0.0, 4326)
        result = transform_geom(pt, 4326, test_crs.MERCATOR_PROJ4)

        assert result.srid == 4326
        assert_coords_close(result.coordinates(), [(MERCATOR_X_AT_LON_10, 0.0)], abs_tol=1e-3)

    def test_non_epsg_authority_target_leaves_srid(self, test_crs):
        pt = gfn.point(10.0, 0.0, 4326)
        result = transform_geom(pt, 4326, test_crs.WORLD_MERCATOR_ESRI)

        assert result.srid == 4326
        assert result.coordinates()[0].x == pytest.approx(MERCATOR_X_AT_LON_10, abs=1e-3)

    def test_explicit_source_ignores_geometry_srid(self, unassigned_point):
        result = transform_geom(unassigned_point, 4326, 3857)
        assert result.srid == 3857

    def test_round_trip(self, sample_polygon):
        there = transform_geom(sample_polygon, 3857)
        back = transform_geom(there, 4326)

        assert back.srid == 4326
        expected = [(c.x, c.y) for c in sample_polygon.coordinates()]
        assert_coords_close(back.coordinates(), expected, abs_tol=1e-7)

    def test_unrecognized_source(self, origin_point, test_crs):
        with pytest.raises(CRSResolutionError):
            transform_geom(origin_point, test_crs.NOT_A_CRS, 3857)


class TestCoordinateWalk:
    """Every coordinate is visited once, in order, with z passed through."""

    def test_visits_every_coordinate_in_order(self, sample_polygon):
        transformer = _shifting_transformer()
        with patch("geoproj.services.transform_service.build_transform", return_value=transformer):
            result = transform_geom(sample_polygon, 4326, 3857)

        originals = sample_polygon.coordinates()
        calls = [c.args for c in transformer.transform.call_args_list]
        assert calls == [(c.x, c.y) for c in originals]
        assert_coords_close(result.coordinates(), [(c.x + 1.0, c.y + 2.0) for c in originals])

    def test_structure_is_preserved(self, sample_polygon):
        transformer = _shifting_transformer()
        with patch("geoproj.services.transform_service.build_transform", return_value=transformer):
            result = transform_geom(sample_polygon, 4326, 3857)

        assert result.geom_type is GeometryType.POLYGON
        assert len(result.shell.coordinates()) == 4
        assert len(result.holes) == 1
        assert len(result.holes[0].coordinates()) == 4

    def test_linear_ring_stays_linear_ring(self):
        ring = gfn.linear_ring_wkt([0, 0, 1, 0, 1, 1, 0, 0])
        result = transform_geom(ring, 3857)
        assert result.geom_type is GeometryType.LINEARRING

    def test_multipolygon_walks_every_member(self):
        multi = gfn.multi_polygon_wkt([
            [[0, 0, 1, 0, 1, 1, 0, 0]],
            [[5, 5, 6, 5, 6, 6, 5, 5], [5.2, 5.2, 5.8, 5.2, 5.8, 5.8, 5.2, 5.2]],
        ])
        transformer = _shifting_transformer()
        with patch("geoproj.services.transform_service.build_transform", return_value=transformer):
            result = transform_geom(multi, 4326, 3857)

        assert transformer.transform.call_count == 12
        assert result.srid == 3857
        assert len(result.polygons) == 2

    def test_z_passes_through(self, point_3d):
        result = transform_geom(point_3d, 3857)

        c = result.coordinates()[0]
        assert c.z == 55.5
        assert c.x == pytest.approx(MERCATOR_X_AT_LON_10, abs=1e-3)
        assert geom_dimension(result) == 3

    def test_zero_elevation_is_kept(self):
        line = gfn.linestring([Coordinate(0.0, 0.0, 0.0), Coordinate(1.0, 1.0, 12.0)])
        result = transform_geom(line, 3857)
        assert [c.z for c in result.coordinates()] == [0.0, 12.0]

    def test_2d_stays_2d(self, sample_linestring):
        result = transform_geom(sample_linestring, 3857)
        assert not result.has_z
        assert all(math.isnan(c.z) for c in result.coordinates())


class TestProjectionFailures:
    """A coordinate that cannot be projected aborts the whole operation."""

    def test_proj_error_becomes_projection_error(self, sample_linestring):
        transformer = MagicMock()
        transformer.transform.side_effect = [(0.0, 0.0), ProjError("outside projection domain")]
        with patch("geoproj.services.transform_service.build_transform", return_value=transformer):
            with pytest.raises(ProjectionError) as exc_info:
                transform_geom(sample_linestring, 4326, 3857)

        error = exc_info.value
        assert error.phase == "application"
        assert (error.x, error.y) == (3.0, 4.0)
        assert error.source_crs == 4326
        assert error.target_crs == 3857
        assert isinstance(error.__cause__, ProjError)

    def test_failed_walk_leaves_original_untouched(self, sample_linestring):
        transformer = MagicMock()
        transformer.transform.side_effect = ProjError("outside projection domain")
        with patch("geoproj.services.transform_service.build_transform", return_value=transformer):
            with pytest.raises(ProjectionError):
                transform_geom(sample_linestring, 4326, 3857)

        assert sample_linestring.srid == 4326
        assert_coords_close(sample_linestring.coordinates(), [(0, 0), (3, 4), (6, 8)])

    def test_non_finite_output_is_rejected(self, origin_point):
        transformer = MagicMock()
        transformer.transform.return_value = (float("inf"), 0.0)
        with patch("geoproj.services.transform_service.build_transform", return_value=transformer):
            with pytest.raises(ProjectionError):
                transform_geom(origin_point, 4326, 3857)

    def test_pole_cannot_be_projected_to_mercator(self):
        pole = gfn.point(0.0, 90.0, 4326)
        with pytest.raises(ProjectionError):
            transform_geom(pole, 3857)


class TestCoordinateHelpers:
    """Single-coordinate projection."""

    def test_transform_coord_with_transformer(self):
        transformer = build_transform(4326, 3857)
        result = transform_coord(Coordinate(10.0, 0.0, 3.0), transformer)
        assert result.x == pytest.approx(MERCATOR_X_AT_LON_10, abs=1e-3)
        assert result.z == 3.0

    def test_reproject_coord_equal_references(self):
        c = Coordinate(1.0, 2.0)
        assert reproject_coord(c, 4326, 4326) is c

    def test_reproject_coord(self):
        result = reproject_coord(Coordinate(10.0, 0.0), "EPSG:4326", 3857)
        assert result.x == pytest.approx(MERCATOR_X_AT_LON_10, abs=1e-3)
        assert math.isnan(result.z)
