"""
Shared test fixtures for the geoproj test suite.
Provides sample coordinates, geometries and settings overrides.
"""
import math
import pytest

from geoproj import geometry_factory as gfn
from geoproj.config import Settings, get_settings
from geoproj.models.coordinates import Coordinate
from geoproj.services import crs_service


class TestCRS:
    """CRS references used across tests."""
    WGS84 = 4326
    WGS84_NAME = "EPSG:4326"
    WEB_MERCATOR = 3857
    WEB_MERCATOR_NAME = "EPSG:3857"
    WORLD_MERCATOR_ESRI = "ESRI:54004"
    MERCATOR_PROJ4 = "+proj=merc +datum=WGS84 +units=m +no_defs"
    LONGLAT_PROJ4 = "+proj=longlat +datum=WGS84 +no_defs"
    NOT_A_CRS = "NOT-A-CRS"


# Web Mercator easting of longitude 10 on the equator: a * radians(10)
MERCATOR_X_AT_LON_10 = 6378137.0 * math.radians(10.0)


@pytest.fixture
def test_crs():
    return TestCRS()


@pytest.fixture
def shell_wkt():
    return [0, 0, 10, 0, 10, 10, 0, 0]


@pytest.fixture
def hole_wkt():
    return [1, 1, 9, 1, 9, 9, 1, 1]


@pytest.fixture
def sample_polygon(shell_wkt, hole_wkt):
    """Polygon with one hole, SRID 4326."""
    return gfn.polygon_wkt([shell_wkt, hole_wkt])


@pytest.fixture
def sample_linestring():
    return gfn.linestring_wkt([0, 0, 3, 4, 6, 8])


@pytest.fixture
def origin_point():
    return gfn.point(0, 0, 4326)


@pytest.fixture
def point_3d():
    """Point on the equator at longitude 10 with an elevation."""
    return gfn.point(Coordinate(10.0, 0.0, 55.5), 4326)


@pytest.fixture
def unassigned_point():
    return gfn.point(0, 0, 0)


@pytest.fixture
def settings_override(monkeypatch):
    """Set environment variables and rebuild cached settings; restored afterwards."""
    def _override(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()
        crs_service._default_service = None
        return get_settings()

    yield _override
    get_settings.cache_clear()
    crs_service._default_service = None


@pytest.fixture
def caching_settings():
    return Settings(CACHE_TRANSFORMERS=True, TRANSFORMER_CACHE_SIZE=2)


@pytest.fixture(autouse=True)
def suppress_logging():
    """Suppress logging during tests to reduce noise."""
    import logging
    logging.disable(logging.CRITICAL)
    yield
    logging.disable(logging.NOTSET)


# Helper functions for tests
def assert_coords_close(actual, expected, abs_tol: float = 1e-6):
    """Helper to compare coordinate lists ordinate by ordinate (x, y only)."""
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert a.x == pytest.approx(e[0], abs=abs_tol)
        assert a.y == pytest.approx(e[1], abs=abs_tol)
