"""Coordinate Reference System transformation service"""
from pyproj import Transformer
from pyproj.exceptions import CRSError, ProjError
from cachetools import LRUCache
import logging
import threading
from typing import Dict, Optional

from ..config import Settings, get_settings
from ..exceptions import TransformConstructionError
from .crs_resolver import CRSInput, CRSKind, build_definition, classify

logger = logging.getLogger(__name__)


class CRSTransformationService:
    """Builds transformers between two CRS references

    Each side may be an integer SRID, an authority name ("EPSG:28356",
    "ESRI:102003") or a proj4 string. A transformer is built fresh for every
    request unless caching is enabled; transformers are stateless, so callers
    that reuse a pair can also just keep the returned object.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.cache_enabled = settings.CACHE_TRANSFORMERS
        self.cache_size = settings.TRANSFORMER_CACHE_SIZE
        self._transformer_cache = LRUCache(maxsize=self.cache_size)
        self._lock = threading.Lock()
        logger.debug(f"CRSTransformationService initialized (cache={'on' if self.cache_enabled else 'off'})")

    def build_transform(self, crs1: CRSInput, crs2: CRSInput) -> Transformer:
        """Build a transformer from crs1 to crs2

        Args:
            crs1: Source CRS reference
            crs2: Target CRS reference

        Returns:
            pyproj Transformer with x/y axis order

        Raises:
            CRSResolutionError: If either side cannot be resolved
            TransformConstructionError: If PROJ cannot relate the two systems
        """
        key = (classify(crs1), classify(crs2))
        for identifier in key:
            # unrecognized references never reach the cache
            if identifier.kind is CRSKind.UNRECOGNIZED:
                build_definition(identifier)

        if self.cache_enabled:
            with self._lock:
                cached = self._transformer_cache.get(key)
            if cached is not None:
                return cached

        source = build_definition(key[0])
        target = build_definition(key[1])
        try:
            transformer = Transformer.from_crs(source, target, always_xy=True)
        except (CRSError, ProjError) as e:
            logger.error(f"Failed to create transformer {crs1!r} -> {crs2!r}: {e}")
            raise TransformConstructionError(crs1, crs2, str(e)) from e
        logger.debug(f"Created transformer {crs1!r} -> {crs2!r}")

        if self.cache_enabled:
            with self._lock:
                self._transformer_cache[key] = transformer
        return transformer

    def clear_cache(self) -> None:
        with self._lock:
            self._transformer_cache.clear()

    def get_cache_stats(self) -> Dict[str, object]:
        """Get transformer cache statistics for monitoring"""
        with self._lock:
            return {
                "cache_enabled": self.cache_enabled,
                "cached_transformers": len(self._transformer_cache),
                "max_size": self.cache_size,
                "cached_pairs": [(src.value, dst.value) for src, dst in self._transformer_cache],
            }


_default_service: Optional[CRSTransformationService] = None


def get_transformation_service() -> CRSTransformationService:
    """Process-wide service built from the current settings"""
    global _default_service
    if _default_service is None:
        _default_service = CRSTransformationService()
    return _default_service


def build_transform(crs1: CRSInput, crs2: CRSInput) -> Transformer:
    """Creates a transformer between two projection systems.

    crs1 or crs2 can be integers (interpreted as EPSG codes), an
    EPSG/ESRI/WORLD/NA83/NAD27 name, or a proj4 string.
    """
    return get_transformation_service().build_transform(crs1, crs2)
