"""
Custom Exception Hierarchy for geoproj

Every failure is tagged with the phase that produced it: "resolution" (turning a
CRS identifier into a definition), "construction" (building a transformer for a
CRS pair) or "application" (projecting an individual coordinate).
"""


class GeoprojError(Exception):
    """Base exception for all geoproj errors"""

    def __init__(self, message: str, crs=None, phase: str = None):
        super().__init__(message)
        self.message = message
        self.crs = crs
        self.phase = phase


class CRSResolutionError(GeoprojError):
    """Raised when a CRS identifier is unrecognized or its lookup fails"""

    def __init__(self, crs, reason: str = None):
        message = f"Unable to resolve CRS {crs!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, crs=crs, phase="resolution")
        self.reason = reason


class TransformConstructionError(GeoprojError):
    """Raised when no transformer can be built between two CRS definitions"""

    def __init__(self, source_crs, target_crs, reason: str = None):
        message = f"Cannot build transform from {source_crs!r} to {target_crs!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, crs=target_crs, phase="construction")
        self.source_crs = source_crs
        self.target_crs = target_crs
        self.reason = reason


class MissingSRIDError(GeoprojError):
    """Raised when a geometry without an SRID is transformed by target CRS only"""

    def __init__(self, geometry_type: str = None):
        message = "Geometry does not have an SRID"
        if geometry_type:
            message = f"{geometry_type} does not have an SRID"
        super().__init__(message, phase="resolution")
        self.geometry_type = geometry_type


class ProjectionError(GeoprojError):
    """Raised when a single coordinate cannot be projected"""

    def __init__(self, x: float, y: float, source_crs=None, target_crs=None, reason: str = None):
        message = f"Cannot project coordinate ({x}, {y})"
        if source_crs is not None or target_crs is not None:
            message += f" from {source_crs!r} to {target_crs!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, crs=target_crs, phase="application")
        self.x = x
        self.y = y
        self.source_crs = source_crs
        self.target_crs = target_crs
        self.reason = reason


class ConfigurationError(GeoprojError):
    """Raised when settings are invalid"""

    def __init__(self, config_field: str, reason: str):
        message = f"Configuration error in {config_field}: {reason}"
        super().__init__(message)
        self.config_field = config_field
        self.reason = reason
