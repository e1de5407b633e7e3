"""CRS identifier classification and resolution

A CRS can be referred to three ways: an integer SRID (read as an EPSG code), an
authority-prefixed name such as "EPSG:4326" or "ESRI:102003", or a raw proj4
definition containing "+proj=". The shape of the identifier is classified once
here; everything downstream works from the classified form.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pyproj import CRS
from pyproj.exceptions import CRSError

from ..exceptions import CRSResolutionError

logger = logging.getLogger(__name__)

CRSInput = Union[int, str]

CRS_NAME_PREFIXES = ("EPSG:", "ESRI:", "NA83:", "WORLD:", "NAD27:")
PROJ4_MARKER = "+proj="
EPSG_PREFIX = "EPSG:"
EPSG_CODE_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


class CRSKind(Enum):
    INTEGER_SRID = "integer_srid"
    AUTHORITY_NAME = "authority_name"
    PROJ4_STRING = "proj4_string"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class CRSIdentifier:
    """A CRS reference tagged with the shape it was recognised as"""
    kind: CRSKind
    value: object

    @property
    def name(self) -> Optional[str]:
        """Name to hand to the authority lookup, if this identifier has one"""
        if self.kind is CRSKind.INTEGER_SRID:
            return srid_to_epsg(self.value)
        if self.kind is CRSKind.AUTHORITY_NAME:
            return self.value
        return None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_crs_name(value) -> bool:
    """Check if input starts with a known authority prefix"""
    return isinstance(value, str) and value.startswith(CRS_NAME_PREFIXES)


def is_proj4_string(value) -> bool:
    """Check if input appears to be a proj4 string"""
    return isinstance(value, str) and PROJ4_MARKER in value


def is_epsg(value) -> bool:
    """True for "EPSG:<integer>" strings"""
    if not isinstance(value, str) or not value.startswith(EPSG_PREFIX):
        return False
    return EPSG_CODE_PATTERN.fullmatch(value[len(EPSG_PREFIX):]) is not None


def srid_to_epsg(srid: int) -> str:
    """Converts SRID integer to EPSG string."""
    return f"{EPSG_PREFIX}{srid}"


def epsg_to_srid(value) -> Optional[int]:
    """Converts EPSG string to SRID, if possible.

    Integers are returned unchanged. Anything that is not an "EPSG:<integer>"
    string returns None.
    """
    if _is_int(value):
        return value
    if is_epsg(value):
        return int(value[len(EPSG_PREFIX):])
    return None


def target_srid(value) -> Optional[int]:
    """SRID to tag a transformed geometry with, or None when no integer code is derivable.

    Only integers and EPSG names carry an SRID; other authority names and proj4
    strings leave the geometry's SRID as it was.
    """
    return epsg_to_srid(value)


def classify(value: CRSInput) -> CRSIdentifier:
    """Classify a CRS reference by its shape."""
    if _is_int(value):
        return CRSIdentifier(CRSKind.INTEGER_SRID, value)
    if is_crs_name(value):
        return CRSIdentifier(CRSKind.AUTHORITY_NAME, value)
    if is_proj4_string(value):
        return CRSIdentifier(CRSKind.PROJ4_STRING, value)
    return CRSIdentifier(CRSKind.UNRECOGNIZED, value)


def build_definition(value: Union[CRSInput, CRSIdentifier]) -> CRS:
    """Resolve a CRS reference into a pyproj CRS.

    Args:
        value: integer SRID, authority name, proj4 string, or an already
            classified CRSIdentifier

    Returns:
        pyproj CRS definition

    Raises:
        CRSResolutionError: if the input is unrecognized or PROJ cannot resolve it
    """
    identifier = value if isinstance(value, CRSIdentifier) else classify(value)

    if identifier.kind is CRSKind.UNRECOGNIZED:
        logger.debug(f"Unrecognized CRS identifier: {identifier.value!r}")
        raise CRSResolutionError(identifier.value, "not an SRID, authority name or proj4 string")

    try:
        if identifier.kind is CRSKind.PROJ4_STRING:
            crs = CRS.from_proj4(identifier.value)
        else:
            crs = CRS.from_string(identifier.name)
    except CRSError as e:
        logger.debug(f"CRS lookup failed for {identifier.value!r}: {e}")
        raise CRSResolutionError(identifier.value, str(e)) from e

    logger.debug(f"Resolved {identifier.kind.value} {identifier.value!r} to {crs.name}")
    return crs
