from decimal import Decimal, ROUND_HALF_UP
from math import radians, sin, cos, sqrt, atan2, isfinite
from typing import Any, Iterable, Optional

from shared.helpers.json_response_helper import error_response
from shared.utils.enums import ErrorKind

TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
FALSE_STRINGS = {"false", "0", "no", "n", "off"}

EARTH_RADIUS_KM = 6371.0


def coerce_bool(value: Any, field: str = "value") -> Optional[bool]:
    """Normalize a boolean that may have been stored or sent as text.

    None stays None so callers can tell "not given" from False.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in TRUE_STRINGS:
            return True
        if cleaned in FALSE_STRINGS:
            return False
    return error_response(
        message=f"{field} must be a boolean",
        kind=ErrorKind.INVALID_INPUT
    )


def haversine(lat1, lon1, lat2, lon2):
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * \
        cos(radians(lat2)) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def parse_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if isfinite(number) else None


def mean_rounded(values: Iterable[int], places: int = 1) -> float:
    """Arithmetic mean rounded half-up; 0 for no values."""
    values = list(values)
    if not values:
        return 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    quantum = Decimal(1).scaleb(-places)
    return float(mean.quantize(quantum, rounding=ROUND_HALF_UP))


def split_features(features: Optional[str]) -> list[str]:
    if not features:
        return []
    tokens = features.replace(";", ",").replace("|", ",").split(",")
    return [t.strip() for t in tokens if t.strip()]
