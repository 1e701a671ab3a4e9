# src/choropleth/core/attributes.py
"""
Attribute extraction: find numeric attributes and collect sorted values.
"""

import math
import numbers
import re
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence

from loguru import logger

GEOMETRY_KEY = "geometry"

# Leading float literal, the way a lenient "parse float" reads "12.5 m" as 12.5
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(value: Any) -> Optional[float]:
    """
    Convert an attribute value to a finite float.

    Numbers, including ``Decimal``, are converted directly (booleans are not
    numbers here). Strings are read up to the end of their leading numeric
    literal, so ``"42 km"`` gives ``42.0`` while ``"n/a"`` gives ``None``.

    Args:
        value: Raw attribute value

    Returns:
        The parsed value, or None when it is missing, not numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None

    if isinstance(value, (numbers.Real, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def is_numeric_like(value: Any) -> bool:
    return parse_float(value) is not None


def list_numeric_attributes(features: Sequence[Any]) -> List[str]:
    """
    List attribute names whose value on the first feature looks numeric.

    Only the first feature is inspected; the geometry key is skipped.
    """
    if not features:
        return []

    properties = features[0].properties()
    return [
        key
        for key, value in properties.items()
        if key != GEOMETRY_KEY and is_numeric_like(value)
    ]


def collect_values(features: Iterable[Any], attribute: str) -> List[float]:
    """
    Collect the numeric values of ``attribute`` across features, ascending.

    Missing values and values that fail to parse are skipped.
    """
    values = []
    skipped = 0
    for feature in features:
        raw = feature.get(attribute)
        if raw is None:
            continue
        number = parse_float(raw)
        if number is None:
            skipped += 1
            continue
        values.append(number)

    if skipped:
        logger.debug(f"Skipped {skipped} non-numeric values for '{attribute}'")

    values.sort()
    return values
