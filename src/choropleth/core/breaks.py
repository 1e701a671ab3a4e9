# src/choropleth/core/breaks.py
"""
Class break computation and value-to-class lookup.

Three methods are supported:

- equal interval: linear subdivision of ``[min, max]``
- quantile: roughly equal-count classes
- natural breaks: a single-pass heuristic that places interior breaks at the
  first value change after each fixed stride (not an iterative Jenks solver)

All methods take an ascending list of values and return ``n + 1`` breaks whose
first and last entries are the observed minimum and maximum.
"""

import numbers
from enum import Enum
from typing import Dict, List, Sequence, Union

from loguru import logger

from choropleth.core.exceptions import InvalidClassCountError, UnknownMethodError


class ClassificationMethod(Enum):
    """Classification methods, keyed by their public identifier."""

    EQUAL_INTERVAL = "equalInterval"
    QUANTILE = "quantile"
    NATURAL_BREAKS = "naturalBreaks"

    @property
    def label(self) -> str:
        return METHOD_LABELS[self]

    @classmethod
    def coerce(cls, method: Union["ClassificationMethod", str]) -> "ClassificationMethod":
        """Accept an enum member, its value (``"quantile"``) or its name."""
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            for member in cls:
                if method == member.value or method.upper() == member.name:
                    return member
        valid = ", ".join(m.value for m in cls)
        raise UnknownMethodError(
            f"Unknown classification method {method!r}. Valid methods: {valid}"
        )


METHOD_LABELS = {
    ClassificationMethod.EQUAL_INTERVAL: "Equal interval",
    ClassificationMethod.QUANTILE: "Quantile",
    ClassificationMethod.NATURAL_BREAKS: "Natural breaks",
}


def list_methods() -> Dict[str, str]:
    """Map method keys to display labels."""
    return {method.value: method.label for method in ClassificationMethod}


def _check_class_count(num_classes: int) -> None:
    if (
        isinstance(num_classes, bool)
        or not isinstance(num_classes, numbers.Integral)
        or num_classes < 1
    ):
        raise InvalidClassCountError(num_classes)


def equal_interval_breaks(values: Sequence[float], num_classes: int) -> List[float]:
    _check_class_count(num_classes)
    low, high = values[0], values[-1]
    interval = (high - low) / num_classes

    breaks = [low]
    for i in range(1, num_classes):
        breaks.append(low + interval * i)
    breaks.append(high)
    return breaks


def quantile_breaks(values: Sequence[float], num_classes: int) -> List[float]:
    _check_class_count(num_classes)
    count = len(values)

    breaks = [values[0]]
    for i in range(1, num_classes + 1):
        idx = min(i * count // num_classes, count - 1)
        breaks.append(values[idx])
    return breaks


def natural_breaks(values: Sequence[float], num_classes: int) -> List[float]:
    """
    Approximate natural breaks by looking for local discontinuities.

    With no more values than classes the values themselves are the breaks,
    closed by a repeat of the maximum, so the result may be shorter than
    ``num_classes + 1``.
    """
    _check_class_count(num_classes)
    count = len(values)
    if count <= num_classes:
        return list(values) + [values[-1]]

    step = count // num_classes
    breaks = [values[0]]
    for i in range(1, num_classes):
        idx = i * step
        break_point = values[idx]
        for j in range(idx, min(idx + step, count - 1)):
            if values[j] != values[j + 1]:
                break_point = (values[j] + values[j + 1]) / 2
                break
        breaks.append(break_point)
    breaks.append(values[-1])
    return breaks


_CALCULATORS = {
    ClassificationMethod.EQUAL_INTERVAL: equal_interval_breaks,
    ClassificationMethod.QUANTILE: quantile_breaks,
    ClassificationMethod.NATURAL_BREAKS: natural_breaks,
}


def calculate_breaks(
    values: Sequence[float],
    num_classes: int,
    method: Union[ClassificationMethod, str] = ClassificationMethod.EQUAL_INTERVAL,
) -> List[float]:
    """
    Compute class breaks for ascending ``values``.

    Args:
        values: Values sorted ascending
        num_classes: Number of classes (>= 1)
        method: Classification method or its key

    Returns:
        Breaks list, empty when ``values`` is empty

    Raises:
        InvalidClassCountError: If ``num_classes`` < 1
        UnknownMethodError: If ``method`` is not recognised
    """
    method = ClassificationMethod.coerce(method)
    _check_class_count(num_classes)
    if not values:
        return []

    breaks = _CALCULATORS[method](values, num_classes)
    logger.debug(f"{method.value} breaks for {len(values)} values: {breaks}")
    return breaks


def class_of(value: float, breaks: Sequence[float]) -> int:
    """
    Index of the class ``value`` falls into.

    Each class is closed on its upper bound. Values below the first break land
    in class 0, values above the last break in the last class.
    """
    last = len(breaks) - 2
    for i in range(last + 1):
        if value <= breaks[i + 1]:
            return i
    return last
