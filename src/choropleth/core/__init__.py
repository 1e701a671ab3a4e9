"""
Core classification algorithms.

The engine lives in ``choropleth.core.engine`` and is not imported here, so
that configuration models can depend on the leaf modules.
"""

from choropleth.core.attributes import collect_values, list_numeric_attributes, parse_float
from choropleth.core.breaks import ClassificationMethod, calculate_breaks, class_of
from choropleth.core.colors import (
    COLOR_RAMPS,
    darken_color,
    hex_to_rgba,
    interpolate_colors,
    resolve_colors,
)
from choropleth.core.exceptions import (
    ChoroplethError,
    ClassificationError,
    InvalidClassCountError,
    InvalidColorError,
    LayerNotFoundError,
    NoDataError,
    UnknownMethodError,
)
from choropleth.core.legend import build_legend, format_number, get_legend_data
from choropleth.core.models import (
    ClassificationConfig,
    ClassificationResult,
    ColorClass,
    LegendModel,
)
from choropleth.core.style import ComputedStyle, PolygonSymbol, StaticStyle

__all__ = [
    "COLOR_RAMPS",
    "ClassificationConfig",
    "ClassificationMethod",
    "ClassificationResult",
    "ColorClass",
    "ComputedStyle",
    "LegendModel",
    "PolygonSymbol",
    "StaticStyle",
    "build_legend",
    "calculate_breaks",
    "class_of",
    "collect_values",
    "darken_color",
    "format_number",
    "get_legend_data",
    "hex_to_rgba",
    "interpolate_colors",
    "list_numeric_attributes",
    "parse_float",
    "resolve_colors",
    "ChoroplethError",
    "ClassificationError",
    "InvalidClassCountError",
    "InvalidColorError",
    "LayerNotFoundError",
    "NoDataError",
    "UnknownMethodError",
]
