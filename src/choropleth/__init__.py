"""
choropleth - A library and CLI tool to classify numeric attributes of vector
layers into colored classes.

This package provides:
- Class break algorithms (equal interval, quantile, natural breaks)
- Named color ramps, custom color stops and interpolation
- A classification engine that styles registered layers and keeps legends
- Batch classification and export of vector files (GeoPackage, GeoJSON)
"""

__docformat__ = "numpy"

from choropleth._version import __version__
from choropleth.core.breaks import ClassificationMethod, calculate_breaks
from choropleth.core.engine import ClassificationEngine
from choropleth.core.models import (
    ClassificationConfig,
    ClassificationResult,
    LegendModel,
)
from choropleth.layers.events import EventBus, Events
from choropleth.layers.registry import InMemoryLayerRegistry

__all__ = [
    "__version__",
    "ClassificationConfig",
    "ClassificationEngine",
    "ClassificationMethod",
    "ClassificationResult",
    "EventBus",
    "Events",
    "InMemoryLayerRegistry",
    "LegendModel",
    "calculate_breaks",
]
