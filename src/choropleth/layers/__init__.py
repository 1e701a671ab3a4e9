"""
Layer collaborators: registry protocols, event bus and file-backed layers.

The geopandas adapter is imported lazily so that the in-memory registry does
not pull in the GIS stack.
"""

from choropleth.layers.events import EventBus, Events, EventSink, NullEventSink
from choropleth.layers.registry import (
    DictFeature,
    InMemoryLayerRegistry,
    Layer,
    LayerRegistry,
    ListFeatureSource,
    StyleSlot,
)

__all__ = [
    "DictFeature",
    "EventBus",
    "EventSink",
    "Events",
    "InMemoryLayerRegistry",
    "Layer",
    "LayerRegistry",
    "ListFeatureSource",
    "NullEventSink",
    "StyleSlot",
    # lazy
    "GeoDataFrameFeatureSource",
    "list_file_layers",
    "load_layer",
]


def __getattr__(name: str):
    """Lazy import of the geopandas-backed adapter."""
    _lazy_imports = {
        "GeoDataFrameFeatureSource": "choropleth.layers.geodata",
        "list_file_layers": "choropleth.layers.geodata",
        "load_layer": "choropleth.layers.geodata",
    }

    if name in _lazy_imports:
        import importlib

        module = importlib.import_module(_lazy_imports[name])
        attr = getattr(module, name)
        globals()[name] = attr
        return attr

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
