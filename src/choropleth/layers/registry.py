# src/choropleth/layers/registry.py
"""
Layer registry interfaces and an in-memory implementation.

The engine only sees these narrow protocols; map hosts plug in their own
registry, and tests or the CLI use ``InMemoryLayerRegistry``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from loguru import logger

from choropleth.core.style import Style, StaticStyle, normalize_style
from choropleth.layers.events import EventSink, Events, NullEventSink


class Feature(Protocol):
    def get(self, name: str) -> Any: ...

    def properties(self) -> Mapping[str, Any]: ...


class FeatureSource(Protocol):
    def get_features(self) -> Sequence[Feature]: ...


class StyleTarget(Protocol):
    def get_style(self) -> Any: ...

    def set_style(self, style: Any) -> None: ...


@dataclass
class Layer:
    layer_id: str
    display_name: str
    feature_source: FeatureSource
    style_target: StyleTarget


class LayerRegistry(Protocol):
    def get_layer(self, layer_id: str) -> Optional[Layer]: ...


class DictFeature:
    """Feature backed by a plain property mapping."""

    def __init__(self, properties: Mapping[str, Any]):
        self._properties = dict(properties)

    def get(self, name: str) -> Any:
        return self._properties.get(name)

    def properties(self) -> Mapping[str, Any]:
        return self._properties

    def __repr__(self):
        return f"DictFeature({self._properties!r})"


class ListFeatureSource:
    def __init__(self, features: Sequence[Feature]):
        self._features = list(features)

    def get_features(self) -> Sequence[Feature]:
        return self._features

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "ListFeatureSource":
        return cls([DictFeature(record) for record in records])


@dataclass
class StyleSlot:
    """Holds the active style of a layer; every change is normalized."""

    style: Style = field(default_factory=lambda: StaticStyle(None))

    def __post_init__(self):
        self.style = normalize_style(self.style)

    def get_style(self) -> Style:
        return self.style

    def set_style(self, style: Any) -> None:
        self.style = normalize_style(style)


class InMemoryLayerRegistry:
    """
    Registry keeping layers in a dict.

    Removing a layer emits ``Events.LAYER_REMOVED`` on the event sink.
    """

    def __init__(self, events: Optional[EventSink] = None):
        self._layers: Dict[str, Layer] = {}
        self._events = events or NullEventSink()

    def add_layer(
        self,
        layer_id: str,
        features: Sequence[Feature],
        display_name: Optional[str] = None,
        style: Any = None,
    ) -> Layer:
        if isinstance(features, (list, tuple)):
            source = ListFeatureSource(
                [DictFeature(f) if isinstance(f, Mapping) else f for f in features]
            )
        else:
            source = features
        layer = Layer(
            layer_id=layer_id,
            display_name=display_name or layer_id,
            feature_source=source,
            style_target=StyleSlot(style),
        )
        if layer_id in self._layers:
            # Replacing an id ends the previous layer
            self.remove_layer(layer_id)
        self._layers[layer_id] = layer
        logger.debug(f"Layer '{layer_id}' registered")
        return layer

    def get_layer(self, layer_id: str) -> Optional[Layer]:
        return self._layers.get(layer_id)

    def remove_layer(self, layer_id: str) -> bool:
        if self._layers.pop(layer_id, None) is None:
            return False
        logger.debug(f"Layer '{layer_id}' removed")
        self._events.emit(Events.LAYER_REMOVED, {"layer_id": layer_id})
        return True

    def list_layers(self) -> List[str]:
        return list(self._layers)

    def __contains__(self, layer_id: str) -> bool:
        return layer_id in self._layers
