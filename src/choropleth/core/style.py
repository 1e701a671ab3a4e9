# src/choropleth/core/style.py
"""
Layer style values and the store of pre-classification styles.

A layer style is either a static value or a function resolving a symbol per
feature. Hosts may hand back either form; ``normalize_style`` turns whatever
they return into one of the two ``Style`` variants before it is cached.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Union


@dataclass(frozen=True)
class PolygonSymbol:
    """Fill and outline resolved for one feature."""

    fill_color: str  # rgba(r, g, b, a)
    outline_color: str  # #rrggbb
    outline_width: float = 1.0
    class_index: Optional[int] = None  # None for the fallback symbol

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fill": self.fill_color,
            "outline": self.outline_color,
            "outline_width": self.outline_width,
            "class_index": self.class_index,
        }


@dataclass(frozen=True)
class StaticStyle:
    """A style value applied identically to every feature."""

    value: Any


@dataclass(frozen=True)
class ComputedStyle:
    """A style computed per feature by ``resolver``."""

    resolver: Callable[[Any], Any]

    def __call__(self, feature: Any) -> Any:
        return self.resolver(feature)


Style = Union[StaticStyle, ComputedStyle]


def normalize_style(style: Any) -> Style:
    """Wrap a raw host style into its ``Style`` variant."""
    if isinstance(style, (StaticStyle, ComputedStyle)):
        return style
    if callable(style):
        return ComputedStyle(style)
    return StaticStyle(style)


@dataclass(frozen=True)
class LayerStyleState:
    layer_id: str
    original_style: Style
    raw_style: Any = None  # exactly what the host returned, restored on reset


class StyleStateStore:
    """
    Original (pre-classification) style per layer.

    A style is captured once, on the first classification of a layer, and
    stays until it is consumed by a reset or discarded on layer removal.
    """

    def __init__(self):
        self._states: Dict[str, LayerStyleState] = {}

    def capture(self, layer_id: str, style: Any) -> bool:
        """Cache ``style`` unless one is already cached; True if captured."""
        if layer_id in self._states:
            return False
        self._states[layer_id] = LayerStyleState(
            layer_id, normalize_style(style), raw_style=style
        )
        return True

    def get(self, layer_id: str) -> Optional[LayerStyleState]:
        return self._states.get(layer_id)

    def pop(self, layer_id: str) -> Optional[LayerStyleState]:
        return self._states.pop(layer_id, None)

    def discard(self, layer_id: str) -> None:
        self._states.pop(layer_id, None)

    def __contains__(self, layer_id: str) -> bool:
        return layer_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)
