# src/choropleth/core/engine.py
"""
Classification engine: turns a layer attribute into a classified style.

The engine pulls values from a layer, computes breaks and class colors,
installs a per-feature resolver on the layer and publishes a legend. It owns
the per-layer original styles (for reset) and the active legends; both are
only touched through ``apply``, ``reset`` and ``on_layer_removed``.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from loguru import logger

from choropleth.config.models import ClassificationSettings
from choropleth.core.attributes import collect_values, list_numeric_attributes, parse_float
from choropleth.core.breaks import (
    ClassificationMethod,
    calculate_breaks,
    class_of,
    list_methods,
)
from choropleth.core.colors import (
    darken_color,
    get_ramp_colors,
    hex_to_rgba,
    list_ramps,
    resolve_colors,
)
from choropleth.core.exceptions import ClassificationError, NoDataError
from choropleth.core.legend import build_legend, get_legend_data
from choropleth.core.models import (
    ClassificationConfig,
    ClassificationResult,
    LegendModel,
)
from choropleth.core.style import ComputedStyle, PolygonSymbol, StyleStateStore
from choropleth.layers.events import EventBus, EventSink, Events, NullEventSink
from choropleth.layers.registry import LayerRegistry


def build_resolver(
    attribute: str,
    breaks: Sequence[float],
    colors: Sequence[str],
    settings: ClassificationSettings,
) -> Callable[[Any], PolygonSymbol]:
    """
    Build the per-feature symbol function for one classification.

    The function only reads its own snapshot of breaks and symbols, so a
    resolver from an earlier classification keeps working while a new one is
    being computed.
    """
    breaks = tuple(breaks)
    symbols = tuple(
        PolygonSymbol(
            fill_color=hex_to_rgba(color, settings.fill_alpha),
            outline_color=darken_color(color, settings.outline_darken),
            outline_width=settings.outline_width,
            class_index=i,
        )
        for i, color in enumerate(colors)
    )
    fallback = PolygonSymbol(
        fill_color=settings.fallback_fill,
        outline_color=settings.fallback_outline,
        outline_width=settings.outline_width,
    )

    def resolve(feature: Any) -> PolygonSymbol:
        value = parse_float(feature.get(attribute))
        if value is None:
            return fallback
        idx = class_of(value, breaks)
        if 0 <= idx < len(symbols):
            return symbols[idx]
        return symbols[0]

    return resolve


class ClassificationEngine:
    """
    Apply and revert choropleth classifications on registry layers.

    Args:
        registry: Layer lookup used to reach features and styles
        events: Sink receiving style and legend notifications
        settings: Symbol parameters and defaults
    """

    def __init__(
        self,
        registry: LayerRegistry,
        events: Optional[EventSink] = None,
        settings: Optional[ClassificationSettings] = None,
    ):
        self.registry = registry
        self.events = events or NullEventSink()
        self.settings = settings or ClassificationSettings()

        self._styles = StyleStateStore()
        self._legends: Dict[str, LegendModel] = {}
        self._configs: Dict[str, ClassificationConfig] = {}

        self.current_layer_id: Optional[str] = None
        self.current_attribute: Optional[str] = None

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def connect(self, bus: EventBus) -> None:
        """Receive layer removals from ``bus``."""
        bus.subscribe(Events.LAYER_REMOVED, self._handle_layer_removed)

    def disconnect(self, bus: EventBus) -> None:
        bus.unsubscribe(Events.LAYER_REMOVED, self._handle_layer_removed)

    def _handle_layer_removed(self, payload: Dict[str, Any]) -> None:
        self.on_layer_removed(payload["layer_id"])

    # ------------------------------------------------------------------
    # Catalogues
    # ------------------------------------------------------------------

    def list_numeric_attributes(self, layer_id: str) -> List[str]:
        layer = self.registry.get_layer(layer_id)
        if layer is None:
            return []
        return list_numeric_attributes(layer.feature_source.get_features())

    @staticmethod
    def list_named_ramps() -> List[str]:
        return list_ramps()

    @staticmethod
    def get_ramp_colors(name: str) -> List[str]:
        return get_ramp_colors(name)

    @staticmethod
    def list_classification_methods() -> Dict[str, str]:
        return list_methods()

    @staticmethod
    def get_legend_data(breaks: Sequence[float], colors: Sequence[str]) -> List[Dict[str, str]]:
        return get_legend_data(breaks, colors)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def get_legend(self, layer_id: str) -> Optional[LegendModel]:
        return self._legends.get(layer_id)

    def get_active_config(self, layer_id: str) -> Optional[ClassificationConfig]:
        return self._configs.get(layer_id)

    def is_classified(self, layer_id: str) -> bool:
        return layer_id in self._configs

    def has_original_style(self, layer_id: str) -> bool:
        return layer_id in self._styles

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def apply(
        self,
        layer_id: str,
        attribute: str,
        ramp: Optional[str] = None,
        method: Union[ClassificationMethod, str, None] = None,
        num_classes: Optional[int] = None,
        reverse: bool = False,
        custom_colors: Optional[Sequence[str]] = None,
    ) -> Union[ClassificationResult, bool]:
        """
        Classify ``attribute`` of a layer and install the resulting style.

        Args:
            layer_id: Target layer
            attribute: Numeric attribute to classify
            ramp: Named color ramp (default from settings)
            method: Classification method or its key (default from settings)
            num_classes: Number of classes (default from settings)
            reverse: Reverse the class colors
            custom_colors: Hex color stops; two or more override ``ramp``

        Returns:
            ClassificationResult on success, False if the layer is unknown,
            has no numeric data, or the parameters are invalid. On failure
            nothing is installed and any earlier classification stays active.
        """
        layer = self.registry.get_layer(layer_id)
        if layer is None:
            logger.warning(f"Cannot classify: layer '{layer_id}' not found")
            return False

        try:
            config = ClassificationConfig(
                layer_id=layer_id,
                attribute=attribute,
                method=ClassificationMethod.coerce(
                    method if method is not None else self.settings.default_method
                ),
                num_classes=(
                    num_classes
                    if num_classes is not None
                    else self.settings.default_num_classes
                ),
                ramp=ramp or self.settings.default_ramp,
                custom_colors=tuple(custom_colors) if custom_colors else None,
                reverse=reverse,
            )
            values = collect_values(layer.feature_source.get_features(), attribute)
            if not values:
                raise NoDataError(
                    f"No numeric values for '{attribute}' in layer '{layer_id}'"
                )
            breaks = calculate_breaks(values, config.num_classes, config.method)
            colors = resolve_colors(
                config.num_classes,
                ramp=config.ramp,
                custom_colors=config.custom_colors,
                reverse=config.reverse,
            )
        except ClassificationError as e:
            logger.warning(f"Classification of '{layer_id}' failed: {e}")
            return False

        if self._styles.capture(layer_id, layer.style_target.get_style()):
            logger.debug(f"Original style of '{layer_id}' cached")

        resolver = build_resolver(attribute, breaks, colors, self.settings)
        legend = build_legend(layer_id, layer.display_name, attribute, breaks, colors)
        layer.style_target.set_style(ComputedStyle(resolver))

        # State is committed before subscribers run
        self._configs[layer_id] = config
        self._legends[layer_id] = legend
        self.current_layer_id = layer_id
        self.current_attribute = attribute

        self.events.emit(Events.LAYER_STYLE_CHANGED, {"layer_id": layer_id})
        self.events.emit(
            Events.LEGEND_UPDATED, {"layer_id": layer_id, "legend": legend}
        )

        logger.info(
            f"Layer '{layer_id}' classified on '{attribute}' "
            f"({config.method.value}, {config.num_classes} classes, {len(values)} values)"
        )
        return ClassificationResult(breaks=tuple(breaks), colors=tuple(colors))

    def reset(self, layer_id: str) -> None:
        """Restore the pre-classification style of a layer and drop its legend."""
        layer = self.registry.get_layer(layer_id)
        if layer is None:
            logger.debug(f"Reset ignored: layer '{layer_id}' not found")
            return

        state = self._styles.pop(layer_id)
        if state is not None:
            layer.style_target.set_style(state.raw_style)
            logger.info(f"Layer '{layer_id}' style restored")

        self._configs.pop(layer_id, None)
        self._clear_current(layer_id)
        self._remove_legend(layer_id)
        self.events.emit(Events.LAYER_STYLE_CHANGED, {"layer_id": layer_id})

    def on_layer_removed(self, layer_id: str) -> None:
        """Forget everything held for a layer that no longer exists."""
        self._styles.discard(layer_id)
        self._configs.pop(layer_id, None)
        self._clear_current(layer_id)
        self._remove_legend(layer_id)

    def _clear_current(self, layer_id: str) -> None:
        if self.current_layer_id == layer_id:
            self.current_layer_id = None
            self.current_attribute = None

    def _remove_legend(self, layer_id: str) -> None:
        if self._legends.pop(layer_id, None) is not None:
            self.events.emit(Events.LEGEND_REMOVED, {"layer_id": layer_id})
