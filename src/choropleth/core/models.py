# src/choropleth/core/models.py
"""
Data models for a classification run and its legend.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from choropleth.core.breaks import ClassificationMethod


@dataclass(frozen=True)
class ClassificationConfig:
    """Parameters of one classification, replaced wholesale on reapply."""

    layer_id: str
    attribute: str
    method: ClassificationMethod
    num_classes: int
    ramp: str = "blues"
    custom_colors: Optional[Tuple[str, ...]] = None
    reverse: bool = False

    @property
    def uses_custom_colors(self) -> bool:
        return bool(self.custom_colors) and len(self.custom_colors) >= 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layer_id": self.layer_id,
            "attribute": self.attribute,
            "method": self.method.value,
            "num_classes": self.num_classes,
            "ramp": "custom" if self.uses_custom_colors else self.ramp,
            "custom_colors": list(self.custom_colors) if self.custom_colors else None,
            "reverse": self.reverse,
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Breaks and per-class colors computed by a successful apply."""

    breaks: Tuple[float, ...]
    colors: Tuple[str, ...]

    @property
    def num_classes(self) -> int:
        return len(self.colors)

    def to_dict(self) -> Dict[str, Any]:
        return {"breaks": list(self.breaks), "colors": list(self.colors)}


@dataclass(frozen=True)
class ColorClass:
    index: int
    color: str
    range_min: float
    range_max: float
    min_label: str
    max_label: str

    @property
    def label(self) -> str:
        return f"{self.min_label} – {self.max_label}"


@dataclass
class LegendModel:
    """Display data for one classified layer."""

    layer_id: str
    layer_name: str
    attribute_name: str
    classes: List[ColorClass] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layer_id": self.layer_id,
            "layer_name": self.layer_name,
            "attribute": self.attribute_name,
            "classes": [
                {
                    "min": c.min_label,
                    "max": c.max_label,
                    "color": c.color,
                    "label": c.label,
                }
                for c in self.classes
            ],
        }

    def display(self, console: Optional[Console] = None):
        """Display the legend using Rich."""
        console = console or Console()

        table = Table(
            title=f"{self.layer_name} – {self.attribute_name}", show_header=True
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Color")
        table.add_column("Hex", style="cyan")
        table.add_column("Range")

        for color_class in self.classes:
            table.add_row(
                str(color_class.index),
                f"[on {color_class.color}]      [/]",
                color_class.color,
                color_class.label,
            )
        console.print(table)
