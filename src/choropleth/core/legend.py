# src/choropleth/core/legend.py
"""
Legend construction from breaks and class colors.
"""

from typing import Dict, List, Sequence

from choropleth.core.models import ColorClass, LegendModel


def format_number(value: float) -> str:
    """
    Human-readable number for legend labels.

    >>> format_number(1500000)
    '1.5M'
    >>> format_number(2500)
    '2.5K'
    >>> format_number(7)
    '7'
    >>> format_number(3.14159)
    '3.14'
    """
    magnitude = abs(value)
    if magnitude >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{value / 1_000:.1f}K"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def build_legend(
    layer_id: str,
    layer_name: str,
    attribute: str,
    breaks: Sequence[float],
    colors: Sequence[str],
) -> LegendModel:
    """One legend class per pair of adjacent breaks."""
    classes = []
    for i in range(len(breaks) - 1):
        classes.append(
            ColorClass(
                index=i,
                color=colors[i] if i < len(colors) else colors[0],
                range_min=breaks[i],
                range_max=breaks[i + 1],
                min_label=format_number(breaks[i]),
                max_label=format_number(breaks[i + 1]),
            )
        )
    return LegendModel(
        layer_id=layer_id,
        layer_name=layer_name,
        attribute_name=attribute,
        classes=classes,
    )


def get_legend_data(breaks: Sequence[float], colors: Sequence[str]) -> List[Dict[str, str]]:
    """Flat legend rows with two-decimal bounds, for external UIs."""
    return [
        {
            "min": f"{breaks[i]:.2f}",
            "max": f"{breaks[i + 1]:.2f}",
            "color": colors[i],
        }
        for i in range(len(breaks) - 1)
    ]
