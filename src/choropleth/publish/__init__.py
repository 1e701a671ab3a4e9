# src/choropleth/publish/__init__.py
"""
Publication of classified layers: export of classified features and
YAML-driven batch classification.
"""

from choropleth.publish.batch import BatchConfig, LayerClassificationConfig, run_batch
from choropleth.publish.export import (
    classify_geodataframe,
    driver_for_path,
    write_classified,
)

__all__ = [
    "BatchConfig",
    "LayerClassificationConfig",
    "run_batch",
    "classify_geodataframe",
    "driver_for_path",
    "write_classified",
]
