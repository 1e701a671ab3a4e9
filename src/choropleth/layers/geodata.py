# src/choropleth/layers/geodata.py
"""
GeoDataFrame-backed layers, so vector files can be classified directly.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import fiona
import geopandas as gpd
import pandas as pd
from loguru import logger

from choropleth.core.exceptions import LayerNotFoundError
from choropleth.layers.registry import InMemoryLayerRegistry, Layer


def _clean(value: Any) -> Any:
    """Map pandas/numpy missing markers to None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        # list-like values have no scalar NA test
        pass
    return value


class RowFeature:
    """One GeoDataFrame row seen as a feature."""

    __slots__ = ("_properties",)

    def __init__(self, properties: Dict[str, Any]):
        self._properties = properties

    def get(self, name: str) -> Any:
        return self._properties.get(name)

    def properties(self) -> Mapping[str, Any]:
        return self._properties


class GeoDataFrameFeatureSource:
    """
    Feature source over the attribute columns of a GeoDataFrame.

    The active geometry column is left out of the feature properties.
    """

    def __init__(self, gdf: gpd.GeoDataFrame):
        self.gdf = gdf
        self._features: Optional[List[RowFeature]] = None

    @property
    def attribute_columns(self) -> List[str]:
        try:
            geometry_name = self.gdf.geometry.name
        except AttributeError:
            # no active geometry column
            geometry_name = None
        return [c for c in self.gdf.columns if c != geometry_name]

    def get_features(self) -> Sequence[RowFeature]:
        if self._features is None:
            columns = self.attribute_columns
            self._features = [
                RowFeature({c: _clean(v) for c, v in zip(columns, row)})
                for row in self.gdf[columns].itertuples(index=False, name=None)
            ]
        return self._features


def list_file_layers(path: Path) -> List[str]:
    """Layer names of a vector data source (one for single-layer formats)."""
    return fiona.listlayers(str(path))


def read_vector(
    path: Path, layer: Optional[str] = None, bbox: Optional[Tuple] = None
) -> gpd.GeoDataFrame:
    """
    Read a vector file into a GeoDataFrame.

    Raises:
        LayerNotFoundError: If ``layer`` does not exist in the data source
    """
    path = Path(path)
    kwargs: Dict[str, Any] = {}
    if layer:
        available_layers = list_file_layers(path)
        if layer not in available_layers:
            raise LayerNotFoundError(layer)
        kwargs["layer"] = layer
    if bbox:
        kwargs["bbox"] = bbox

    gdf = gpd.read_file(path, **kwargs)
    logger.info(f"Read {len(gdf)} features from {path.name}" + (f" ({layer})" if layer else ""))
    return gdf


def add_geodataframe(
    registry: InMemoryLayerRegistry,
    gdf: gpd.GeoDataFrame,
    layer_id: str,
    display_name: Optional[str] = None,
) -> Layer:
    return registry.add_layer(
        layer_id, GeoDataFrameFeatureSource(gdf), display_name=display_name
    )


def load_layer(
    registry: InMemoryLayerRegistry,
    path: Path,
    layer: Optional[str] = None,
    layer_id: Optional[str] = None,
) -> Layer:
    """Read a vector file and register it; the id defaults to the layer or file name."""
    path = Path(path)
    gdf = read_vector(path, layer=layer)
    layer_id = layer_id or layer or path.stem
    return add_geodataframe(registry, gdf, layer_id, display_name=layer or path.stem)
