"""Tests for GeoDataFrame-backed layers and file loading."""

import pytest

gpd = pytest.importorskip("geopandas")

from choropleth.core.engine import ClassificationEngine  # noqa: E402
from choropleth.core.exceptions import LayerNotFoundError  # noqa: E402
from choropleth.layers.geodata import (  # noqa: E402
    GeoDataFrameFeatureSource,
    add_geodataframe,
    list_file_layers,
    load_layer,
    read_vector,
)
from choropleth.layers.registry import InMemoryLayerRegistry  # noqa: E402


def test_features_exclude_geometry(sample_gdf):
    source = GeoDataFrameFeatureSource(sample_gdf)
    assert source.attribute_columns == ["name", "population", "area_km2"]

    features = source.get_features()
    assert len(features) == 6
    assert "geometry" not in features[0].properties()
    assert features[0].get("population") == 100
    # NaN becomes a missing value
    assert features[2].get("area_km2") is None
    assert source.get_features() is features


def test_classify_geodataframe_layer(sample_gdf):
    registry = InMemoryLayerRegistry()
    add_geodataframe(registry, sample_gdf, "communes", display_name="Communes")
    engine = ClassificationEngine(registry)

    assert engine.list_numeric_attributes("communes") == ["population", "area_km2"]

    result = engine.apply("communes", "area_km2", method="quantile", num_classes=2)
    # five non-missing values
    assert result.breaks == (1.5, 4.25, 16.0)


@pytest.mark.integration
def test_load_geojson(sample_geojson):
    assert len(list_file_layers(sample_geojson)) == 1

    registry = InMemoryLayerRegistry()
    layer = load_layer(registry, sample_geojson)

    assert layer.layer_id == "communes"
    assert "communes" in registry
    assert len(layer.feature_source.get_features()) == 6


@pytest.mark.integration
def test_read_missing_layer(tmp_path, sample_gdf):
    path = tmp_path / "data.gpkg"
    sample_gdf.to_file(path, layer="communes", driver="GPKG")

    assert list_file_layers(path) == ["communes"]
    assert len(read_vector(path, layer="communes")) == 6
    with pytest.raises(LayerNotFoundError):
        read_vector(path, layer="rivers")
