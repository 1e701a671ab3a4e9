"""Pytest configuration and fixtures."""

import io
import os
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add src to Python path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


def pytest_configure(config):
    """Force test environment for all pytest runs"""
    os.environ["CHOROPLETH_ENVIRONMENT"] = "test"
    print("🧪 FORCED: CHOROPLETH_ENVIRONMENT=test for pytest")


@pytest.fixture(autouse=True)
def loguru_capture():
    stream = io.StringIO()
    logger.remove()
    logger.add(stream, level="DEBUG")
    yield stream
    logger.remove()


@pytest.fixture(autouse=True)
def reset_logging_setup():
    """Let every CLI invocation configure its own sinks."""
    from choropleth.utils.logging import choropleth_logger

    choropleth_logger.reset()
    yield
    choropleth_logger.reset()


@pytest.fixture
def population_records():
    return [
        {"name": "A", "population": 10, "density": "12.5", "geometry": None},
        {"name": "B", "population": 20, "density": "30", "geometry": None},
        {"name": "C", "population": 30, "density": "n/a", "geometry": None},
        {"name": "D", "population": 40, "density": None, "geometry": None},
        {"name": "E", "population": None, "density": "7", "geometry": None},
    ]


@pytest.fixture
def bus():
    from choropleth.layers.events import EventBus

    return EventBus()


@pytest.fixture
def registry(bus, population_records):
    from choropleth.layers.registry import InMemoryLayerRegistry

    registry = InMemoryLayerRegistry(events=bus)
    registry.add_layer("communes", population_records, display_name="Communes")
    return registry


@pytest.fixture
def engine(registry, bus):
    from choropleth.core.engine import ClassificationEngine

    engine = ClassificationEngine(registry, events=bus)
    engine.connect(bus)
    return engine


@pytest.fixture
def recorded_events(bus):
    """Every event emitted on the bus, in order."""
    from choropleth.layers.events import Events

    received = []
    for event in Events:
        bus.subscribe(event, lambda payload, event=event: received.append((event, payload)))
    return received


@pytest.fixture
def sample_gdf():
    """Small polygon layer with a numeric and a partially missing attribute."""
    gpd = pytest.importorskip("geopandas")
    from shapely.geometry import box

    return gpd.GeoDataFrame(
        {
            "name": ["a", "b", "c", "d", "e", "f"],
            "population": [100, 250, 400, 800, 1600, 3200],
            "area_km2": [1.5, 2.0, None, 4.25, 8.0, 16.0],
        },
        geometry=[box(i, 0, i + 1, 1) for i in range(6)],
        crs="EPSG:2056",
    )


@pytest.fixture
def sample_geojson(tmp_path, sample_gdf):
    path = tmp_path / "communes.geojson"
    sample_gdf.to_file(path, driver="GeoJSON")
    return path
