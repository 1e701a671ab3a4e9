"""Tests for configuration models and the YAML loader."""

from pathlib import Path

import pytest
import yaml

from choropleth.config import (
    AppConfig,
    ClassificationSettings,
    ConfigurationNotFoundError,
    ConfigurationValidationError,
    load_config,
)
from choropleth.config.loader import ConfigManager
from choropleth.core.breaks import ClassificationMethod


def write_yaml(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_defaults():
    config = AppConfig()
    assert config.global_.log_level == "INFO"
    assert config.classification.default_method is ClassificationMethod.EQUAL_INTERVAL
    assert config.classification.default_num_classes == 5
    assert config.classification.fill_alpha == 0.7
    assert config.export.class_field == "CLASS"
    assert config.to_dict()["global"]["log_level"] == "INFO"


def test_load_from_file_with_environment(tmp_path):
    base = write_yaml(
        tmp_path / "choropleth_config.yaml",
        {
            "global": {"log_level": "info"},
            "classification": {"default_method": "quantile", "default_ramp": "reds"},
        },
    )
    write_yaml(
        tmp_path / "environments" / "production.yaml",
        {"global": {"log_level": "WARNING"}, "classification": {"default_num_classes": 7}},
    )

    config = load_config(config_path=base, environment="production")

    assert config.global_.log_level == "WARNING"
    assert config.classification.default_method is ClassificationMethod.QUANTILE
    assert config.classification.default_ramp == "reds"
    assert config.classification.default_num_classes == 7


def test_environment_file_is_optional(tmp_path):
    base = write_yaml(tmp_path / "config.yaml", {"global": {"log_level": "ERROR"}})
    assert load_config(config_path=base, environment="staging").global_.log_level == "ERROR"


def test_env_var_overrides(tmp_path, monkeypatch):
    base = write_yaml(tmp_path / "config.yaml", {"classification": {"default_ramp": "reds"}})
    monkeypatch.setenv("CHOROPLETH_CLASSIFICATION_DEFAULT_RAMP", "viridis")
    monkeypatch.setenv("CHOROPLETH_CLASSIFICATION_MAX_CLASSES", "9")
    monkeypatch.setenv("CHOROPLETH_GLOBAL_LOGGING__FILE__ENABLED", "true")

    config = load_config(config_path=base, environment="test")

    assert config.classification.default_ramp == "viridis"
    assert config.classification.max_classes == 9
    assert config.global_.logging.file.enabled is True


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigurationNotFoundError):
        load_config(config_path=tmp_path / "nope.yaml")


def test_no_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    config = ConfigManager().load_config(environment="test")
    assert config.classification.default_ramp == "blues"


@pytest.mark.parametrize(
    "section, values",
    [
        ("global", {"log_level": "CHATTY"}),
        ("classification", {"default_method": "jenks"}),
        ("classification", {"default_ramp": "rainbow"}),
        ("classification", {"default_num_classes": 0}),
        ("classification", {"fill_alpha": 1.5}),
        ("classification", {"fallback_outline": "grey"}),
    ],
)
def test_invalid_values(tmp_path, section, values):
    base = write_yaml(tmp_path / "config.yaml", {section: values})
    with pytest.raises(ConfigurationValidationError):
        load_config(config_path=base, environment="test")


def test_settings_accept_method_names():
    settings = ClassificationSettings(default_method="NATURAL_BREAKS")
    assert settings.default_method is ClassificationMethod.NATURAL_BREAKS


def test_log_path_template():
    config = AppConfig(**{"global": {"logging": {"file": {"enabled": True, "path": "logs/{environment}.log"}}}})
    assert config.global_.logging.get_file_path("test") == Path("logs/test.log")


def test_log_path_template_rejects_unknown_placeholder():
    with pytest.raises(ValueError):
        AppConfig(**{"global": {"logging": {"file": {"path": "logs/{user}.log"}}}})
