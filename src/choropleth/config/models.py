# src/choropleth/config/models.py
"""
Pydantic configuration models
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from choropleth.core.breaks import ClassificationMethod
from choropleth.core.colors import COLOR_RAMPS, parse_hex
from choropleth.core.exceptions import InvalidColorError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class FileLoggingConfig(BaseModel):
    """File logging configuration with template support"""

    enabled: bool = False
    path: str = "logs/choropleth_{environment}_{date}.log"  # Keep as string template
    rotation: str = "10 MB"
    retention: str = "30 days"

    @field_validator("path")
    @classmethod
    def validate_path_template(cls, v):
        """Validate that path template has valid placeholders"""
        valid_placeholders = {"{environment}", "{date}", "{datetime}"}
        found_placeholders = set(re.findall(r"\{[^}]+\}", v))

        invalid_placeholders = found_placeholders - valid_placeholders
        if invalid_placeholders:
            raise ValueError(
                f"Invalid placeholders in path: {invalid_placeholders}. "
                f"Valid placeholders: {valid_placeholders}"
            )
        return v

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v):
        """Validate rotation format (e.g., '10 MB', '1 GB', '1 day')"""
        if not re.match(r"^\d+\s*(MB|GB|KB|day|days|hour|hours)$", v, re.IGNORECASE):
            raise ValueError(
                "rotation must be in format like '10 MB', '1 GB', or '1 day'"
            )
        return v

    def get_resolved_path(self, environment: str) -> Path:
        """
        Resolve template placeholders in the path.

        Args:
            environment: Environment name (e.g., 'development', 'production')

        Returns:
            Path with placeholders resolved
        """
        now = datetime.now()
        return Path(
            self.path.format(
                environment=environment,
                date=now.strftime("%Y%m%d"),
                datetime=now.strftime("%Y%m%d_%H%M%S"),
            )
        )


class ConsoleLoggingConfig(BaseModel):
    """Console logging configuration"""

    format: str = "simple"  # "simple" or "detailed"
    show_time: bool = True
    show_level: bool = True

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        if v not in ["simple", "detailed"]:
            raise ValueError("format must be 'simple' or 'detailed'")
        return v


class LoggingConfig(BaseModel):
    file: FileLoggingConfig = FileLoggingConfig()
    console: ConsoleLoggingConfig = ConsoleLoggingConfig()

    def get_file_path(self, environment: str) -> Optional[Path]:
        if self.file.enabled:
            return self.file.get_resolved_path(environment)
        return None


class GlobalConfig(BaseModel):
    """Global configuration settings"""

    log_level: str = "INFO"
    logging: LoggingConfig = LoggingConfig()

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_valid(cls, v):
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return v.upper()


class ClassificationSettings(BaseModel):
    """Defaults and symbol parameters for classification"""

    default_method: ClassificationMethod = ClassificationMethod.EQUAL_INTERVAL
    default_ramp: str = "blues"
    default_num_classes: int = Field(5, ge=1)
    max_classes: int = Field(12, ge=1)
    fill_alpha: float = Field(0.7, ge=0.0, le=1.0)
    outline_darken: int = Field(40, ge=0, le=255)
    outline_width: float = Field(1.0, gt=0)
    fallback_fill: str = "rgba(128, 128, 128, 0.5)"
    fallback_outline: str = "#666666"

    @field_validator("default_method", mode="before")
    @classmethod
    def parse_method(cls, v):
        return ClassificationMethod.coerce(v)

    @field_validator("default_ramp")
    @classmethod
    def ramp_must_exist(cls, v):
        if v not in COLOR_RAMPS:
            raise ValueError(f"default_ramp must be one of {list(COLOR_RAMPS)}")
        return v

    @field_validator("fallback_outline")
    @classmethod
    def outline_must_be_hex(cls, v):
        try:
            parse_hex(v)
        except InvalidColorError as e:
            raise ValueError(str(e))
        return v


class ExportConfig(BaseModel):
    """Column names and output format for classified exports"""

    class_field: str = "CLASS"
    fill_field: str = "FILL"
    outline_field: str = "OUTLINE"
    label_field: str = "LABEL"
    driver: str = "GPKG"


class AppConfig(BaseModel):
    """Main application configuration"""

    model_config = ConfigDict(populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    classification: ClassificationSettings = Field(
        default_factory=ClassificationSettings
    )
    export: ExportConfig = Field(default_factory=ExportConfig)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
