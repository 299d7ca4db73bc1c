"""Configuration helpers for the map data pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class DatasetConfig:
    """Paths to the locations/metadata inputs and optional explicit formats."""

    locations_path: str
    metadata_path: str
    locations_format: Optional[str] = None  # json | csv, else inferred from extension
    metadata_format: Optional[str] = None


@dataclass(frozen=True)
class OutputConfig:
    """Where the rendered report should be written, if anywhere."""

    base_path: Optional[str] = None
    report_name: str = "report.txt"


@dataclass(frozen=True)
class SparkConfig:
    """Local Spark session settings."""

    app_name: str = "MapDataMerge"
    master: str = "local[*]"
    shuffle_partitions: int = 8


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Aggregated configuration model."""

    dataset: DatasetConfig
    output: OutputConfig
    spark: SparkConfig
    logging: LoggingConfig


def load_config(path: str | Path) -> AppConfig:
    """Parse a YAML config file into an AppConfig dataclass."""

    return config_from_mapping(_load_yaml(path))


def config_from_mapping(raw: dict[str, Any]) -> AppConfig:
    dataset_cfg = raw.get("dataset") or {}
    output_cfg = raw.get("output") or {}
    spark_cfg = raw.get("spark") or {}
    logging_cfg = raw.get("logging") or {}

    dataset = DatasetConfig(
        locations_path=str(dataset_cfg.get("locations_path", "./data/sample/locations.json")),
        metadata_path=str(dataset_cfg.get("metadata_path", "./data/sample/metadata.csv")),
        locations_format=_optional_str(dataset_cfg.get("locations_format")),
        metadata_format=_optional_str(dataset_cfg.get("metadata_format")),
    )
    output = OutputConfig(
        base_path=_optional_str(output_cfg.get("base_path")),
        report_name=str(output_cfg.get("report_name", "report.txt")),
    )
    spark = SparkConfig(
        app_name=str(spark_cfg.get("app_name", "MapDataMerge")),
        master=str(spark_cfg.get("master", "local[*]")),
        shuffle_partitions=int(spark_cfg.get("shuffle_partitions", 8)),
    )
    log = LoggingConfig(level=str(logging_cfg.get("level", "INFO")).upper())
    return AppConfig(dataset=dataset, output=output, spark=spark, logging=log)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _load_yaml(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a top-level mapping.")
    return data
