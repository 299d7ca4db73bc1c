"""Entry point: load both datasets, merge them and print the analysis."""

from __future__ import annotations

import argparse
import dataclasses
import logging

from pyspark.sql import SparkSession

from mapmerge.common.config import AppConfig, SparkConfig, load_config
from mapmerge.common.models import AnalysisResult
from mapmerge.analysis.analyzer import Analyzer
from mapmerge.analysis.merger import Merger
from mapmerge.ingest.ingestion_service import IngestionService
from mapmerge.report.persistence import Persistence
from mapmerge.report.reporter import render_report

logger = logging.getLogger(__name__)


def run_pipeline(spark: SparkSession, config: AppConfig) -> AnalysisResult:
    ingestion = IngestionService.from_config(config.dataset)
    locations, metadata = ingestion.load()

    merged = Merger(spark).merge(locations, metadata)
    return Analyzer(spark).run(merged)


def build_spark(config: SparkConfig) -> SparkSession:
    return (
        SparkSession.builder.appName(config.app_name)
        .master(config.master)
        .config("spark.sql.shuffle.partitions", str(config.shuffle_partitions))
        .getOrCreate()
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Merge map locations with metadata and report statistics.")
    parser.add_argument("--config", default="config/local.yaml", help="Path to YAML config.")
    parser.add_argument("--locations", help="Override dataset.locations_path.")
    parser.add_argument("--metadata", help="Override dataset.metadata_path.")
    parser.add_argument("--output", help="Directory to write the report into.")
    args = parser.parse_args()

    config = apply_overrides(load_config(args.config), args)
    logging.basicConfig(level=config.logging.level, format="%(levelname)s: %(message)s")

    spark = build_spark(config.spark)
    try:
        result = run_pipeline(spark, config)
        report = render_report(result)
        print(report)
        if config.output.base_path:
            target = Persistence(config.output.base_path).write_report(report, config.output.report_name)
            logger.info("Wrote report to %s", target)
    finally:
        spark.stop()


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    dataset = config.dataset
    if args.locations:
        dataset = dataclasses.replace(dataset, locations_path=args.locations)
    if args.metadata:
        dataset = dataclasses.replace(dataset, metadata_path=args.metadata)
    output = config.output
    if args.output:
        output = dataclasses.replace(output, base_path=args.output)
    return dataclasses.replace(config, dataset=dataset, output=output)


if __name__ == "__main__":
    main()
