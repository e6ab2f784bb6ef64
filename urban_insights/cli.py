"""Command line entry point: generate, summarise and export sample data."""

import argparse
from pathlib import Path

from urban_insights.analysis import aggregate, extract_insights, market_stats
from urban_insights.config import DashboardConfig
from urban_insights.exceptions import ConfigurationError, SinkError
from urban_insights.logging import get_logger, setup_logging
from urban_insights.models import GroupBy
from urban_insights.sinks import ConsoleSink, CsvFileSink
from urban_insights.store import HousingDataStore

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the sample data command."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic housing data and print summary tables"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of records to generate (default: SAMPLE_SIZE or 5000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED or 42)",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write the cleaned records as CSV",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the CSV export (default: OUTPUT_DIR or output)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=None,
        help="Log format (default: LOG_FORMAT or standard)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = DashboardConfig.from_env()
        if args.count is not None:
            config.sample_size = args.count
        if args.seed is not None:
            config.seed = args.seed
        if args.log_level:
            config.log_level = args.log_level
        if args.log_format:
            config.log_format = args.log_format

        setup_logging(config.log_level, config.log_format)
        store = HousingDataStore.build(config)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    records = list(store.records)
    summary = store.summary()

    print("=" * 60)
    print("Urban Data Insights - Sample Data")
    print("=" * 60)
    for name, value in summary.items():
        print(f"  {name}: {value}")

    console = ConsoleSink()
    console.write_table(
        "Neighborhood Summary",
        aggregate(records, GroupBy.NEIGHBORHOOD, config.segments),
        key_names=["neighborhood"],
    )
    console.write_table(
        "Property Type Summary",
        aggregate(records, GroupBy.PROPERTY_TYPE, config.segments),
        key_names=["property_type"],
    )
    console.write_table(
        "Yearly Summary",
        aggregate(records, GroupBy.YEAR, config.segments),
        key_names=["year"],
    )

    if records:
        console.write_insights(
            extract_insights(
                records,
                neighborhoods=config.generation.neighborhoods,
                property_types=config.generation.property_types,
                best_value_min_count=config.segments.best_value_min_count,
            )
        )
        console.write_table("Year over Year", [market_stats(records)])
    else:
        console.write_insights(None)

    if args.export:
        try:
            output_dir = args.output_dir or config.export.output_dir
            sink = CsvFileSink(output_dir, max_rows=config.export.max_rows)
            sink.write(records)
            sink.close()
        except SinkError as e:
            logger.error("Export failed: %s", e)
            return 1

    console.close()
    return 0
