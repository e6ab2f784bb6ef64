"""Output sinks for exporting records and summaries."""

from urban_insights.sinks.console import ConsoleSink
from urban_insights.sinks.csv_file import CsvFileSink

__all__ = ["ConsoleSink", "CsvFileSink"]
