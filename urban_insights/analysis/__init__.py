"""Cleaning, filtering, aggregation and insight extraction."""

from urban_insights.analysis.aggregation import (
    aggregate,
    aggregate_by_time,
    period_start,
    price_category,
    price_trends,
    rolling_average,
    size_category,
)
from urban_insights.analysis.cleaning import clean
from urban_insights.analysis.filters import apply_filters, sample_records
from urban_insights.analysis.insights import (
    correlation_matrix,
    extract_insights,
    market_stats,
    neighborhood_map_summary,
)

__all__ = [
    "aggregate",
    "aggregate_by_time",
    "apply_filters",
    "clean",
    "correlation_matrix",
    "extract_insights",
    "market_stats",
    "neighborhood_map_summary",
    "period_start",
    "price_category",
    "price_trends",
    "rolling_average",
    "sample_records",
    "size_category",
]
