"""Result types produced by the aggregator and the insight extractor."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from urban_insights.models.enums import Season
from urban_insights.models.filters import FilterCriteria


@dataclass(frozen=True)
class AggregateRow:
    """One summarized group.

    Metrics are None when the partition has no valid values for them.
    ``total_volume`` is only filled by time-bucketed aggregation.
    """

    key: tuple[Any, ...]
    count: int
    avg_price: float | None
    median_price: float | None
    min_price: float | None
    max_price: float | None
    std_price: float | None
    avg_sqft: float | None
    avg_price_per_sqft: float | None
    avg_bedrooms: float | None
    avg_bathrooms: float | None
    avg_age: float | None
    total_volume: float | None = None


@dataclass(frozen=True)
class TrendRow:
    """Period-over-period price movement for one time bucket."""

    period_start: date
    count: int
    avg_price: float
    price_change: float
    price_change_pct: float | None
    rolling_averages: dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Insights:
    """Single-value highlights of a record set."""

    total_count: int
    avg_price: float | None
    median_price: float | None
    price_range: tuple[float, float] | None
    most_expensive_neighborhood: str | None
    most_expensive_avg_price: float | None
    most_affordable_neighborhood: str | None
    most_affordable_avg_price: float | None
    most_active_neighborhood: str | None
    most_active_count: int | None
    most_popular_property_type: str | None
    most_popular_count: int | None
    busiest_season: Season | None
    busiest_season_count: int | None
    avg_price_per_sqft: float | None
    best_value_neighborhood: str | None
    best_value_price_per_sqft: float | None


@dataclass(frozen=True)
class MarketStats:
    """Latest year against the year before it."""

    current_year: int
    previous_year: int
    total_properties_current: int
    total_properties_previous: int
    avg_price_current: float | None
    avg_price_previous: float | None
    median_price_current: float | None
    median_price_previous: float | None
    yoy_volume_change: float
    yoy_price_change: float


@dataclass(frozen=True)
class NeighborhoodLocation:
    """Per-neighborhood summary placed at the mean coordinate of its sales."""

    neighborhood: str
    count: int
    avg_price: float | None
    avg_price_per_sqft: float | None
    avg_latitude: float | None
    avg_longitude: float | None


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything one dashboard redraw needs for a given selection."""

    criteria: FilterCriteria
    filtered_count: int
    by_neighborhood: list[AggregateRow]
    by_property_type: list[AggregateRow]
    by_year: list[AggregateRow]
    monthly_trends: list[TrendRow]
    segments: list[AggregateRow]
    insights: Insights | None
