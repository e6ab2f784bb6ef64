"""Domain models for the housing analytics core."""

from urban_insights.models.aggregates import (
    AggregateRow,
    DashboardSnapshot,
    Insights,
    MarketStats,
    NeighborhoodLocation,
    TrendRow,
)
from urban_insights.models.enums import AgeCategory, GroupBy, Season, TimePeriod
from urban_insights.models.filters import FilterCriteria
from urban_insights.models.property import RECORD_FIELDS, PropertyRecord

__all__ = [
    "AgeCategory",
    "AggregateRow",
    "DashboardSnapshot",
    "FilterCriteria",
    "GroupBy",
    "Insights",
    "MarketStats",
    "NeighborhoodLocation",
    "PropertyRecord",
    "RECORD_FIELDS",
    "Season",
    "TimePeriod",
    "TrendRow",
]
