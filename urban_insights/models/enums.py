"""Enumeration types for housing records and aggregations."""

from enum import Enum


class Season(str, Enum):
    WINTER = "Winter"
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL = "Fall"


class AgeCategory(str, Enum):
    NEW = "New (0-5 years)"
    MODERN = "Modern (6-15 years)"
    ESTABLISHED = "Established (16-30 years)"
    MATURE = "Mature (31-50 years)"
    HISTORIC = "Historic (50+ years)"


class GroupBy(str, Enum):
    """Grouping keys accepted by the aggregator."""

    NEIGHBORHOOD = "neighborhood"
    PROPERTY_TYPE = "property_type"
    YEAR = "year"
    SEGMENT = "segment"  # price_category x size_category x neighborhood


class TimePeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
