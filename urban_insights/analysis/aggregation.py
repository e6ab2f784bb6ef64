"""Grouped summaries of property records."""

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

import pandas as pd

from urban_insights.analysis.frame import nullable, plain_key, records_to_frame
from urban_insights.config import SegmentConfig
from urban_insights.exceptions import ConfigurationError
from urban_insights.models import AggregateRow, GroupBy, PropertyRecord, TimePeriod, TrendRow

logger = logging.getLogger(__name__)

# Named aggregations shared by every grouping
SUMMARY_AGGREGATIONS: dict[str, tuple[str, str]] = {
    "count": ("id", "size"),
    "avg_price": ("price", "mean"),
    "median_price": ("price", "median"),
    "min_price": ("price", "min"),
    "max_price": ("price", "max"),
    "std_price": ("price", "std"),
    "avg_sqft": ("square_footage", "mean"),
    "avg_price_per_sqft": ("price_per_sqft", "mean"),
    "avg_bedrooms": ("bedrooms", "mean"),
    "avg_bathrooms": ("bathrooms", "mean"),
    "avg_age": ("age_years", "mean"),
}

SEGMENT_KEYS = ["price_category", "size_category", "neighborhood"]


def bucket_label(
    value: float | None,
    categories: Sequence[tuple[str, float | None]],
) -> str | None:
    """Return the label of the right-open bucket containing ``value``.

    ``categories`` is an ordered sequence of (label, exclusive upper bound)
    pairs whose last bound is None.
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    for label, upper in categories:
        if upper is None or value < upper:
            return label
    return categories[-1][0]


def price_category(price: float | None, config: SegmentConfig | None = None) -> str | None:
    """Market segment of a sale price (Budget, Mid-Market, Premium, Luxury)."""
    return bucket_label(price, (config or SegmentConfig()).price_categories)


def size_category(sqft: float | None, config: SegmentConfig | None = None) -> str | None:
    """Size class of a floor area (Compact, Standard, Large, Extra Large)."""
    return bucket_label(sqft, (config or SegmentConfig()).size_categories)


def aggregate(
    records: Sequence[PropertyRecord],
    group_by: GroupBy | str,
    config: SegmentConfig | None = None,
) -> list[AggregateRow]:
    """Summarize records per group.

    Parameters
    ----------
    records : Sequence[PropertyRecord]
        Records to summarize; not modified.
    group_by : GroupBy | str
        NEIGHBORHOOD and PROPERTY_TYPE rows are sorted by average price
        descending, YEAR rows by year, SEGMENT rows (price category x size
        category x neighborhood) by count descending after dropping
        segments smaller than ``config.min_segment_count``.
    config : SegmentConfig | None
        Bucket boundaries and segment threshold.

    Returns
    -------
    list[AggregateRow]
        One row per non-empty group.
    """
    group_by = _coerce_enum(GroupBy, group_by)
    config = config or SegmentConfig()
    if not records:
        return []

    frame = records_to_frame(records)

    match group_by:
        case GroupBy.NEIGHBORHOOD:
            summary = _summarize(frame, ["neighborhood"])
            summary = summary.sort_values("avg_price", ascending=False, kind="mergesort")
            keys = ["neighborhood"]
        case GroupBy.PROPERTY_TYPE:
            summary = _summarize(frame, ["property_type"])
            summary = summary.sort_values("avg_price", ascending=False, kind="mergesort")
            keys = ["property_type"]
        case GroupBy.YEAR:
            summary = _summarize(frame, ["year"])
            summary = summary.sort_values("year", kind="mergesort")
            keys = ["year"]
        case GroupBy.SEGMENT:
            frame["price_category"] = frame["price"].map(
                lambda v: bucket_label(v, config.price_categories)
            )
            frame["size_category"] = frame["square_footage"].map(
                lambda v: bucket_label(v, config.size_categories)
            )
            summary = _summarize(frame, SEGMENT_KEYS)
            summary = summary[summary["count"] >= config.min_segment_count]
            summary = summary.sort_values("count", ascending=False, kind="mergesort")
            keys = SEGMENT_KEYS
        case _:
            raise ConfigurationError(f"Unsupported grouping: {group_by!r}")

    return _to_rows(summary, keys)


def period_start(day: date, period: TimePeriod | str) -> date:
    """Floor a date to the first day of its period (weeks start on Monday)."""
    period = _coerce_enum(TimePeriod, period)
    match period:
        case TimePeriod.DAY:
            return day
        case TimePeriod.WEEK:
            return day - timedelta(days=day.weekday())
        case TimePeriod.MONTH:
            return day.replace(day=1)
        case TimePeriod.QUARTER:
            return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)
        case TimePeriod.YEAR:
            return date(day.year, 1, 1)
        case _:
            raise ConfigurationError(f"Unsupported period: {period!r}")


def aggregate_by_time(
    records: Sequence[PropertyRecord],
    period: TimePeriod | str = TimePeriod.MONTH,
) -> list[AggregateRow]:
    """Summarize records per time bucket, sorted by bucket start.

    Each row's key is ``(period_start,)`` and ``total_volume`` holds the
    summed sale price of the bucket. Records without a sale date are
    skipped.
    """
    period = _coerce_enum(TimePeriod, period)
    dated = [r for r in records if r.sale_date is not None]
    if len(dated) < len(records):
        logger.debug("Skipping %d undated records", len(records) - len(dated))
    if not dated:
        return []

    frame = records_to_frame(dated)
    frame["period_start"] = [period_start(d, period) for d in frame["sale_date"]]

    summary = _summarize(
        frame,
        ["period_start"],
        total_volume=("price", lambda s: s.sum(min_count=1)),
    )
    summary = summary.sort_values("period_start", kind="mergesort")
    return _to_rows(summary, ["period_start"])


def rolling_average(values: Iterable[float | None], window: int) -> list[float | None]:
    """Trailing mean over the current and previous ``window - 1`` values.

    The window shrinks at the start of the series instead of dropping
    values, so the output has the same length as the input.
    """
    if window < 1:
        raise ConfigurationError(f"Rolling window must be at least 1, got {window}")
    series = pd.Series(list(values), dtype=float)
    return [nullable(v) for v in series.rolling(window, min_periods=1).mean()]


def price_trends(
    records: Sequence[PropertyRecord],
    period: TimePeriod | str = TimePeriod.MONTH,
    windows: Sequence[int] = (3, 6),
) -> list[TrendRow]:
    """Period-over-period price changes with trailing rolling averages.

    Rolling averages are computed over the full bucket series; the first
    bucket, which has no previous period, is then dropped.
    """
    buckets = aggregate_by_time(records, period)
    if not buckets:
        return []

    avg = pd.Series([row.avg_price for row in buckets], dtype=float)
    change = avg.diff()
    change_pct = change / avg.shift(1) * 100
    rolling = {w: rolling_average(avg, w) for w in windows}

    trends = []
    for i, row in enumerate(buckets):
        if pd.isna(change.iloc[i]):
            continue
        pct = change_pct.iloc[i]
        trends.append(
            TrendRow(
                period_start=row.key[0],
                count=row.count,
                avg_price=float(avg.iloc[i]),
                price_change=float(change.iloc[i]),
                price_change_pct=float(pct) if math.isfinite(pct) else None,
                rolling_averages={w: values[i] for w, values in rolling.items()},
            )
        )
    return trends


def _summarize(frame: pd.DataFrame, keys: list[str], **extra) -> pd.DataFrame:
    grouped = frame.groupby(keys, dropna=False, sort=True)
    return grouped.agg(**SUMMARY_AGGREGATIONS, **extra).reset_index()


def _to_rows(summary: pd.DataFrame, keys: list[str]) -> list[AggregateRow]:
    has_volume = "total_volume" in summary.columns
    rows = []
    for rec in summary.to_dict("records"):
        rows.append(
            AggregateRow(
                key=tuple(plain_key(rec[k]) for k in keys),
                count=int(rec["count"]),
                avg_price=nullable(rec["avg_price"]),
                median_price=nullable(rec["median_price"]),
                min_price=nullable(rec["min_price"]),
                max_price=nullable(rec["max_price"]),
                std_price=nullable(rec["std_price"]),
                avg_sqft=nullable(rec["avg_sqft"]),
                avg_price_per_sqft=nullable(rec["avg_price_per_sqft"]),
                avg_bedrooms=nullable(rec["avg_bedrooms"]),
                avg_bathrooms=nullable(rec["avg_bathrooms"]),
                avg_age=nullable(rec["avg_age"]),
                total_volume=nullable(rec["total_volume"]) if has_volume else None,
            )
        )
    return rows


def _coerce_enum(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ConfigurationError(f"Unknown {enum_cls.__name__} value: {value!r}") from e
