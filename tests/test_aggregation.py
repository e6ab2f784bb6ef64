"""Tests for grouped and time-bucketed aggregation."""

from datetime import date

import pytest

from urban_insights.analysis import (
    aggregate,
    aggregate_by_time,
    period_start,
    price_category,
    price_trends,
    rolling_average,
    size_category,
)
from urban_insights.config import SegmentConfig
from urban_insights.exceptions import ConfigurationError
from urban_insights.models import AggregateRow, GroupBy, PropertyRecord, TimePeriod


class TestCategories:
    """Tests for price and size buckets."""

    @pytest.mark.parametrize(
        ("price", "label"),
        [
            (100000.0, "Budget"),
            (299999.0, "Budget"),
            (300000.0, "Mid-Market"),
            (499999.0, "Mid-Market"),
            (500000.0, "Premium"),
            (799999.0, "Premium"),
            (800000.0, "Luxury"),
            (2000000.0, "Luxury"),
        ],
    )
    def test_price_category(self, price: float, label: str) -> None:
        assert price_category(price) == label

    @pytest.mark.parametrize(
        ("sqft", "label"),
        [
            (200, "Compact"),
            (999, "Compact"),
            (1000, "Standard"),
            (1499, "Standard"),
            (1500, "Large"),
            (2499, "Large"),
            (2500, "Extra Large"),
        ],
    )
    def test_size_category(self, sqft: int, label: str) -> None:
        assert size_category(sqft) == label

    def test_missing_value(self) -> None:
        assert price_category(None) is None
        assert size_category(float("nan")) is None

    def test_custom_buckets(self) -> None:
        config = SegmentConfig(price_categories=(("Low", 1000.0), ("High", None)))

        assert price_category(999.0, config) == "Low"
        assert price_category(1000.0, config) == "High"


class TestAggregate:
    """Tests for aggregate."""

    def test_empty_input(self) -> None:
        assert aggregate([], GroupBy.NEIGHBORHOOD) == []

    def test_single_group_metrics(self, make_record) -> None:
        records = [
            make_record(id="a", price=300000.0, square_footage=1500, bedrooms=2, age_years=10),
            make_record(id="b", price=400000.0, square_footage=2000, bedrooms=3, age_years=20),
            make_record(id="c", price=500000.0, square_footage=2500, bedrooms=4, age_years=30),
        ]

        [row] = aggregate(records, GroupBy.NEIGHBORHOOD)

        assert isinstance(row, AggregateRow)
        assert row.key == ("Downtown",)
        assert row.count == 3
        assert row.avg_price == pytest.approx(400000.0)
        assert row.median_price == pytest.approx(400000.0)
        assert row.min_price == 300000.0
        assert row.max_price == 500000.0
        assert row.std_price == pytest.approx(100000.0)
        assert row.avg_sqft == pytest.approx(2000.0)
        assert row.avg_price_per_sqft == pytest.approx(200.0)
        assert row.avg_bedrooms == pytest.approx(3.0)
        assert row.avg_age == pytest.approx(20.0)
        assert row.total_volume is None

    def test_neighborhood_sorted_by_avg_price(self, make_record) -> None:
        records = [
            make_record(id="a", neighborhood="Riverside", price=300000.0),
            make_record(id="b", neighborhood="Marina Bay", price=900000.0),
            make_record(id="c", neighborhood="Oakwood", price=500000.0),
            make_record(id="d", neighborhood="Oakwood", price=700000.0),
        ]

        rows = aggregate(records, GroupBy.NEIGHBORHOOD)

        assert [row.key for row in rows] == [("Marina Bay",), ("Oakwood",), ("Riverside",)]
        assert [row.count for row in rows] == [1, 2, 1]

    def test_property_type_sorted_by_avg_price(self, make_record) -> None:
        records = [
            make_record(id="a", property_type="Condo", price=350000.0),
            make_record(id="b", property_type="Single Family", price=650000.0),
        ]

        rows = aggregate(records, GroupBy.PROPERTY_TYPE)

        assert [row.key for row in rows] == [("Single Family",), ("Condo",)]

    def test_year_sorted_ascending(self, make_record) -> None:
        records = [
            make_record(id="a", sale_date=date(2024, 2, 1)),
            make_record(id="b", sale_date=date(2021, 5, 1)),
            make_record(id="c", sale_date=date(2022, 8, 1)),
        ]

        rows = aggregate(records, GroupBy.YEAR)

        assert [row.key for row in rows] == [(2021,), (2022,), (2024,)]
        assert all(isinstance(row.key[0], int) for row in rows)

    def test_group_by_string(self, make_record) -> None:
        rows = aggregate([make_record()], "property_type")

        assert rows[0].key == ("Condo",)

    def test_unknown_grouping(self, make_record) -> None:
        with pytest.raises(ConfigurationError, match="GroupBy"):
            aggregate([make_record()], "zip_code")

    def test_single_record_metrics_missing(self, make_record) -> None:
        """Metrics without valid values are None rather than NaN."""
        [row] = aggregate([make_record(age_years=None)], GroupBy.NEIGHBORHOOD)

        assert row.std_price is None
        assert row.avg_age is None
        assert row.avg_price == 400000.0

    def test_missing_key_kept(self, make_record) -> None:
        records = [make_record(id="a"), make_record(id="b", property_type=None)]

        rows = aggregate(records, GroupBy.PROPERTY_TYPE)

        assert sum(row.count for row in rows) == 2
        assert (None,) in [row.key for row in rows]

    def test_segments(self, make_record) -> None:
        """Segments below the minimum count are dropped."""
        records = [
            make_record(id=f"d{i}", neighborhood="Downtown", price=250000.0, square_footage=900)
            for i in range(6)
        ] + [
            make_record(id=f"r{i}", neighborhood="Riverside", price=900000.0, square_footage=3000)
            for i in range(3)
        ]

        rows = aggregate(records, GroupBy.SEGMENT)

        assert len(rows) == 1
        assert rows[0].key == ("Budget", "Compact", "Downtown")
        assert rows[0].count == 6

    def test_segments_sorted_by_count(self, make_record) -> None:
        records = [
            make_record(id=f"a{i}", neighborhood="Hillcrest", price=450000.0, square_footage=1200)
            for i in range(5)
        ] + [
            make_record(id=f"b{i}", neighborhood="Oakwood", price=850000.0, square_footage=2600)
            for i in range(7)
        ]

        rows = aggregate(records, GroupBy.SEGMENT)

        assert [row.key for row in rows] == [
            ("Luxury", "Extra Large", "Oakwood"),
            ("Mid-Market", "Standard", "Hillcrest"),
        ]

    def test_segment_threshold_configurable(self, make_record) -> None:
        records = [make_record(id=str(i)) for i in range(2)]

        assert aggregate(records, GroupBy.SEGMENT) == []
        assert len(aggregate(records, GroupBy.SEGMENT, SegmentConfig(min_segment_count=2))) == 1

    def test_input_not_modified(self, make_record) -> None:
        records = [make_record(id="a"), make_record(id="b", neighborhood="Lakeside")]
        before = list(records)

        aggregate(records, GroupBy.SEGMENT)

        assert records == before

    @pytest.mark.parametrize(
        "group_by",
        [GroupBy.NEIGHBORHOOD, GroupBy.PROPERTY_TYPE, GroupBy.YEAR],
    )
    def test_counts_preserved(
        self, cleaned_records: list[PropertyRecord], group_by: GroupBy
    ) -> None:
        rows = aggregate(cleaned_records, group_by)

        assert sum(row.count for row in rows) == len(cleaned_records)

    def test_generated_years(self, cleaned_records: list[PropertyRecord]) -> None:
        rows = aggregate(cleaned_records, GroupBy.YEAR)

        assert [row.key[0] for row in rows] == [2020, 2021, 2022, 2023, 2024]


class TestPeriodStart:
    """Tests for period_start."""

    @pytest.mark.parametrize(
        ("period", "expected"),
        [
            (TimePeriod.DAY, date(2024, 5, 17)),
            (TimePeriod.WEEK, date(2024, 5, 13)),
            (TimePeriod.MONTH, date(2024, 5, 1)),
            (TimePeriod.QUARTER, date(2024, 4, 1)),
            (TimePeriod.YEAR, date(2024, 1, 1)),
        ],
    )
    def test_period_start(self, period: TimePeriod, expected: date) -> None:
        assert period_start(date(2024, 5, 17), period) == expected

    def test_week_crosses_year(self) -> None:
        assert period_start(date(2024, 1, 3), "week") == date(2024, 1, 1)
        assert period_start(date(2021, 1, 2), "week") == date(2020, 12, 28)

    def test_unknown_period(self) -> None:
        with pytest.raises(ConfigurationError, match="TimePeriod"):
            period_start(date(2024, 1, 1), "decade")


class TestAggregateByTime:
    """Tests for aggregate_by_time."""

    def test_monthly_buckets(self, make_record) -> None:
        records = [
            make_record(id="a", sale_date=date(2023, 2, 20), price=200000.0),
            make_record(id="b", sale_date=date(2023, 1, 5), price=100000.0),
            make_record(id="c", sale_date=date(2023, 1, 25), price=300000.0),
        ]

        rows = aggregate_by_time(records, TimePeriod.MONTH)

        assert [row.key for row in rows] == [(date(2023, 1, 1),), (date(2023, 2, 1),)]
        assert [row.count for row in rows] == [2, 1]
        assert rows[0].avg_price == pytest.approx(200000.0)
        assert rows[0].total_volume == pytest.approx(400000.0)

    def test_quarterly_buckets(self, make_record) -> None:
        records = [
            make_record(id="a", sale_date=date(2023, 3, 31)),
            make_record(id="b", sale_date=date(2023, 4, 1)),
            make_record(id="c", sale_date=date(2023, 6, 30)),
        ]

        rows = aggregate_by_time(records, "quarter")

        assert [(row.key[0], row.count) for row in rows] == [
            (date(2023, 1, 1), 1),
            (date(2023, 4, 1), 2),
        ]

    def test_weekly_buckets(self, make_record) -> None:
        records = [
            make_record(id="a", sale_date=date(2024, 1, 3)),
            make_record(id="b", sale_date=date(2024, 1, 7)),
            make_record(id="c", sale_date=date(2024, 1, 8)),
        ]

        rows = aggregate_by_time(records, TimePeriod.WEEK)

        assert [(row.key[0], row.count) for row in rows] == [
            (date(2024, 1, 1), 2),
            (date(2024, 1, 8), 1),
        ]

    def test_undated_records_skipped(self, make_record) -> None:
        records = [make_record(id="a"), make_record(id="b", sale_date=None)]

        rows = aggregate_by_time(records)

        assert sum(row.count for row in rows) == 1

    def test_empty_input(self) -> None:
        assert aggregate_by_time([]) == []

    def test_counts_preserved(self, cleaned_records: list[PropertyRecord]) -> None:
        rows = aggregate_by_time(cleaned_records, TimePeriod.MONTH)

        assert len(rows) == 60
        assert sum(row.count for row in rows) == len(cleaned_records)
        starts = [row.key[0] for row in rows]
        assert starts == sorted(starts)


class TestRollingAverage:
    """Tests for rolling_average."""

    def test_window_shrinks_at_start(self) -> None:
        assert rolling_average([1.0, 2.0, 3.0, 4.0], 3) == pytest.approx([1.0, 1.5, 2.0, 3.0])

    def test_single_element(self) -> None:
        assert rolling_average([5.0], 6) == [5.0]

    def test_window_one_is_identity(self) -> None:
        assert rolling_average([3.0, 1.0, 2.0], 1) == [3.0, 1.0, 2.0]

    def test_empty(self) -> None:
        assert rolling_average([], 3) == []

    @pytest.mark.parametrize("window", [0, -1])
    def test_invalid_window(self, window: int) -> None:
        with pytest.raises(ConfigurationError):
            rolling_average([1.0], window)


class TestPriceTrends:
    """Tests for price_trends."""

    @pytest.fixture
    def monthly_series(self, make_record) -> list[PropertyRecord]:
        return [
            make_record(id="jan", sale_date=date(2023, 1, 15), price=100000.0),
            make_record(id="feb", sale_date=date(2023, 2, 15), price=110000.0),
            make_record(id="mar", sale_date=date(2023, 3, 15), price=121000.0),
        ]

    def test_changes(self, monthly_series: list[PropertyRecord]) -> None:
        trends = price_trends(monthly_series)

        assert [t.period_start for t in trends] == [date(2023, 2, 1), date(2023, 3, 1)]
        assert trends[0].price_change == pytest.approx(10000.0)
        assert trends[0].price_change_pct == pytest.approx(10.0)
        assert trends[1].price_change == pytest.approx(11000.0)
        assert trends[1].price_change_pct == pytest.approx(10.0)

    def test_rolling_averages(self, monthly_series: list[PropertyRecord]) -> None:
        trends = price_trends(monthly_series, windows=(3,))

        assert trends[0].rolling_averages[3] == pytest.approx(105000.0)
        assert trends[1].rolling_averages[3] == pytest.approx(110333.333, rel=1e-6)

    def test_default_windows(self, monthly_series: list[PropertyRecord]) -> None:
        trends = price_trends(monthly_series)

        assert set(trends[0].rolling_averages) == {3, 6}

    def test_single_period_has_no_trend(self, make_record) -> None:
        assert price_trends([make_record()]) == []

    def test_empty(self) -> None:
        assert price_trends([]) == []

    def test_generated_series(self, cleaned_records: list[PropertyRecord]) -> None:
        trends = price_trends(cleaned_records, TimePeriod.MONTH)

        assert len(trends) == 59
        assert all(t.count > 0 for t in trends)
