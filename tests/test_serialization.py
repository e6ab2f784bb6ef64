"""Tests for shared serialization utilities."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from urban_insights.models import RECORD_FIELDS, AgeCategory, Season
from urban_insights.sinks.serialization import (
    dataclass_to_dict,
    record_to_row,
    serialize_value,
    to_dict,
)


class _SampleEnum(str, Enum):
    VALUE_A = "VALUE_A"
    VALUE_B = "VALUE_B"


@dataclass
class _SampleData:
    name: str
    amount: float
    created_at: datetime


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        obj = _SampleData(name="test", amount=100.5, created_at=datetime(2024, 1, 1))
        result = to_dict(obj)
        assert result["name"] == "test"
        assert result["amount"] == 100.5
        assert result["created_at"] == "2024-01-01T00:00:00"

    def test_dict_passthrough(self) -> None:
        d = {"key": "value"}
        assert to_dict(d) == d

    def test_other_type(self) -> None:
        result = to_dict(42)
        assert result == {"value": "42"}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_datetime(self) -> None:
        dt = datetime(2024, 6, 15, 10, 30, 0)
        assert serialize_value(dt) == "2024-06-15T10:30:00"

    def test_date(self) -> None:
        assert serialize_value(date(2024, 6, 15)) == "2024-06-15"

    def test_nested_dict(self) -> None:
        data = {"window": {3: date(2024, 1, 1)}}
        assert serialize_value(data) == {"window": {3: "2024-01-01"}}

    def test_tuple_key(self) -> None:
        """Group keys serialize element-wise."""
        assert serialize_value(("Budget", date(2024, 1, 1), 2024)) == ["Budget", "2024-01-01", 2024]

    def test_passthrough(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(42) == 42
        assert serialize_value(None) is None

    def test_enum(self) -> None:
        assert serialize_value(_SampleEnum.VALUE_A) == "VALUE_A"
        assert serialize_value(Season.FALL) == "Fall"
        assert serialize_value(AgeCategory.NEW) == "New (0-5 years)"


class TestDataclassToDict:
    """Tests for dataclass_to_dict function."""

    def test_converts_all_fields(self) -> None:
        obj = _SampleData(name="test", amount=100.0, created_at=datetime(2024, 1, 1))
        result = dataclass_to_dict(obj)
        assert set(result.keys()) == {"name", "amount", "created_at"}
        assert isinstance(result["amount"], float)
        assert isinstance(result["created_at"], str)


class TestRecordToRow:
    """Tests for record_to_row function."""

    def test_field_order(self, make_record) -> None:
        assert tuple(record_to_row(make_record())) == RECORD_FIELDS

    def test_values(self, make_record) -> None:
        row = record_to_row(make_record(sale_date=date(2022, 11, 2), age_years=40))

        assert row["sale_date"] == "2022-11-02"
        assert row["season"] == "Fall"
        assert row["age_category"] == "Mature (31-50 years)"
        assert row["quarter"] == 4
        assert row["price"] == 400000.0
