"""Pytest configuration and fixtures."""

from datetime import date
from typing import Any, Callable

import pytest

from urban_insights.analysis import clean
from urban_insights.generators import generate
from urban_insights.models import PropertyRecord


def build_record(**overrides: Any) -> PropertyRecord:
    """Build a record with derived fields from sensible defaults."""
    values: dict[str, Any] = {
        "id": "rec-001",
        "neighborhood": "Downtown",
        "property_type": "Condo",
        "sale_date": date(2023, 6, 15),
        "price": 400000.0,
        "square_footage": 1600,
        "bedrooms": 3,
        "bathrooms": 2.0,
        "age_years": 10,
        "parking_spaces": 1,
        "latitude": 37.75,
        "longitude": -122.4,
    }
    values.update(overrides)
    return PropertyRecord(**values).with_derived_fields()


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def make_record() -> Callable[..., PropertyRecord]:
    """Factory for hand-built records."""
    return build_record


@pytest.fixture(scope="session")
def generated_records() -> list[PropertyRecord]:
    """Default-size generated population (seed 42)."""
    return generate(5000, seed=42)


@pytest.fixture(scope="session")
def cleaned_records(generated_records: list[PropertyRecord]) -> list[PropertyRecord]:
    """Generated population after cleaning."""
    return clean(generated_records)
