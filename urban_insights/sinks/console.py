"""Console sink for summary tables."""

from collections.abc import Sequence
from typing import Any

import pandas as pd

from urban_insights.models import AggregateRow, Insights
from urban_insights.sinks.serialization import to_dict


class ConsoleSink:
    """Print aggregate tables and insights to stdout."""

    def __init__(self, max_rows: int | None = None, precision: int = 2) -> None:
        """Initialize console sink.

        Parameters
        ----------
        max_rows : int | None
            Maximum rows to print per table (None for all).
        precision : int
            Decimal places for float columns.
        """
        self.max_rows = max_rows
        self.precision = precision
        self._counts: dict[str, int] = {}

    def write_table(
        self,
        title: str,
        rows: Sequence[Any],
        key_names: Sequence[str] = (),
    ) -> None:
        """Print rows as a table.

        ``AggregateRow`` keys are spread over ``key_names`` columns.
        """
        print(f"\n{'='*60}")
        print(f"{title} ({len(rows)} rows)")
        print("=" * 60)

        display_rows = rows[: self.max_rows] if self.max_rows else rows
        frame = pd.DataFrame([self._flatten(r, key_names) for r in display_rows])
        if frame.empty:
            print("(no data)")
        else:
            print(frame.round(self.precision).to_string(index=False))

        if self.max_rows and len(rows) > self.max_rows:
            print(f"... and {len(rows) - self.max_rows} more rows")

        self._counts[title] = self._counts.get(title, 0) + len(rows)

    def write_insights(self, insights: Insights | None) -> None:
        """Print each non-empty highlight on its own line."""
        print(f"\n{'='*60}")
        print("Market Insights")
        print("=" * 60)
        if insights is None:
            print("(no data)")
            return
        for name, value in to_dict(insights).items():
            if value is not None:
                print(f"  {name}: {value}")

    def close(self) -> None:
        """Print summary."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for title, count in self._counts.items():
            print(f"  {title}: {count} rows")

    def _flatten(self, row: Any, key_names: Sequence[str]) -> dict:
        data = to_dict(row)
        if isinstance(row, AggregateRow):
            key = data.pop("key")
            names = list(key_names) or [f"key_{i}" for i in range(len(key))]
            data = {**dict(zip(names, key)), **data}
            if row.total_volume is None:
                data.pop("total_volume")
        return data
