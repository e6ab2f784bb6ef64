"""CSV file sink for exporting the filtered record set."""

import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

import pandas as pd

from urban_insights.exceptions import SinkError
from urban_insights.models import RECORD_FIELDS, PropertyRecord
from urban_insights.sinks.serialization import record_to_row

logger = logging.getLogger(__name__)


class CsvFileSink:
    """Write property records to CSV files."""

    def __init__(self, output_dir: str | Path, max_rows: int | None = 10000) -> None:
        """Initialize CSV file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write CSV files.
        max_rows : int | None
            Maximum rows per export (None for no limit).
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {e}") from e
        self.max_rows = max_rows
        self._counts: dict[str, int] = {}

    def write(self, records: Sequence[PropertyRecord], filename: str | None = None) -> Path:
        """Write records with one column per record field, in declared order.

        Returns
        -------
        Path
            Path of the written file.
        """
        filename = filename or f"housing_data_{date.today().isoformat()}.csv"
        file_path = self.output_dir / filename

        if self.max_rows is not None and len(records) > self.max_rows:
            logger.warning(
                "Export truncated to %d of %d records", self.max_rows, len(records)
            )
            records = records[: self.max_rows]

        frame = pd.DataFrame([record_to_row(r) for r in records], columns=list(RECORD_FIELDS))
        try:
            frame.to_csv(file_path, index=False)
        except OSError as e:
            raise SinkError(f"Failed to write {file_path}: {e}") from e

        self._counts[filename] = len(records)
        logger.info(
            "Exported %d records to %s",
            len(records),
            file_path,
            extra={"records": len(records), "path": file_path},
        )
        return file_path

    def close(self) -> None:
        """Print summary."""
        print(f"CSV files written to: {self.output_dir}")
        for filename, count in self._counts.items():
            print(f"  {filename}: {count} records")
