"""Historical dataset sources and the lazy, load-once dataset holder."""

from __future__ import annotations

import asyncio
import math
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import pandas as pd
import structlog

from app.models.dataset import HistoricalRecord

_logger = structlog.get_logger("cropmind.dataset")

COLUMN_TEMPERATURE = "Temperature"
COLUMN_HUMIDITY = "Humidity"
COLUMN_MOISTURE = "Moisture"
COLUMN_SOIL_TYPE = "Soil Type"
COLUMN_CROP = "Crop"
COLUMN_FERTILIZER = "Fertilizer"

NUMERIC_COLUMNS = (COLUMN_TEMPERATURE, COLUMN_HUMIDITY, COLUMN_MOISTURE)
TEXT_COLUMNS = (COLUMN_SOIL_TYPE, COLUMN_CROP, COLUMN_FERTILIZER)


class DatasetSource(Protocol):
	def load_rows(self) -> list[HistoricalRecord]: ...


class InMemoryDatasetSource:
	"""Fixture-backed source; rows are returned as given."""

	def __init__(self, rows: Iterable[HistoricalRecord] = ()):
		self._rows = list(rows)

	def load_rows(self) -> list[HistoricalRecord]:
		return list(self._rows)


class CsvDatasetSource:
	"""Reads the flat crop/fertilizer CSV, mapping columns by header name.

	Column order does not matter and extra columns are ignored. Numeric cells
	that fail to parse become ``nan``; a missing file yields an empty table.
	"""

	def __init__(self, path: str | Path):
		self.path = Path(path)

	def load_rows(self) -> list[HistoricalRecord]:
		if not self.path.is_file():
			_logger.warning("dataset_file_missing", path=str(self.path))
			return []

		frame = pd.read_csv(
			self.path,
			dtype=str,
			keep_default_na=False,
			skipinitialspace=True,
		)
		frame.columns = [str(column).strip() for column in frame.columns]
		missing = [column for column in (*NUMERIC_COLUMNS, *TEXT_COLUMNS) if column not in frame.columns]
		if missing:
			raise ValueError(f"dataset {self.path} is missing columns: {', '.join(missing)}")

		for column in NUMERIC_COLUMNS:
			frame[column] = pd.to_numeric(frame[column].str.strip(), errors="coerce")
		for column in TEXT_COLUMNS:
			frame[column] = frame[column].fillna("").astype(str).str.strip()

		rows = [
			HistoricalRecord(
				temperature=_as_float(temperature),
				humidity=_as_float(humidity),
				moisture=_as_float(moisture),
				soil_type=soil_type,
				crop=crop,
				fertilizer=fertilizer,
			)
			for temperature, humidity, moisture, soil_type, crop, fertilizer in zip(
				frame[COLUMN_TEMPERATURE],
				frame[COLUMN_HUMIDITY],
				frame[COLUMN_MOISTURE],
				frame[COLUMN_SOIL_TYPE],
				frame[COLUMN_CROP],
				frame[COLUMN_FERTILIZER],
			)
		]
		_logger.info("dataset_loaded", path=str(self.path), rows=len(rows))
		return rows


def _as_float(value: object) -> float:
	try:
		number = float(value)  # type: ignore[arg-type]
	except (TypeError, ValueError):
		return math.nan
	return number


class HistoricalDataset:
	"""Load-once, read-many view over a ``DatasetSource``.

	The first ``rows()`` call reads the source off the event loop; later calls
	return the cached list. There is no invalidation.
	"""

	def __init__(self, source: DatasetSource):
		self._source = source
		self._rows: list[HistoricalRecord] | None = None
		self._lock = asyncio.Lock()

	@property
	def loaded(self) -> bool:
		return self._rows is not None

	async def rows(self) -> list[HistoricalRecord]:
		if self._rows is not None:
			return self._rows
		async with self._lock:
			if self._rows is None:
				self._rows = await asyncio.to_thread(self._source.load_rows)
		return self._rows
