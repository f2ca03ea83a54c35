from __future__ import annotations

import math
from pathlib import Path

import pytest

from app.models.dataset import HistoricalRecord
from app.services.dataset_source import CsvDatasetSource, HistoricalDataset, InMemoryDatasetSource


def _write(path: Path, text: str) -> Path:
	path.write_text(text, encoding="utf-8")
	return path


def test_csv_rows_are_mapped_by_header(tmp_path: Path) -> None:
	csv_path = _write(
		tmp_path / "core.csv",
		"Crop,Fertilizer,Soil Type,Moisture,Humidity,Temperature,Notes\n"
		"Rice,Urea,Clay,55,60,25,wet season\n"
		"Wheat, DAP ,Loam,40,50,18,\n",
	)
	rows = CsvDatasetSource(csv_path).load_rows()
	assert rows == [
		HistoricalRecord(temperature=25.0, humidity=60.0, moisture=55.0, soil_type="Clay", crop="Rice", fertilizer="Urea"),
		HistoricalRecord(temperature=18.0, humidity=50.0, moisture=40.0, soil_type="Loam", crop="Wheat", fertilizer="DAP"),
	]


def test_unparseable_numbers_become_nan(tmp_path: Path) -> None:
	csv_path = _write(
		tmp_path / "core.csv",
		"Temperature,Humidity,Moisture,Soil Type,Crop,Fertilizer\n"
		"warm,60,,Clay,Rice,Urea\n",
	)
	(row,) = CsvDatasetSource(csv_path).load_rows()
	assert math.isnan(row.temperature)
	assert math.isnan(row.moisture)
	assert row.humidity == 60.0


def test_missing_columns_are_rejected(tmp_path: Path) -> None:
	csv_path = _write(tmp_path / "core.csv", "Temperature,Humidity,Crop\n25,60,Rice\n")
	with pytest.raises(ValueError, match="Moisture"):
		CsvDatasetSource(csv_path).load_rows()


def test_missing_file_yields_empty_table(tmp_path: Path) -> None:
	assert CsvDatasetSource(tmp_path / "absent.csv").load_rows() == []


def test_bundled_dataset_loads() -> None:
	bundled = Path(__file__).resolve().parents[1] / "data" / "data_core.csv"
	rows = CsvDatasetSource(bundled).load_rows()
	assert rows
	assert all(not math.isnan(row.temperature) for row in rows)


class CountingSource(InMemoryDatasetSource):
	def __init__(self, rows: list[HistoricalRecord]) -> None:
		super().__init__(rows)
		self.loads = 0

	def load_rows(self) -> list[HistoricalRecord]:
		self.loads += 1
		return super().load_rows()


@pytest.mark.asyncio
async def test_dataset_loads_once(sample_records: list[HistoricalRecord]) -> None:
	source = CountingSource(sample_records)
	dataset = HistoricalDataset(source)
	assert not dataset.loaded

	first = await dataset.rows()
	second = await dataset.rows()

	assert dataset.loaded
	assert first is second
	assert source.loads == 1
