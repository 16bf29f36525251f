from __future__ import annotations

from pathlib import Path

import pytest

from app.core.exceptions import LocationFileError
from app.locations import LocationDatabase
from app.locations.loader import read_locations

DATA_DIR = Path(__file__).parent / "data"
TEST_CSV = DATA_DIR / "locations.csv"


def test_load_test_csv():
    db = LocationDatabase.load(TEST_CSV)
    assert db.size == 2
    assert db.get(1).id == 1
    assert db.get(2).to_dict() == {
        "id": 2,
        "name": "Spike's Coffee and Teas",
        "address": "4117 18th St",
        "lat": 37.759418,
        "lng": -122.435263,
    }


def test_load_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        LocationDatabase.load(DATA_DIR / "blerrrrrg.csv")


def test_malformed_row_reports_line():
    with pytest.raises(LocationFileError) as excinfo:
        LocationDatabase.load(DATA_DIR / "malformed.csv")
    assert excinfo.value.line == 2
    assert "malformed.csv:2" in str(excinfo.value)


def test_wrong_column_count(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("1,Only a name,37.0,-122.0\n", encoding="utf-8")
    with pytest.raises(LocationFileError, match="expected 5 columns"):
        list(read_locations(path))


def test_whitespace_trimmed_and_blank_lines_skipped(tmp_path):
    path = tmp_path / "messy.csv"
    path.write_text(
        '\n  7 , "Blue Bottle, Mint Plaza" ,  66 Mint St , 37.782394 , -122.407930 \n\n',
        encoding="utf-8",
    )
    [location] = list(read_locations(path))
    assert location.id == 7
    assert location.name == "Blue Bottle, Mint Plaza"
    assert location.address == "66 Mint St"
    assert location.lat == pytest.approx(37.782394)
    assert location.lng == pytest.approx(-122.407930)


def test_duplicate_ids_overwrite_in_file_order(tmp_path):
    path = tmp_path / "dupes.csv"
    path.write_text(
        "5,First,1 First St,37.0,-122.0\n5,Second,2 Second St,38.0,-121.0\n",
        encoding="utf-8",
    )
    db = LocationDatabase.load(path)
    assert db.size == 1
    assert db.get(5).name == "Second"
    assert db.orphaned_entries == 1
