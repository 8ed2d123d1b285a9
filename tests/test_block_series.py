from pathlib import Path

import pytest

from ptvdata.block_series import block_movements, main, parse_block_size, write_blocks
from ptvdata.records import Record

HEADER = "Business_Date,Line_Name,Departure_Time_Scheduled,Passenger_Boardings,Passenger_Alightings\n"


def _record(departure="03:00:00", boardings=6, alightings=0, date="2022-09-12", line="Pakenham"):
    return Record(date, line, departure, boardings, alightings)


@pytest.mark.parametrize(
    "argv, expected",
    [([], 5), (["15"], 15), (["abc"], 5), (["-3"], 5), (["+10"], 10), ([" 7"], 5)],
)
def test_parse_block_size(argv, expected):
    assert parse_block_size(argv) == expected


def test_line_is_lower_cased():
    series = block_movements([_record()], 15)
    assert list(series) == ["pakenham"]
    assert series["pakenham"][0] == 6.0


def test_hourly_blocks_span_three_to_midnight():
    series = block_movements([_record()], 60)
    assert len(series["pakenham"]) == 21


def test_after_midnight_goes_to_last_block():
    series = block_movements([_record(departure="01:00:00")], 15)
    assert series["pakenham"][-1] == 6.0
    assert sum(series["pakenham"]) == 6.0


def test_half_block_rounds_up():
    series = block_movements([_record(departure="03:15:00")], 30)
    assert series["pakenham"][1] == 6.0


def test_only_first_date_counts():
    records = [_record(), _record(date="2022-09-13", boardings=50), _record(departure="x", boardings=50)]
    series = block_movements(records, 5)
    assert sum(series["pakenham"]) == 6.0


@pytest.mark.parametrize("size", [0, 61])
def test_unusable_block_size_raises(size):
    with pytest.raises(ValueError):
        block_movements([_record()], size)


def test_write_blocks(tmp_path):
    series = block_movements([_record()], 15)
    paths = write_blocks(series, tmp_path, 15)
    assert paths == [tmp_path / "pakenham_15min.csv"]
    lines = paths[0].read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Time,Movements"
    assert lines[1] == "3.00,6.00"
    assert len(lines) == len(series["pakenham"]) + 1


def test_main_writes_named_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path("data.csv").write_text(HEADER + "2022-09-12,Glen Waverley,03:00:00,3,0\n", encoding="utf-8")
    assert main(["60"]) == 0
    lines = Path("processed/glen waverley_60min.csv").read_text(encoding="utf-8").splitlines()
    assert lines[1] == "3.00,3.00"


def test_main_rejects_zero_block(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path("data.csv").write_text(HEADER, encoding="utf-8")
    assert main(["0"]) == 1