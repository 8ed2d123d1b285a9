from pathlib import Path

import pytest

from ptvdata.charts import total_movements_chart
from ptvdata.hourly import HOURS
from ptvdata.report import (
    CUMULATIVE_CHART,
    REPORT_PALETTE,
    TIME_SERIES_CHART,
    TOTAL_CHART,
    build_report,
    main,
)

HEADER = "Business_Date,Line_Name,Departure_Time_Scheduled,Passenger_Boardings,Passenger_Alightings\n"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _write(path: Path, rows: list[str]) -> Path:
    path.write_text(HEADER + "".join(row + "\n" for row in rows), encoding="utf-8")
    return path


def test_report_writes_charts_and_hourly_files(tmp_path):
    data = _write(
        tmp_path / "data.csv",
        [
            "2022-09-12,Alpha,03:15:00,7,0",
            "2022-09-13,Beta,04:00:00,1,1",
        ],
    )
    out = tmp_path / "processed"
    charts = tmp_path / "charts"
    written = build_report(data, out, charts)

    for name in (TOTAL_CHART, TIME_SERIES_CHART, CUMULATIVE_CHART):
        chart = charts / name
        assert chart in written
        assert chart.read_bytes().startswith(PNG_MAGIC)

    alpha = out / "Alpha.csv"
    assert alpha in written
    lines = alpha.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Hour,Movements"
    assert lines[1] == "0,7"
    assert len(lines) == 1 + HOURS
    assert not (out / "Beta.csv").exists()


def test_empty_data_creates_output_dir_only(tmp_path):
    data = _write(tmp_path / "data.csv", [])
    out = tmp_path / "processed"
    charts = tmp_path / "charts"
    assert build_report(data, out, charts) == []
    assert out.is_dir()
    assert not (charts / TOTAL_CHART).exists()


def test_unparsable_date_draws_charts_without_hourly_files(tmp_path):
    data = _write(tmp_path / "data.csv", ["bad,Alpha,05:00:00,2,2"])
    out = tmp_path / "processed"
    written = build_report(data, out, tmp_path)
    assert sorted(p.name for p in written) == sorted(
        [TOTAL_CHART, TIME_SERIES_CHART, CUMULATIVE_CHART]
    )
    assert list(out.iterdir()) == []


def test_missing_column_raises(tmp_path):
    data = tmp_path / "data.csv"
    data.write_text("Business_Date,Line_Name\n2022-09-12,Alpha\n", encoding="utf-8")
    with pytest.raises(ValueError):
        build_report(data, tmp_path / "processed", tmp_path)


def test_report_palette_draws_twenty_lines(tmp_path):
    assert len(REPORT_PALETTE) == 20
    assert REPORT_PALETTE[12] == (75, 0, 130)
    assert REPORT_PALETTE[-1] == (255, 99, 71)
    data = {f"Line{index:02d}": index + 1 for index in range(20)}
    target = tmp_path / "bars.png"
    total_movements_chart(str(target), "Total Movements by Line", data, REPORT_PALETTE)
    assert target.read_bytes().startswith(PNG_MAGIC)


def test_main_uses_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "data.csv", ["2022-09-12,Gamma,02:30:00,4,0"])
    assert main([]) == 0
    lines = (tmp_path / "processed" / "Gamma.csv").read_text(encoding="utf-8").splitlines()
    assert lines[22] == "21,4"
    assert (tmp_path / TOTAL_CHART).read_bytes().startswith(PNG_MAGIC)


def test_main_without_data_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "Error" in capsys.readouterr().err