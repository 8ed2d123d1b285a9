import math
from datetime import time
from pathlib import Path

import pytest

from ptvdata.flow import TrainService, format_flow, main, passenger_flow, read_services

HEADER = "header\n"


def _row(train="101", station="Richmond", arrival="08:00:00", departure="08:10:00",
         boardings="12", alightings="2", arrival_load="40", departure_load="50"):
    parts = ["x"] * 23
    parts[4] = train
    parts[9] = station
    parts[14] = arrival
    parts[15] = departure
    parts[19] = boardings
    parts[20] = alightings
    parts[21] = arrival_load
    parts[22] = departure_load
    return ",".join(parts) + "\n"


def _service(arrival=time(8, 0), departure=time(8, 10), boardings=12, alightings=2, load=50):
    return TrainService(101, "Richmond", arrival, departure, boardings, alightings, 40, load)


def test_read_services_parses_fields():
    services = read_services([HEADER, _row()])
    assert services == [_service()]


def test_header_line_is_skipped():
    assert read_services([_row()]) == []


def test_invalid_times_are_skipped():
    assert read_services([HEADER, _row(arrival="late"), _row(departure="99:00:00")]) == []


def test_bad_numbers_become_zero():
    service = read_services([HEADER, _row(train="abc", boardings="-4")])[0]
    assert service.train_number == 0
    assert service.boardings == 0


def test_short_line_raises():
    with pytest.raises(ValueError):
        read_services([HEADER, "a,b,c\n"])


def test_crlf_line_endings_are_accepted():
    services = read_services([HEADER, _row().replace("\n", "\r\n")])
    assert services[0].departure_load == 50


def test_flow_has_hundred_points_starting_at_load():
    points = passenger_flow([_service()])
    assert len(points) == 100
    assert points[0][1] == 50.0


def test_flow_rises_with_net_boardings():
    points = passenger_flow([_service()])
    times = [t for t, _ in points]
    loads = [p for _, p in points]
    assert times == sorted(times) and len(set(times)) == len(times)
    assert loads == sorted(loads) and len(set(loads)) == len(loads)
    assert all(times[0] <= t < times[0] + 10 for t in times)


def test_flow_for_several_services():
    assert len(passenger_flow([_service(), _service(load=9)])) == 200


def test_zero_dwell_gives_nan():
    points = passenger_flow([_service(departure=time(8, 0))])
    assert points[0][1] == 50.0
    assert all(math.isnan(p) for _, p in points[1:])


def test_format_flow():
    lines = list(format_flow([(480.0, 50.0), (480.5, 3.25), (1.0, float("nan")), (0.0, float("inf"))]))
    assert lines == ["x, y", "480, 50", "480.5, 3.25", "1, NaN", "0, inf"]


def test_main_prints_points(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("data.csv").write_text(HEADER + _row() + _row(station="Caulfield"), encoding="utf-8")
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "x, y"
    assert len(lines) == 201


def test_main_reports_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert capsys.readouterr().out.startswith("Error reading data:")