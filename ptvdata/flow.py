"""Passenger flow points for each stop, printed as x, y pairs for plotting."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Iterable, Iterator, Sequence

from ptvdata.records import DATA_FILE, parse_time

POINTS_PER_SERVICE = 100

_TRAIN_NUMBER = 4
_STATION = 9
_ARRIVAL = 14
_DEPARTURE = 15
_BOARDINGS = 19
_ALIGHTINGS = 20
_ARRIVAL_LOAD = 21
_DEPARTURE_LOAD = 22


@dataclass(frozen=True)
class TrainService:
    """One stop of a train with its times and passenger counts."""

    train_number: int
    station_name: str
    arrival_time: time
    departure_time: time
    boardings: int
    alightings: int
    arrival_load: int
    departure_load: int


def _field(parts: list[str], index: int, line_number: int) -> str:
    try:
        return parts[index]
    except IndexError:
        raise ValueError(
            f"line {line_number}: has {len(parts)} fields, field {index} is needed"
        ) from None


def _unsigned(text: str) -> int:
    body = text[1:] if text.startswith("+") else text
    if body and body.isascii() and body.isdigit():
        value = int(body)
        if value < 2**32:
            return value
    return 0


def read_services(lines: Iterable[str]) -> list[TrainService]:
    """Parse comma-separated lines after the header into services.

    Rows whose arrival or departure time does not parse are skipped; a row
    too short for a needed field raises ValueError.
    """
    services = []
    for number, raw in enumerate(itertools.islice(lines, 1, None), start=2):
        parts = raw.rstrip("\n").removesuffix("\r").split(",")
        train_number = _unsigned(_field(parts, _TRAIN_NUMBER, number))
        station_name = _field(parts, _STATION, number)
        arrival = parse_time(_field(parts, _ARRIVAL, number))
        departure = parse_time(_field(parts, _DEPARTURE, number))
        if arrival is None or departure is None:
            continue
        services.append(
            TrainService(
                train_number=train_number,
                station_name=station_name,
                arrival_time=arrival,
                departure_time=departure,
                boardings=_unsigned(_field(parts, _BOARDINGS, number)),
                alightings=_unsigned(_field(parts, _ALIGHTINGS, number)),
                arrival_load=_unsigned(_field(parts, _ARRIVAL_LOAD, number)),
                departure_load=_unsigned(_field(parts, _DEPARTURE_LOAD, number)),
            )
        )
    return services


def _minutes(moment: time) -> float:
    return (moment.hour * 3600 + moment.minute * 60 + moment.second) / 60.0


def _rate(change: float, span: float) -> float:
    if span:
        return change / span
    if change == 0:
        return math.nan
    return math.copysign(math.inf, change)


def passenger_flow(services: Iterable[TrainService]) -> list[tuple[float, float]]:
    """Time (minutes) and passenger count points, 100 per service, linear over the dwell."""
    points = []
    for service in services:
        arrival = _minutes(service.arrival_time)
        span = _minutes(service.departure_time) - arrival
        rate = _rate(float(service.boardings) - float(service.alightings), span)
        load = float(service.departure_load)
        points.append((arrival, load))
        for step in range(1, POINTS_PER_SERVICE):
            moment = arrival + span * step / POINTS_PER_SERVICE
            points.append((moment, load + rate * (moment - arrival)))
    return points


def _display(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def format_flow(points: Iterable[tuple[float, float]]) -> Iterator[str]:
    """Yield an "x, y" header and one line per point."""
    yield "x, y"
    for moment, passengers in points:
        yield f"{_display(moment)}, {_display(passengers)}"


def main(argv: Sequence[str] | None = None) -> int:
    """Print the passenger flow of data.csv."""
    try:
        with open(DATA_FILE, encoding="utf-8") as source:
            services = read_services(source)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error reading data: {exc}")
        return 0
    for line in format_flow(passenger_flow(services)):
        print(line)
    return 0