"""Ridership records read from the patronage CSV export, and time helpers."""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable, Iterator

DATA_FILE = "data.csv"
OUTPUT_DIR = "processed"
BUSINESS_DAY_START = 3

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Record:
    """One station stop of one train service, with its passenger counts."""

    business_date: str
    line_name: str
    departure_time_scheduled: str
    passenger_boardings: int
    passenger_alightings: int
    day_of_week: str = ""
    day_type: str = ""
    mode: str = ""
    train_number: str = ""
    group: str = ""
    direction: str = ""
    origin_station: str = ""
    destination_station: str = ""
    station_name: str = ""
    station_latitude: str = ""
    station_longitude: str = ""
    station_chainage: int = 0
    stop_sequence_number: int = 0
    arrival_time_scheduled: str = ""
    passenger_arrival_load: int = 0
    passenger_departure_load: int = 0

    @property
    def movements(self) -> int:
        """Boardings plus alightings at this stop."""
        return self.passenger_boardings + self.passenger_alightings


_TEXT_COLUMNS = {
    "Business_Date": "business_date",
    "Day_of_Week": "day_of_week",
    "Day_Type": "day_type",
    "Mode": "mode",
    "Train_Number": "train_number",
    "Line_Name": "line_name",
    "Group": "group",
    "Direction": "direction",
    "Origin_Station": "origin_station",
    "Destination_Station": "destination_station",
    "Station_Name": "station_name",
    "Station_Latitude": "station_latitude",
    "Station_Longitude": "station_longitude",
    "Arrival_Time_Scheduled": "arrival_time_scheduled",
    "Departure_Time_Scheduled": "departure_time_scheduled",
}

_INT_COLUMNS = {
    "Station_Chainage": "station_chainage",
    "Stop_Sequence_Number": "stop_sequence_number",
    "Passenger_Boardings": "passenger_boardings",
    "Passenger_Alightings": "passenger_alightings",
    "Passenger_Arrival_Load": "passenger_arrival_load",
    "Passenger_Departure_Load": "passenger_departure_load",
}

_REQUIRED = (
    "Business_Date",
    "Line_Name",
    "Departure_Time_Scheduled",
    "Passenger_Boardings",
    "Passenger_Alightings",
)


def _parse_i32(text: str, column: str, line: int) -> int:
    if _INTEGER.fullmatch(text):
        value = int(text)
        if _I32_MIN <= value <= _I32_MAX:
            return value
    raise ValueError(f"line {line}: column {column} holds {text!r}, not an integer")


def read_records(source: Iterable[str]) -> Iterator[Record]:
    """Yield a Record for every data row of a CSV stream with a header row.

    Raises ValueError when a required column is missing, a row has the wrong
    number of fields, or an integer column holds something else.
    """
    reader = csv.reader(source)
    header = next(reader, None)
    if header is None:
        return
    missing = [column for column in _REQUIRED if column not in header]
    if missing:
        raise ValueError(f"missing column(s): {', '.join(missing)}")

    for row in reader:
        if not row:
            continue
        if len(row) != len(header):
            raise ValueError(
                f"line {reader.line_num}: expected {len(header)} fields, found {len(row)}"
            )
        values = dict(zip(header, row))
        fields: dict[str, object] = {
            attr: values[column] for column, attr in _TEXT_COLUMNS.items() if column in values
        }
        fields.update(
            (attr, _parse_i32(values[column], column, reader.line_num))
            for column, attr in _INT_COLUMNS.items()
            if column in values
        )
        yield Record(**fields)


def parse_time(text: str) -> time | None:
    """Parse an HH:MM:SS clock time, or return None if it is not one."""
    try:
        return datetime.strptime(text, "%H:%M:%S").time()
    except ValueError:
        return None


def business_hour(hour: int) -> int:
    """Hour index within a business day that starts at 03:00."""
    if hour < BUSINESS_DAY_START:
        return hour + 24 - BUSINESS_DAY_START
    return hour - BUSINESS_DAY_START


def decimal_time(moment: time) -> float:
    """Hours since midnight as a fraction; times before 03:00 count as the next day."""
    hour = moment.hour + 24 if moment.hour < BUSINESS_DAY_START else moment.hour
    return hour + moment.minute / 60.0