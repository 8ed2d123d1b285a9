"""Hourly passenger movements per line for the first business date in the data."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from tqdm import tqdm

from ptvdata.records import DATA_FILE, OUTPUT_DIR, Record, business_hour, parse_time, read_records

HOURS = 24


def _on_first_date(records: Iterable[Record]) -> Iterator[Record]:
    first = None
    for record in records:
        if first is None:
            first = record.business_date
        if record.business_date == first:
            yield record


def hourly_movements(records: Iterable[Record]) -> dict[str, list[int]]:
    """Sum boardings and alightings per line and business hour.

    Only records on the first business date seen are counted; records whose
    departure time does not parse are ignored.
    """
    series: dict[str, list[int]] = {}
    for record in _on_first_date(records):
        departure = parse_time(record.departure_time_scheduled)
        if departure is None:
            continue
        counts = series.setdefault(record.line_name, [0] * HOURS)
        counts[business_hour(departure.hour)] += record.movements
    return series


def write_hourly(series: dict[str, list[int]], output_dir: str | Path) -> list[Path]:
    """Write one "<line>.csv" per line into output_dir and return the paths."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for line, counts in series.items():
        path = directory / f"{line}.csv"
        with open(path, "w", encoding="utf-8", newline="\n") as out:
            out.write("Hour,Movements\n")
            out.writelines(f"{hour},{count}\n" for hour, count in enumerate(counts))
        written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Read data.csv and write hourly movement files into processed/."""
    try:
        Path(OUTPUT_DIR).mkdir(parents=True, exist_ok=True)
        with open(DATA_FILE, encoding="utf-8", newline="") as source:
            records = list(read_records(source))
        series = hourly_movements(tqdm(records, desc="Processing CSV...", unit="rec"))
        print("CSV processing complete.")
        write_hourly(series, OUTPUT_DIR)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Processed data saved in '{OUTPUT_DIR}'.")
    return 0