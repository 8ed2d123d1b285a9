"""Quarter-hour passenger movements per line for the first business date."""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from tqdm import tqdm

from ptvdata.records import (
    BUSINESS_DAY_START,
    DATA_FILE,
    OUTPUT_DIR,
    Record,
    decimal_time,
    parse_time,
    read_records,
)

QUARTERS = 96


def _on_first_date(records: Iterable[Record]) -> Iterator[Record]:
    first = None
    for record in records:
        if first is None:
            first = record.business_date
        if record.business_date == first:
            yield record


def quarter_hour_movements(records: Iterable[Record]) -> dict[str, list[float]]:
    """Sum movements per line in 96 fifteen-minute blocks from 03:00.

    Departure times round to the nearest block; one that rounds past the
    last block raises ValueError.
    """
    series: dict[str, list[float]] = {}
    for record in _on_first_date(records):
        departure = parse_time(record.departure_time_scheduled)
        if departure is None:
            continue
        block = math.floor((decimal_time(departure) - BUSINESS_DAY_START) * 4 + 0.5)
        if block >= QUARTERS:
            raise ValueError(
                f"departure {record.departure_time_scheduled} falls past the last quarter hour"
            )
        counts = series.setdefault(record.line_name, [0.0] * QUARTERS)
        counts[block] += record.movements
    return series


def write_quarter_hour(series: dict[str, list[float]], output_dir: str | Path) -> list[Path]:
    """Write one "<line>.csv" per line with decimal times and return the paths."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for line, counts in series.items():
        path = directory / f"{line}.csv"
        with open(path, "w", encoding="utf-8", newline="\n") as out:
            out.write("Time (Decimal),Movements\n")
            out.writelines(
                f"{BUSINESS_DAY_START + block / 4:.2f},{count:.0f}\n"
                for block, count in enumerate(counts)
            )
        written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Read data.csv and write quarter-hour movement files into processed/."""
    try:
        Path(OUTPUT_DIR).mkdir(parents=True, exist_ok=True)
        with open(DATA_FILE, encoding="utf-8", newline="") as source:
            records = list(read_records(source))
        series = quarter_hour_movements(tqdm(records, desc="Processing CSV...", unit="rec"))
        print("CSV processing complete.")
        write_quarter_hour(series, OUTPUT_DIR)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Processed data saved in '{OUTPUT_DIR}'.")
    return 0