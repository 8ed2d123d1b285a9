"""Quarter-hour movements per business date and line, optionally for one line."""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Iterable, Sequence

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


def daily_line_movements(
    records: Iterable[Record], line: str | None = None
) -> dict[str, dict[str, list[float]]]:
    """Sum movements per business date and lower-cased line in 96 quarter hours.

    When line is given, only records of that line (compared without case) are
    counted. Times that round past the last quarter hour fall into it.
    """
    wanted = line.lower() if line is not None else None
    series: dict[str, dict[str, list[float]]] = {}
    for record in records:
        name = record.line_name.lower()
        if wanted is not None and name != wanted:
            continue
        departure = parse_time(record.departure_time_scheduled)
        if departure is None:
            continue
        counts = series.setdefault(record.business_date, {}).setdefault(
            name, [0.0] * QUARTERS
        )
        block = math.floor((decimal_time(departure) - BUSINESS_DAY_START) * 4 + 0.5)
        counts[min(block, QUARTERS - 1)] += record.movements
    return series


def write_daily_line(
    series: dict[str, dict[str, list[float]]], output_dir: str | Path
) -> list[Path]:
    """Write one "<date>_<line>.csv" per date and line and return the paths."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for business_date, lines in series.items():
        for line, counts in lines.items():
            path = directory / f"{business_date}_{line}.csv"
            with open(path, "w", encoding="utf-8", newline="\n") as out:
                out.write("Time,Movements\n")
                out.writelines(
                    f"{BUSINESS_DAY_START + block // 4:02d}:{(block % 4) * 15:02d},{count:.2f}\n"
                    for block, count in enumerate(counts)
                )
            written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Read data.csv and write per-date, per-line quarter-hour files into processed/."""
    args = sys.argv[1:] if argv is None else list(argv)
    line = args[0].lower() if args else None
    try:
        Path(OUTPUT_DIR).mkdir(parents=True, exist_ok=True)
        with open(DATA_FILE, encoding="utf-8", newline="") as source:
            records = list(read_records(source))
        series = daily_line_movements(
            tqdm(records, desc="Processing CSV...", unit="rec"), line
        )
        print("CSV processing complete.")
        write_daily_line(series, OUTPUT_DIR)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Processed data saved in '{OUTPUT_DIR}'.")
    return 0