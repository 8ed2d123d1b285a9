"""Movements per lower-cased line in blocks of a chosen number of minutes."""

from __future__ import annotations

import math
import re
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

DEFAULT_BLOCK_SIZE = 5
_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


def parse_block_size(argv: Sequence[str]) -> int:
    """Block size in minutes from the first argument, or 5 when absent or invalid."""
    if argv:
        text = argv[0]
        if _UNSIGNED.fullmatch(text) and int(text) <= _U32_MAX:
            return int(text)
    return DEFAULT_BLOCK_SIZE


def _blocks_per_hour(block_size: int) -> int:
    if block_size <= 0 or 60 // block_size == 0:
        raise ValueError(f"block size must be between 1 and 60 minutes, not {block_size}")
    return 60 // block_size


def _on_first_date(records: Iterable[Record]) -> Iterator[Record]:
    first = None
    for record in records:
        if first is None:
            first = record.business_date
        if record.business_date == first:
            yield record


def block_movements(records: Iterable[Record], block_size: int = DEFAULT_BLOCK_SIZE) -> dict[str, list[float]]:
    """Sum movements per lower-cased line in blocks from 03:00 to midnight.

    Only the first business date is counted; later times fall into the last block.
    """
    per_hour = _blocks_per_hour(block_size)
    total = (24 - BUSINESS_DAY_START) * per_hour
    series: dict[str, list[float]] = {}
    for record in _on_first_date(records):
        departure = parse_time(record.departure_time_scheduled)
        if departure is None:
            continue
        counts = series.setdefault(record.line_name.lower(), [0.0] * total)
        block = math.floor((decimal_time(departure) - BUSINESS_DAY_START) * per_hour + 0.5)
        counts[min(block, total - 1)] += record.movements
    return series


def write_blocks(series: dict[str, list[float]], output_dir: str | Path, block_size: int) -> list[Path]:
    """Write one "<line>_<size>min.csv" per line and return the paths."""
    per_hour = _blocks_per_hour(block_size)
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for line, counts in series.items():
        path = directory / f"{line}_{block_size}min.csv"
        with open(path, "w", encoding="utf-8", newline="\n") as out:
            out.write("Time,Movements\n")
            out.writelines(
                f"{BUSINESS_DAY_START + block / per_hour:.2f},{count:.2f}\n"
                for block, count in enumerate(counts)
            )
        written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Read data.csv and write block movement files into processed/."""
    args = sys.argv[1:] if argv is None else list(argv)
    block_size = parse_block_size(args)
    try:
        _blocks_per_hour(block_size)
        Path(OUTPUT_DIR).mkdir(parents=True, exist_ok=True)
        with open(DATA_FILE, encoding="utf-8", newline="") as source:
            records = list(read_records(source))
        series = block_movements(tqdm(records, desc="Processing CSV...", unit="rec"), block_size)
        print("CSV processing complete.")
        write_blocks(series, OUTPUT_DIR, block_size)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Processed data saved in '{OUTPUT_DIR}'.")
    return 0