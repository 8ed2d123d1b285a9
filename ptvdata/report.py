"""Charts and hourly movement files produced together from the patronage data."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from tqdm import tqdm

from ptvdata.charts import (
    DEFAULT_PALETTE,
    cumulative_chart,
    summarise,
    time_series_chart,
    total_movements_chart,
)
from ptvdata.hourly import write_hourly
from ptvdata.records import DATA_FILE, OUTPUT_DIR, read_records

TOTAL_CHART = "total_movements_chart.png"
TIME_SERIES_CHART = "time_series_chart.png"
CUMULATIVE_CHART = "cumulative_time_series_chart.png"

REPORT_PALETTE: tuple[tuple[int, int, int], ...] = DEFAULT_PALETTE + (
    (75, 0, 130),
    (139, 69, 19),
    (60, 179, 113),
    (218, 112, 214),
    (255, 140, 0),
    (47, 79, 79),
    (123, 104, 238),
    (255, 99, 71),
)


def build_report(
    data_path: str | Path,
    output_dir: str | Path = OUTPUT_DIR,
    chart_dir: str | Path = ".",
) -> list[Path]:
    """Draw the three charts and write hourly movement files; return every path written.

    The charts are drawn only when the data holds at least one record. Hourly
    files go into output_dir, one "<line>.csv" per line with a time series.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    with open(data_path, encoding="utf-8", newline="") as source:
        records = list(read_records(source))
    summary = summarise(tqdm(records, desc="Processing CSV...", unit="rec", disable=None))

    written: list[Path] = []
    if summary.business_date is not None:
        charts = Path(chart_dir)
        charts.mkdir(parents=True, exist_ok=True)
        written.append(
            total_movements_chart(
                charts / TOTAL_CHART,
                "Total Movements by Line",
                summary.total_movements,
                REPORT_PALETTE,
            )
        )
        written.append(
            time_series_chart(
                charts / TIME_SERIES_CHART,
                summary.business_date,
                summary.time_series,
                REPORT_PALETTE,
            )
        )
        written.append(
            cumulative_chart(
                charts / CUMULATIVE_CHART,
                summary.business_date,
                summary.time_series,
                REPORT_PALETTE,
            )
        )
    written.extend(write_hourly(summary.time_series, out))
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Read data.csv, draw charts here and write hourly files into processed/."""
    try:
        build_report(DATA_FILE, OUTPUT_DIR, ".")
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("CSV processing complete.")
    print("\nCharts generated successfully.")
    print(f"Processed data saved in '{OUTPUT_DIR}'.")
    return 0