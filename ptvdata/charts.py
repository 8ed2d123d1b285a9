"""Line totals and business-day hourly charts drawn from the patronage data."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime
from itertools import accumulate, cycle
from pathlib import Path
from typing import Iterable, Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from tqdm import tqdm

from ptvdata.records import DATA_FILE, Record, business_hour, parse_time, read_records

HOURS = 24
WIDTH = 1600
HEIGHT = 1200
_DPI = 100
_CAPTION_SIZE = 36
_LABEL_SIZE = 22

DEFAULT_PALETTE: tuple[tuple[int, int, int], ...] = (
    (255, 0, 0),
    (0, 0, 255),
    (0, 128, 0),
    (255, 165, 0),
    (128, 0, 128),
    (0, 128, 128),
    (255, 192, 203),
    (128, 128, 0),
    (0, 0, 0),
    (165, 42, 42),
    (0, 255, 255),
    (255, 215, 0),
)


@dataclass
class Summary:
    """Per-line totals and the hourly series of the first business date."""

    boardings: dict[str, int] = field(default_factory=dict)
    alightings: dict[str, int] = field(default_factory=dict)
    services: dict[str, int] = field(default_factory=dict)
    time_series: dict[str, list[int]] = field(default_factory=dict)
    business_date: str | None = None

    @property
    def total_movements(self) -> dict[str, int]:
        """Boardings plus alightings per line."""
        return {
            line: count + self.alightings.get(line, 0)
            for line, count in self.boardings.items()
        }


def _is_date(text: str) -> bool:
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def summarise(records: Iterable[Record]) -> Summary:
    """Total every record per line; build hourly movements for the first date.

    Records of that date count in the hourly series only when both their
    date and departure time parse.
    """
    summary = Summary()
    for record in records:
        line = record.line_name
        summary.boardings[line] = summary.boardings.get(line, 0) + record.passenger_boardings
        summary.alightings[line] = summary.alightings.get(line, 0) + record.passenger_alightings
        summary.services[line] = summary.services.get(line, 0) + 1

        if summary.business_date is None:
            summary.business_date = record.business_date
        if record.business_date != summary.business_date:
            continue
        departure = parse_time(record.departure_time_scheduled)
        if departure is None or not _is_date(record.business_date):
            continue
        counts = summary.time_series.setdefault(line, [0] * HOURS)
        counts[business_hour(departure.hour)] += record.movements
    return summary


def cumulative(series: dict[str, Sequence[int]]) -> dict[str, list[int]]:
    """Running totals of each line's counts."""
    return {line: list(accumulate(counts)) for line, counts in series.items()}


def _colours(palette: Sequence[tuple[int, int, int]]) -> list[tuple[float, float, float]]:
    if not palette:
        raise ValueError("palette must hold at least one colour")
    return [(r / 255, g / 255, b / 255) for r, g, b in palette]


def _figure() -> Figure:
    fig = Figure(figsize=(WIDTH / _DPI, HEIGHT / _DPI), dpi=_DPI)
    FigureCanvasAgg(fig)
    return fig


def _upper(peak: int) -> int:
    return peak + peak // 10 + 1


def total_movements_chart(
    filename: str | Path,
    caption: str,
    data: dict[str, int],
    palette: Sequence[tuple[int, int, int]] = DEFAULT_PALETTE,
) -> Path:
    """Draw one bar per line, sorted by name, labelled with its value."""
    colours = _colours(palette)
    items = sorted(data.items())
    peak = max((value for _, value in items), default=0)

    fig = _figure()
    ax = fig.add_subplot()
    fig.subplots_adjust(left=0.1, right=0.95, top=0.9, bottom=0.15)
    ax.set_title(caption, fontsize=_CAPTION_SIZE)
    for index, (_, value) in enumerate(items):
        ax.bar(index, value, width=1, align="edge", color=colours[index % len(colours)])
        ax.text(index + 1, value + peak // 50, str(value), fontsize=_LABEL_SIZE, color="black")
    ax.set_xlim(0, max(len(items), 1))
    ax.set_ylim(0, _upper(peak))
    ax.set_xticks([index + 0.5 for index in range(len(items))])
    ax.set_xticklabels([line for line, _ in items])
    ax.set_xlabel("Line", fontsize=_LABEL_SIZE)
    ax.set_ylabel("Total Movements", fontsize=_LABEL_SIZE)
    ax.tick_params(labelsize=_LABEL_SIZE)
    ax.grid(False)

    path = Path(filename)
    fig.savefig(path, dpi=_DPI)
    return path


def _line_chart(
    filename: str | Path,
    title: str,
    y_label: str,
    data: dict[str, Sequence[int]],
    palette: Sequence[tuple[int, int, int]],
) -> Path:
    colours = cycle(_colours(palette))
    peak = max((value for counts in data.values() for value in counts), default=0)

    fig = _figure()
    ax = fig.add_subplot()
    fig.subplots_adjust(left=0.1, right=0.95, top=0.9, bottom=0.1)
    ax.set_title(title, fontsize=_CAPTION_SIZE)
    for line, counts in data.items():
        ax.plot(
            range(len(counts)),
            list(counts),
            color=next(colours),
            linewidth=3,
            marker="o",
            markersize=7,
            label=line,
        )
    ax.set_xlim(0, HOURS - 1)
    ax.set_ylim(0, _upper(peak))
    ax.set_xlabel("Business Hour (0 = 03:00, 23 = 02:00)", fontsize=_LABEL_SIZE)
    ax.set_ylabel(y_label, fontsize=_LABEL_SIZE)
    ax.tick_params(labelsize=_LABEL_SIZE)
    ax.grid(True)
    if data:
        ax.legend(
            loc="upper right",
            framealpha=0.8,
            facecolor="white",
            edgecolor="black",
            fontsize=_LABEL_SIZE,
        )

    path = Path(filename)
    fig.savefig(path, dpi=_DPI)
    return path


def time_series_chart(
    filename: str | Path,
    business_date: str,
    data: dict[str, Sequence[int]],
    palette: Sequence[tuple[int, int, int]] = DEFAULT_PALETTE,
) -> Path:
    """Draw hourly movements per line with markers."""
    return _line_chart(
        filename,
        f"Hourly Total Movements on {business_date} (Business Day)",
        "Movements",
        data,
        palette,
    )


def cumulative_chart(
    filename: str | Path,
    business_date: str,
    data: dict[str, Sequence[int]],
    palette: Sequence[tuple[int, int, int]] = DEFAULT_PALETTE,
) -> Path:
    """Draw running totals of hourly movements per line with markers."""
    return _line_chart(
        filename,
        f"Cumulative Movements on {business_date} (Business Day)",
        "Cumulative Movements",
        cumulative(data),
        palette,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Read data.csv and draw the three charts into the current directory."""
    try:
        with open(DATA_FILE, encoding="utf-8", newline="") as source:
            records = list(read_records(source))
        summary = summarise(tqdm(records, desc="Processing CSV...", unit="rec"))
        print("CSV processing complete.")
        total_movements_chart(
            "total_movements_chart.png", "Total Movements by Line", summary.total_movements
        )
        if summary.business_date is not None:
            time_series_chart("time_series_chart.png", summary.business_date, summary.time_series)
            cumulative_chart(
                "cumulative_time_series_chart.png", summary.business_date, summary.time_series
            )
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("\nCharts generated successfully.")
    return 0