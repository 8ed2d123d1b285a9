# ptvdata

Tools for turning a train patronage export (`data.csv`) into per-line
passenger movement time series, CSV summaries and charts.

A "movement" is one boarding or one alighting. The business day runs from
03:00 to 02:59 the next morning, so departures after midnight count
towards the end of the same business day.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Input

Every command reads `data.csv` from the current directory.

All commands except `ptv-flow` read it as CSV with a header row, which must
hold at least the columns `Business_Date`, `Line_Name`,
`Departure_Time_Scheduled`, `Passenger_Boardings` and
`Passenger_Alightings`. The other columns of the export (`Day_of_Week`,
`Station_Name`, `Arrival_Time_Scheduled`, `Passenger_Arrival_Load`, …) are
read when present. A missing required column, a row with the wrong number
of fields or a non-integer in an integer column stops the command with an
error message and exit status 1. Rows whose departure time is not
`HH:MM:SS` are left out of the time series.

`ptv-flow` skips the header line and splits each line on commas, taking
fields by position: train number (5th), station (10th), arrival and
departure times (15th and 16th), boardings, alightings, arrival load and
departure load (20th to 23rd). Rows whose times do not parse are skipped.

## Commands

| Command | What it produces |
|---|---|
| `ptv-hourly` | `processed/<Line>.csv`: movements per business hour (0–23) for the first business date in the file |
| `ptv-quarter-hour` | `processed/<Line>.csv`: movements per 15-minute block for the first business date, time written as a decimal hour and counts as whole numbers |
| `ptv-blocks [MINUTES]` | `processed/<line>_<MINUTES>min.csv`: movements per block of the given size (default 5, an invalid value also means 5) from 03:00 to midnight for the first business date; line names lower-cased |
| `ptv-line-blocks [LINE]` | `processed/<date>_<line>.csv`: movements per 15-minute block (`HH:MM`) for every business date, optionally for one line only (case-insensitive) |
| `ptv-flow` | prints `x, y` points (minutes since midnight, passenger load), 100 per stop, ready to paste into a graphing tool |
| `ptv-charts` | `total_movements_chart.png`, `time_series_chart.png` and `cumulative_time_series_chart.png` in the current directory |
| `ptv-report` | the three charts plus the hourly CSV files in `processed/` |

Notes:

- `ptv-quarter-hour` fails with an error when a departure rounds past the
  last quarter hour (from 02:53 on); `ptv-blocks` and `ptv-line-blocks`
  put such departures into their last block instead.
- `ptv-blocks` accepts block sizes from 1 to 60 minutes.
- `ptv-report` draws the charts only when the file holds at least one record.

Examples:

```
ptv-blocks 10
ptv-line-blocks pakenham
ptv-flow > flow.csv
```

## Using it from Python

```python
from ptvdata.records import read_records
from ptvdata.hourly import hourly_movements, write_hourly

with open("data.csv", encoding="utf-8", newline="") as source:
    series = hourly_movements(read_records(source))

write_hourly(series, "processed")
```

Other building blocks:

- `ptvdata.quarter_hour.quarter_hour_movements` / `write_quarter_hour`
- `ptvdata.block_series.block_movements` / `write_blocks`
- `ptvdata.line_blocks.daily_line_movements` / `write_daily_line`
- `ptvdata.flow.read_services`, `passenger_flow` and `format_flow`
- `ptvdata.charts.summarise` gives per-line totals and the hourly series in
  one pass; `total_movements_chart`, `time_series_chart` and
  `cumulative_chart` draw PNG charts from them.
- `ptvdata.report.build_report(data_path, output_dir, chart_dir)` runs the
  whole pipeline and returns the paths it wrote.

## What it does not do

The file locations are fixed: the commands always read `data.csv` and write
into `processed/` or the current directory, with no options to change
them. Charts are written as PNG only and are not shown on screen.