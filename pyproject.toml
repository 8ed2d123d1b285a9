[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ptvdata"
version = "0.1.0"
description = "Aggregate train passenger boardings and alightings into time series, CSV summaries and charts"
requires-python = ">=3.10"
keywords = ["public transport", "passenger data", "time series", "csv", "charts"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]
dependencies = [
    "matplotlib",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ptv-hourly = "ptvdata.hourly:main"
ptv-quarter-hour = "ptvdata.quarter_hour:main"
ptv-blocks = "ptvdata.block_series:main"
ptv-line-blocks = "ptvdata.line_blocks:main"
ptv-flow = "ptvdata.flow:main"
ptv-charts = "ptvdata.charts:main"
ptv-report = "ptvdata.report:main"

[tool.hatch.build.targets.wheel]
packages = ["ptvdata"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
