"""Passenger movement time series, CSV summaries and charts from train patronage data."""

__version__ = "0.1.0"