"""
Data Generators Module

Provides generators for temporal data:
- Dates: Interval sampling, relative dates, durations and locale names
- Temporal: Column-oriented batch generation into pandas DataFrames
"""

from .dates import DateGenerator, LocaleCapabilities
from .temporal import TemporalGenerator, ColumnSpec, COLUMN_METHODS

__all__ = [
    # Date generators
    "DateGenerator",
    "LocaleCapabilities",

    # Temporal generators
    "TemporalGenerator",
    "ColumnSpec",
    "COLUMN_METHODS",
]
