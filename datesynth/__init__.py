"""
datesynth

Deterministic random date and time generation for synthetic test data,
with a replaceable clock, seedable random source and locale-aware
month and weekday names.
"""

__version__ = "1.0.0"
__author__ = "Synthetic Data Team"

from .config import Config, ConfigLoader, ConfigValidator, get_default_config
from .clock import frozen_clock, set_clock, reset_clock
from .locales import LocaleData, LocaleDataError
from .randomizer import Randomizer
from .generators import DateGenerator, TemporalGenerator, ColumnSpec

__all__ = [
    "Config",
    "ConfigLoader",
    "ConfigValidator",
    "get_default_config",
    "frozen_clock",
    "set_clock",
    "reset_clock",
    "LocaleData",
    "LocaleDataError",
    "Randomizer",
    "DateGenerator",
    "TemporalGenerator",
    "ColumnSpec",
]
