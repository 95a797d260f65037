"""
Temporal Data Generator Module

Generates synthetic temporal columns (pandas) from declarative column specs:
- One DateGenerator entry point per column
- Parameters parsed from YAML/CLI friendly values
- Optional strftime rendering
- Bound validation of generated frames
"""

import pandas as pd
from typing import Optional, List, Dict, Any, Callable, Tuple
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
import logging

from ..config import Config, get_default_config
from .dates import DateGenerator

logger = logging.getLogger(__name__)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return pd.Timestamp(value).to_pydatetime()


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


def _to_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, int):
        # Unquoted H:MM in YAML loads as a base-60 integer
        raise ValueError(f"Ambiguous time {value!r}: quote times such as \"08:00\"")
    return pd.Timestamp(str(value)).time()


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _to_timedelta(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return pd.Timedelta(value).to_pytimedelta()


# method -> {param name: parser}
COLUMN_METHODS: Dict[str, Dict[str, Callable[[Any], Any]]] = {
    'between': {'start': _to_datetime, 'end': _to_datetime},
    'past': {'years': int, 'ref_date': _to_datetime},
    'future': {'years': int, 'ref_date': _to_datetime},
    'soon': {'days': float, 'ref_date': _to_datetime},
    'recent': {'days': float, 'ref_date': _to_datetime},
    'timespan': {'max_span': _to_timedelta},
    'between_dates': {'start': _to_date, 'end': _to_date},
    'past_date': {'years': int, 'ref_date': _to_date},
    'future_date': {'years': int, 'ref_date': _to_date},
    'soon_date': {'days': float, 'ref_date': _to_date},
    'recent_date': {'days': float, 'ref_date': _to_date},
    'between_times': {'start': _to_time, 'end': _to_time},
    'soon_time': {'minutes': float, 'ref_time': _to_time},
    'recent_time': {'minutes': float, 'ref_time': _to_time},
    'month': {'abbreviation': _to_bool, 'use_context': _to_bool},
    'weekday': {'abbreviation': _to_bool, 'use_context': _to_bool},
    'timezone': {},
}

DATETIME_METHODS = {'between', 'past', 'future', 'soon', 'recent'}
TEXT_METHODS = {'month', 'weekday', 'timezone'}

# Params without a default on the DateGenerator method
REQUIRED_PARAMS: Dict[str, Tuple[str, ...]] = {
    'between': ('start', 'end'),
    'between_dates': ('start', 'end'),
    'between_times': ('start', 'end'),
}


@dataclass
class ColumnSpec:
    """How to generate one column"""
    name: str
    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    date_format: Optional[str] = None

    @classmethod
    def from_dict(cls, spec: Dict[str, Any]) -> "ColumnSpec":
        return cls(
            name=spec['name'],
            method=spec['method'],
            params=dict(spec.get('params') or {}),
            date_format=spec.get('date_format'),
        )

    def parsed_params(self) -> Dict[str, Any]:
        """
        Parse raw params into the types the entry point expects

        Returns:
            Keyword arguments for the DateGenerator method
        """
        if self.method not in COLUMN_METHODS:
            raise ValueError(
                f"{self.name}: unknown method '{self.method}'. "
                f"Available: {', '.join(sorted(COLUMN_METHODS))}"
            )

        parsers = COLUMN_METHODS[self.method]
        unknown = set(self.params) - set(parsers)
        if unknown:
            raise ValueError(
                f"{self.name}: unexpected params for '{self.method}': {sorted(unknown)}"
            )

        missing = [p for p in REQUIRED_PARAMS.get(self.method, ()) if self.params.get(p) is None]
        if missing:
            raise ValueError(f"{self.name}: '{self.method}' requires params {missing}")

        return {
            key: parsers[key](value)
            for key, value in self.params.items()
            if value is not None
        }


class TemporalGenerator:
    """
    Generates synthetic temporal data

    Features:
    - Every DateGenerator entry point available as a column method
    - Reproducible through the configured seed and clock
    - Optional per-column or global date format
    """

    def __init__(self, config: Optional[Config] = None, dates: Optional[DateGenerator] = None):
        """
        Initialize temporal generator

        Args:
            config: Configuration object
            dates: Date generator to draw from (default: built from config)
        """
        self.config = config or get_default_config()
        self.dates = dates if dates is not None else DateGenerator(self.config)
        self.date_format = self.config.temporal.date_format

    def generate(
        self,
        columns: Optional[List[ColumnSpec]] = None,
        num_rows: Optional[int] = None
    ) -> pd.DataFrame:
        """
        Generate synthetic temporal data

        Args:
            columns: Column specs (default: columns from config)
            num_rows: Number of rows (default: generation.num_rows)

        Returns:
            DataFrame with one column per spec
        """
        if columns is None:
            columns = [ColumnSpec.from_dict(c) for c in self.config.columns]
        if num_rows is None:
            num_rows = self.config.generation.num_rows

        logger.info(f"Generating {num_rows} rows for {len(columns)} temporal columns")

        result = pd.DataFrame(index=range(num_rows))

        for spec in columns:
            result[spec.name] = self._generate_column(spec, num_rows)

        logger.info(f"Generated temporal data: {result.shape}")
        return result

    def _generate_column(self, spec: ColumnSpec, num_rows: int) -> pd.Series:
        kwargs = spec.parsed_params()
        method = getattr(self.dates, spec.method)

        values = [method(**kwargs) for _ in range(num_rows)]

        date_format = spec.date_format or self.date_format
        if date_format and spec.method not in TEXT_METHODS and spec.method != 'timespan':
            return pd.Series([v.strftime(date_format) for v in values], dtype=object)

        if spec.method in DATETIME_METHODS:
            return pd.Series(pd.to_datetime(values))
        if spec.method == 'timespan':
            return pd.Series(pd.to_timedelta(values))

        return pd.Series(values, dtype=object)

    def validate(self, generated_data: pd.DataFrame, columns: List[ColumnSpec]) -> Dict[str, Any]:
        """
        Validate generated temporal data

        Args:
            generated_data: Generated data to validate
            columns: Specs the data was generated from

        Returns:
            Validation results
        """
        results = {
            "valid": True,
            "errors": [],
            "warnings": []
        }

        for spec in columns:
            if spec.name not in generated_data.columns:
                results["errors"].append(f"{spec.name}: Missing column")
                results["valid"] = False
                continue

            series = generated_data[spec.name]

            if series.isna().any():
                results["errors"].append(f"{spec.name}: Contains missing values")
                results["valid"] = False
                continue

            if spec.method not in DATETIME_METHODS:
                continue

            if spec.date_format or self.date_format:
                results["warnings"].append(f"{spec.name}: Formatted column, bounds not checked")
                continue

            low, high = self._expected_bounds(spec)
            if low is not None and series.min() < pd.Timestamp(low):
                results["errors"].append(f"{spec.name}: Some dates before {low.isoformat()}")
                results["valid"] = False
            if high is not None and series.max() > pd.Timestamp(high):
                results["errors"].append(f"{spec.name}: Some dates after {high.isoformat()}")
                results["valid"] = False

        return results

    def _expected_bounds(self, spec: ColumnSpec):
        params = spec.parsed_params()

        if spec.method == 'between':
            return tuple(sorted((params['start'], params['end'])))
        if spec.method == 'past' and 'ref_date' in params:
            return None, params['ref_date']
        if spec.method in ('future', 'soon') and 'ref_date' in params:
            return params['ref_date'], None
        if spec.method == 'recent' and 'ref_date' in params:
            # days=0 bounds depend on the clock's day
            if params.get('days', self.dates.settings.recent_days) == 0:
                return None, None
            return None, params['ref_date']

        return None, None
