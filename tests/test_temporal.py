"""
Test Suite for Temporal Data Generation

Tests column specs, DataFrame generation and validation of generated frames.
"""

import pytest
import pandas as pd
from datetime import date, datetime, time, timedelta

from datesynth.clock import frozen_clock
from datesynth.config import get_default_config
from datesynth.generators import ColumnSpec, TemporalGenerator
from datesynth.generators.dates import DateGenerator

from tests.conftest import FixedRandom


@pytest.fixture
def config():
    """Create test configuration"""
    config = get_default_config()
    config.generation.num_rows = 50
    config.generation.seed = 42
    return config


@pytest.fixture
def generator(config):
    """Create temporal generator"""
    return TemporalGenerator(config)


@pytest.fixture
def columns():
    """Create column specs"""
    return [
        ColumnSpec("event_time", "between", {"start": "2023-01-01", "end": "2023-06-30T12:00:00"}),
        ColumnSpec("event_date", "between_dates", {"start": "2023-01-01", "end": "2023-01-31"}),
        ColumnSpec("shift", "between_times", {"start": "08:00", "end": "10:30"}),
        ColumnSpec("duration", "timespan", {"max_span": "2h"}),
        ColumnSpec("month", "month", {"abbreviation": "true"}),
    ]


class TestColumnSpec:
    """Test column spec parsing"""

    def test_from_dict(self):
        spec = ColumnSpec.from_dict({
            "name": "created",
            "method": "past",
            "params": {"years": 2},
            "date_format": "%Y-%m-%d",
        })

        assert spec.name == "created"
        assert spec.params == {"years": 2}
        assert spec.date_format == "%Y-%m-%d"

    def test_from_dict_without_params(self):
        spec = ColumnSpec.from_dict({"name": "tz", "method": "timezone", "params": None})
        assert spec.params == {}

    def test_parsed_params_types(self):
        spec = ColumnSpec("x", "between", {"start": "2020-01-01", "end": date(2020, 2, 1)})
        assert spec.parsed_params() == {
            "start": datetime(2020, 1, 1),
            "end": datetime(2020, 2, 1),
        }

    def test_parses_times_and_flags(self):
        assert ColumnSpec("t", "soon_time", {"minutes": "15", "ref_time": "07:45"}).parsed_params() == {
            "minutes": 15.0,
            "ref_time": time(7, 45),
        }
        assert ColumnSpec("m", "month", {"use_context": "no"}).parsed_params() == {
            "use_context": False,
        }

    def test_parses_unpadded_hours(self):
        spec = ColumnSpec("shift", "between_times", {"start": "8:00", "end": "9:30:15"})
        assert spec.parsed_params() == {"start": time(8), "end": time(9, 30, 15)}

    def test_unquoted_yaml_time_raises(self):
        # yaml.safe_load("start: 8:00") gives 480
        spec = ColumnSpec("shift", "between_times", {"start": 480, "end": "09:00"})
        with pytest.raises(ValueError, match="quote times"):
            spec.parsed_params()

    def test_missing_required_param_raises(self):
        spec = ColumnSpec("window", "between", {"start": "2020-01-01"})
        with pytest.raises(ValueError, match=r"requires params \['end'\]"):
            spec.parsed_params()

    def test_parses_timedelta(self):
        spec = ColumnSpec("d", "timespan", {"max_span": "90min"})
        assert spec.parsed_params() == {"max_span": timedelta(minutes=90)}

    def test_none_params_are_dropped(self):
        spec = ColumnSpec("r", "recent", {"days": None})
        assert spec.parsed_params() == {}

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError, match="unknown method"):
            ColumnSpec("x", "yesterday").parsed_params()

    def test_unknown_param_raises(self):
        with pytest.raises(ValueError, match="unexpected params"):
            ColumnSpec("x", "past", {"months": 3}).parsed_params()


class TestTemporalGenerator:
    """Test DataFrame generation"""

    def test_generate_shape(self, generator, columns):
        data = generator.generate(columns, num_rows=30)

        assert len(data) == 30
        assert list(data.columns) == [c.name for c in columns]

    def test_column_types(self, generator, columns):
        data = generator.generate(columns, num_rows=20)

        assert pd.api.types.is_datetime64_any_dtype(data["event_time"])
        assert pd.api.types.is_timedelta64_dtype(data["duration"])
        assert all(isinstance(v, date) for v in data["event_date"])
        assert all(isinstance(v, time) for v in data["shift"])
        assert all(isinstance(v, str) for v in data["month"])

    def test_values_within_bounds(self, generator, columns):
        data = generator.generate(columns, num_rows=200)

        assert data["event_time"].min() >= pd.Timestamp("2023-01-01")
        assert data["event_time"].max() <= pd.Timestamp("2023-06-30T12:00:00")
        assert all(date(2023, 1, 1) <= v <= date(2023, 1, 31) for v in data["event_date"])
        assert all(time(8) <= v <= time(10, 30) for v in data["shift"])
        assert data["duration"].max() <= pd.Timedelta(hours=2)
        assert set(data["month"]) <= {
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
            "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        }

    def test_uses_config_columns_and_rows(self, config):
        config.columns = [
            {"name": "created_at", "method": "past"},
            {"name": "tz", "method": "timezone"},
        ]

        data = TemporalGenerator(config).generate()

        assert list(data.columns) == ["created_at", "tz"]
        assert len(data) == 50

    def test_column_date_format(self, generator):
        spec = ColumnSpec("day", "between", {"start": "2020-03-01", "end": "2020-03-01"}, "%d/%m/%Y")

        data = generator.generate([spec], num_rows=3)

        assert list(data["day"]) == ["01/03/2020"] * 3

    def test_global_date_format_skips_text_and_timespan(self, config):
        config.temporal.date_format = "%Y"
        generator = TemporalGenerator(config)
        columns = [
            ColumnSpec("when", "past_date", {"ref_date": "2020-01-01", "years": 0}),
            ColumnSpec("span", "timespan", {"max_span": "1h"}),
            ColumnSpec("weekday", "weekday"),
        ]

        data = generator.generate(columns, num_rows=5)

        assert list(data["when"]) == ["2020"] * 5
        assert pd.api.types.is_timedelta64_dtype(data["span"])
        assert all(isinstance(v, str) and not v.isdigit() for v in data["weekday"])

    def test_same_seed_and_clock_reproduce(self, config):
        config.columns = [
            {"name": "created_at", "method": "past"},
            {"name": "updated_at", "method": "recent"},
            {"name": "expires_at", "method": "future"},
        ]

        with frozen_clock(datetime(2022, 6, 1, 12)):
            first = TemporalGenerator(config).generate()
            second = TemporalGenerator(config).generate()

        pd.testing.assert_frame_equal(first, second)

    def test_injected_date_generator(self, config):
        dates = DateGenerator(config, random=FixedRandom(0.5))
        generator = TemporalGenerator(config, dates=dates)
        spec = ColumnSpec("t", "between_times", {"start": "08:00", "end": "10:00"})

        data = generator.generate([spec], num_rows=2)

        assert list(data["t"]) == [time(9), time(9)]

    def test_bad_column_raises(self, generator):
        with pytest.raises(ValueError):
            generator.generate([ColumnSpec("x", "tomorrow")], num_rows=1)


class TestValidation:
    """Test validation of generated frames"""

    def test_generated_data_is_valid(self, generator, columns):
        data = generator.generate(columns, num_rows=100)

        results = generator.validate(data, columns)

        assert results["valid"]
        assert results["errors"] == []

    def test_missing_column(self, generator, columns):
        data = generator.generate(columns, num_rows=10).drop(columns=["event_time"])

        results = generator.validate(data, columns)

        assert not results["valid"]
        assert "event_time: Missing column" in results["errors"]

    def test_out_of_bounds_value(self, generator, columns):
        data = generator.generate(columns, num_rows=10)
        data.loc[0, "event_time"] = pd.Timestamp("2030-01-01")

        results = generator.validate(data, columns)

        assert not results["valid"]
        assert any("after" in e for e in results["errors"])

    def test_missing_values(self, generator, columns):
        data = generator.generate(columns, num_rows=10)
        data.loc[3, "event_time"] = pd.NaT

        results = generator.validate(data, columns)

        assert not results["valid"]
        assert "event_time: Contains missing values" in results["errors"]

    def test_past_bounded_by_reference(self, generator):
        spec = ColumnSpec("p", "past", {"years": 1, "ref_date": "2020-01-01"})
        data = generator.generate([spec], num_rows=10)
        data.loc[0, "p"] = pd.Timestamp("2021-01-01")

        results = generator.validate(data, [spec])

        assert not results["valid"]

    def test_formatted_column_only_warns(self, generator):
        spec = ColumnSpec("d", "past", {"ref_date": "2020-01-01"}, "%Y-%m-%d")
        data = generator.generate([spec], num_rows=5)

        results = generator.validate(data, [spec])

        assert results["valid"]
        assert results["warnings"] == ["d: Formatted column, bounds not checked"]
