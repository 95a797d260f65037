"""
Date Generator Module

Generates random temporal values uniformly distributed within intervals:
- Explicit ranges (between)
- Relative to a reference instant (past, future, soon, recent)
- Random durations (timespan)
- Date-only and time-only projections
- Locale-driven month, weekday and time zone names

Every entry point that is not given a reference instant reads the clock
provider exactly once, so pinning the clock and seeding the random source
makes a whole session reproducible.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from fractions import Fraction
from typing import Callable, Optional, Tuple
import logging

from dateutil.relativedelta import relativedelta

from .. import clock as clock_provider
from ..config import Config, get_default_config
from ..locales import DEFAULT_LOCALE, LocaleData, LocaleDataError
from ..randomizer import Randomizer

logger = logging.getLogger(__name__)

# One tick is one microsecond, the resolution of datetime
TICKS_PER_SECOND = 1_000_000
TICKS_PER_DAY = 86_400 * TICKS_PER_SECOND

CATEGORY_KINDS: Tuple[str, ...] = ("month", "weekday")


def to_ticks(delta: timedelta) -> int:
    """Exact tick count of a timedelta"""
    return (delta.days * 86_400 + delta.seconds) * TICKS_PER_SECOND + delta.microseconds


def time_to_ticks(value: time) -> int:
    """Ticks elapsed since midnight"""
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    return seconds * TICKS_PER_SECOND + value.microsecond


def time_from_ticks(ticks: int) -> time:
    return (datetime.min + timedelta(microseconds=ticks)).time()


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def shift_years(value: datetime, years: int) -> datetime:
    """
    Shift by calendar years, clamping Feb 29 to Feb 28 when needed

    Raises:
        OverflowError: if the result falls outside the datetime range
    """
    try:
        return value + relativedelta(years=years)
    except (ValueError, OverflowError) as e:
        raise OverflowError(
            f"Shifting {value.isoformat()} by {years} years is out of range"
        ) from e


def shift_days(value: datetime, days: float) -> datetime:
    try:
        return value + timedelta(days=days)
    except OverflowError as e:
        raise OverflowError(
            f"Shifting {value.isoformat()} by {days} days is out of range"
        ) from e


def align(value: datetime, like: datetime) -> datetime:
    """
    Express ``value`` in the same flavor (naive or aware) as ``like``

    Naive values are read as local time.
    """
    if like.tzinfo is not None and value.tzinfo is None:
        return value.astimezone(like.tzinfo)
    if like.tzinfo is None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


@dataclass(frozen=True)
class LocaleCapabilities:
    """Which context-qualified name lists the locale itself defines"""
    month_wide_context: bool = False
    month_abbr_context: bool = False
    weekday_wide_context: bool = False
    weekday_abbr_context: bool = False

    @classmethod
    def probe(cls, locale_data: LocaleData) -> "LocaleCapabilities":
        # Fallback locales do not count: a context form borrowed from another
        # language would not match the plain names.
        return cls(**{
            f"{kind}_{base}_context": locale_data.has_key(
                f"date.{kind}.{base}_context", include_fallback=False
            )
            for kind in CATEGORY_KINDS
            for base in ("wide", "abbr")
        })

    def supports(self, kind: str, base: str) -> bool:
        return getattr(self, f"{kind}_{base}_context")


class DateGenerator:
    """
    Generates random dates, times and durations

    Features:
    - Uniform sampling inside closed intervals
    - Inverted and zero-length ranges handled transparently
    - Naive and timezone-aware datetimes (the tzinfo is preserved)
    - Injectable clock for deterministic sessions
    - Locale month/weekday names with grammatical-context variants
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        random: Optional[Randomizer] = None,
        locale_data: Optional[LocaleData] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize date generator

        Args:
            config: Configuration object (defaults spans, seed and locale)
            random: Random source (default: Randomizer seeded from config)
            locale_data: Locale data provider (default: config locale)
            clock: Clock used instead of the process-wide clock provider
        """
        config = config or get_default_config()

        self.settings = config.temporal
        self.random = random if random is not None else Randomizer(config.generation.seed)
        self.locale_data = (
            locale_data if locale_data is not None
            else self._load_locale(config.generation.locale)
        )
        self.clock = clock
        self.capabilities = LocaleCapabilities.probe(self.locale_data)

        logger.debug(f"Date generator ready: {self.locale_data!r}, {self.capabilities}")

    @staticmethod
    def _load_locale(locale: str) -> LocaleData:
        try:
            return LocaleData(locale)
        except LocaleDataError:
            logger.warning(f"Unknown locale '{locale}' in config, falling back to '{DEFAULT_LOCALE}'")
            return LocaleData(DEFAULT_LOCALE)

    def _now(self) -> datetime:
        if self.clock is not None:
            return self.clock()
        return clock_provider.now()

    # ------------------------------------------------------------------
    # Interval sampling
    # ------------------------------------------------------------------

    def random_timedelta(self, total_ticks: int) -> timedelta:
        """
        Uniformly random fraction of a span, truncated to whole ticks

        A negative span mirrors the positive case.

        Args:
            total_ticks: Span length in microseconds

        Returns:
            Offset within [0, total_ticks] as a timedelta
        """
        # Fraction keeps floor(u * n) exact for spans beyond 2**53 ticks
        fraction = Fraction(self.random.double())

        if total_ticks >= 0:
            ticks = math.floor(fraction * total_ticks)
        else:
            ticks = -math.floor(fraction * -total_ticks)

        return timedelta(microseconds=ticks)

    def between(self, start: datetime, end: datetime) -> datetime:
        """
        Get a random datetime between ``start`` and ``end``

        The bounds may be given in either order. The result carries the
        tzinfo of ``start`` even when ``end`` is the earlier bound.

        Args:
            start: First bound; its tzinfo is used for the result
            end: Second bound

        Returns:
            Datetime within [min(start, end), max(start, end)]
        """
        minimum, maximum = (start, end) if start <= end else (end, start)

        result = minimum + self.random_timedelta(to_ticks(maximum - minimum))

        if start.tzinfo is not None:
            result = result.astimezone(start.tzinfo)

        return result

    def past(self, years: Optional[int] = None, ref_date: Optional[datetime] = None) -> datetime:
        """
        Get a datetime in the past

        Args:
            years: Years to go back from ``ref_date`` (default: temporal.past_years)
            ref_date: Latest possible value (default: now)

        Returns:
            Datetime within [ref_date - years, ref_date]
        """
        years = self.settings.past_years if years is None else years
        max_date = ref_date if ref_date is not None else self._now()
        min_date = shift_years(max_date, -years)

        return max_date - self.random_timedelta(to_ticks(max_date - min_date))

    def future(self, years: Optional[int] = None, ref_date: Optional[datetime] = None) -> datetime:
        """
        Get a datetime in the future

        Args:
            years: Years to go forward from ``ref_date`` (default: temporal.future_years)
            ref_date: Earliest possible value (default: now)

        Returns:
            Datetime within [ref_date, ref_date + years]
        """
        years = self.settings.future_years if years is None else years
        min_date = ref_date if ref_date is not None else self._now()
        max_date = shift_years(min_date, years)

        return min_date + self.random_timedelta(to_ticks(max_date - min_date))

    def soon(self, days: Optional[float] = None, ref_date: Optional[datetime] = None) -> datetime:
        """
        Get a datetime that will happen soon

        Args:
            days: Days ahead of ``ref_date`` (default: temporal.soon_days)
            ref_date: Earliest possible value (default: now)
        """
        days = self.settings.soon_days if days is None else days
        start = ref_date if ref_date is not None else self._now()

        return self.between(start, shift_days(start, days))

    def recent(self, days: Optional[float] = None, ref_date: Optional[datetime] = None) -> datetime:
        """
        Get a datetime within the last few days

        ``days=0`` means "earlier today": the lower bound becomes the start
        of the current calendar day (read from the clock) instead of
        ``ref_date`` itself.

        Args:
            days: Days to go back from ``ref_date`` (default: temporal.recent_days)
            ref_date: Latest possible value (default: now)
        """
        days = self.settings.recent_days if days is None else days

        now = None
        if ref_date is None or days == 0:
            now = self._now()

        max_date = ref_date if ref_date is not None else now

        if days == 0:
            min_date = align(start_of_day(now), max_date)
        else:
            min_date = shift_days(max_date, -days)

        return max_date - self.random_timedelta(to_ticks(max_date - min_date))

    def timespan(self, max_span: Optional[timedelta] = None) -> timedelta:
        """
        Get a random duration

        Args:
            max_span: Longest possible duration (default: temporal.timespan_days)

        Returns:
            Timedelta within [0, max_span]
        """
        if max_span is None:
            max_span = timedelta(days=self.settings.timespan_days)

        return self.random_timedelta(to_ticks(max_span))

    # ------------------------------------------------------------------
    # Date-only and time-only projections
    # ------------------------------------------------------------------

    def _date_anchor(self, ref_date: Optional[date]) -> datetime:
        if ref_date is None:
            return self._now()
        return datetime.combine(ref_date, time())

    def past_date(self, years: Optional[int] = None, ref_date: Optional[date] = None) -> date:
        """Get a date in the past (see :meth:`past`)"""
        return self.past(years, self._date_anchor(ref_date)).date()

    def future_date(self, years: Optional[int] = None, ref_date: Optional[date] = None) -> date:
        """Get a date in the future (see :meth:`future`)"""
        return self.future(years, self._date_anchor(ref_date)).date()

    def soon_date(self, days: Optional[float] = None, ref_date: Optional[date] = None) -> date:
        """Get a date that will happen soon (see :meth:`soon`)"""
        return self.soon(days, self._date_anchor(ref_date)).date()

    def recent_date(self, days: Optional[float] = None, ref_date: Optional[date] = None) -> date:
        """Get a date within the last few days (see :meth:`recent`)"""
        return self.recent(days, self._date_anchor(ref_date)).date()

    def between_dates(self, start: date, end: date) -> date:
        """Get a random date between ``start`` and ``end``, in either order"""
        return self.between(
            datetime.combine(start, time()),
            datetime.combine(end, time())
        ).date()

    def between_times(self, start: time, end: time) -> time:
        """
        Get a random time of day between ``start`` and ``end``

        Sampling happens on time-of-day ticks, so the range never wraps past
        midnight; inverted bounds are swapped.
        """
        low, high = sorted((time_to_ticks(start), time_to_ticks(end)))
        offset = self.random_timedelta(high - low)

        return time_from_ticks(low + to_ticks(offset))

    def _time_anchor(self, ref_time: Optional[time]) -> datetime:
        # Today's date from the clock, combined with the reference time of day
        now = self._now()
        if ref_time is None:
            return now
        return datetime.combine(now.date(), ref_time, tzinfo=now.tzinfo)

    def soon_time(self, minutes: Optional[float] = None, ref_time: Optional[time] = None) -> time:
        """
        Get a time of day that will happen soon

        The result may wrap past midnight.

        Args:
            minutes: Minutes ahead of ``ref_time`` (default: temporal.soon_minutes)
            ref_time: Earliest possible time (default: clock's time of day)
        """
        minutes = self.settings.soon_minutes if minutes is None else minutes
        anchor = self._time_anchor(ref_time)

        return self.between(anchor, anchor + timedelta(minutes=minutes)).time()

    def recent_time(self, minutes: Optional[float] = None, ref_time: Optional[time] = None) -> time:
        """
        Get a time of day within the last few minutes

        Args:
            minutes: Minutes to go back (default: temporal.recent_minutes)
            ref_time: Latest possible time (default: clock's time of day)
        """
        minutes = self.settings.recent_minutes if minutes is None else minutes
        anchor = self._time_anchor(ref_time)
        span = to_ticks(timedelta(minutes=minutes))

        return (anchor - self.random_timedelta(span)).time()

    # ------------------------------------------------------------------
    # Locale names
    # ------------------------------------------------------------------

    def resolve_category(self, kind: str, abbreviation: bool = False, use_context: bool = False) -> str:
        """
        Resolve a name request to a locale key

        Args:
            kind: 'month' or 'weekday'
            abbreviation: Use abbreviated names
            use_context: Prefer the in-sentence grammatical form, when the
                locale defines one for this exact list

        Returns:
            Key such as 'month.wide' or 'weekday.abbr_context'
        """
        if kind not in CATEGORY_KINDS:
            raise ValueError(f"Unknown category '{kind}', expected one of {CATEGORY_KINDS}")

        base = "abbr" if abbreviation else "wide"

        if use_context and self.capabilities.supports(kind, base):
            base += "_context"

        key = f"{kind}.{base}"
        logger.debug(f"Resolved {kind} request to key: {key}")
        return key

    def _pick(self, key: str) -> str:
        return self.random.array_element(self.locale_data.get(key))

    def month(self, abbreviation: bool = False, use_context: bool = False) -> str:
        """Get a random month name"""
        return self._pick("date." + self.resolve_category("month", abbreviation, use_context))

    def weekday(self, abbreviation: bool = False, use_context: bool = False) -> str:
        """Get a random weekday name"""
        return self._pick("date." + self.resolve_category("weekday", abbreviation, use_context))

    def timezone(self) -> str:
        """Get a time zone name, e.g. America/Los_Angeles"""
        return self._pick("address.time_zone")
