"""Daily summaries and multi-day rollups of logged meals."""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
from zoneinfo import ZoneInfo

from macro_mate.domain.meals import MealRecord
from macro_mate.domain.stats import DailySummary, DayTotals, MacroTotals

# Float noise below this many places is dropped before display rounding.
_NOISE_PLACES = 6


class StatsRepository(Protocol):
    """Read interface for meal records."""

    def list_for_day(self, user_id: str, day: date) -> list[MealRecord]:
        """Return the user's meals logged on a date."""

    def list_between(self, user_id: str, start: date, end: date) -> list[MealRecord]:
        """Return the user's meals with ``start <= date < end``."""


def summarize_day(day: date, records: Iterable[MealRecord]) -> DailySummary:
    """Sum every record and list meals by time of day."""
    meals = sorted(records, key=lambda record: record.meal_time)
    totals = MacroTotals()
    for record in meals:
        totals = totals.add(record)
    return DailySummary(date=day, totals=totals, meals=meals)


def summarize_period(records: Iterable[MealRecord]) -> list[DayTotals]:
    """Return per-day totals, most recent first.

    Records are bucketed by their stored ``date`` rather than the meal
    timestamp. Days without records are left out.
    """
    buckets: dict[date, MacroTotals] = {}
    for record in records:
        buckets[record.date] = buckets.get(record.date, MacroTotals()).add(record)
    return [
        DayTotals(date=day, totals=buckets[day])
        for day in sorted(buckets, reverse=True)
    ]


def past_days_window(today: date, days: int) -> tuple[date, date]:
    """Return the half-open window ``[today - days, today)``.

    Today is excluded; it is covered by the daily summary.
    """
    if days < 1:
        raise ValueError("days must be at least 1")
    return today - timedelta(days=days), today


def round_macro(value: float, places: int = 1) -> float:
    """Round a macro value for display, halves going up."""
    if not math.isfinite(value):
        return value
    cleaned = Decimal(repr(round(value, _NOISE_PLACES)))
    quantum = Decimal(1).scaleb(-places)
    return float(cleaned.quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class StatsService:
    """Service for computing user stats in the bot's timezone."""

    repository: StatsRepository
    timezone: str = "UTC"
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC)

    def today(self) -> date:
        """Return the current date in the configured timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone)).date()

    def get_day(self, user_id: str, day: date | None = None) -> DailySummary:
        """Return the summary for a day, today by default."""
        resolved_day = day or self.today()
        records = self.repository.list_for_day(user_id, resolved_day)
        return summarize_day(resolved_day, records)

    def get_past_days(
        self, user_id: str, days: int, today: date | None = None
    ) -> list[DayTotals]:
        """Return rollups for the ``days`` days before today."""
        start, end = past_days_window(today or self.today(), days)
        records = self.repository.list_between(user_id, start, end)
        return summarize_period(records)
