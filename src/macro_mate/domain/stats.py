"""Domain models for statistics."""

from dataclasses import dataclass, field
from datetime import date

from macro_mate.domain.meals import MealRecord


@dataclass(frozen=True)
class MacroTotals:
    """Summed macros, kept at full precision."""

    protein_g: float = 0.0
    carbs_g: float = 0.0
    fats_g: float = 0.0
    calories: float = 0.0

    def add(self, record: MealRecord) -> "MacroTotals":
        """Return new totals including the record's macros."""
        return MacroTotals(
            protein_g=self.protein_g + record.protein_g,
            carbs_g=self.carbs_g + record.carbs_g,
            fats_g=self.fats_g + record.fats_g,
            calories=self.calories + record.calories,
        )


@dataclass(frozen=True)
class DailySummary:
    """Totals and meals for a single day."""

    date: date
    totals: MacroTotals
    meals: list[MealRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.meals


@dataclass(frozen=True)
class DayTotals:
    """Totals for one day of a period rollup."""

    date: date
    totals: MacroTotals
