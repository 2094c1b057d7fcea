"""Weekly meal-plan grid: day index conversion and (day, meal type) grouping.

Two week layouts are in play:
  * UI layout   - Monday first: 0 = Monday ... 6 = Sunday (grid rows, PDF rows)
  * API layout  - Sunday first: 0 = Sunday ... 6 = Saturday (ScheduledMeal.day_of_week)

Records always carry the API index; convert only at the presentation edge.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Sequence

from mealdesk.domain.MealPlan import MealType, ScheduledMeal
from mealdesk.utilities.constants import DAYS_OF_WEEK

DAYS_IN_WEEK = 7


def _check_day(index) -> int:
    # bool is an int subclass; True must not pass as Monday
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"Day index must be an integer, got {index!r}")
    if not 0 <= index < DAYS_IN_WEEK:
        raise ValueError(f"Day index out of range 0..6: {index}")
    return index


def ui_to_api(ui_index: int) -> int:
    """Monday-first index -> Sunday-first index (Sunday 6 -> 0, Monday 0 -> 1)."""
    return (_check_day(ui_index) + 1) % DAYS_IN_WEEK


def api_to_ui(api_index: int) -> int:
    """Sunday-first index -> Monday-first index (Sunday 0 -> 6, Monday 1 -> 0)."""
    return (_check_day(api_index) + DAYS_IN_WEEK - 1) % DAYS_IN_WEEK


def meals_for_slot(meals: Iterable[ScheduledMeal], api_day: int, meal_type) -> List[ScheduledMeal]:
    """Scheduled meals of one grid cell, in input order."""
    meal_type = MealType.parse(meal_type)
    return [m for m in meals if m.day_of_week == api_day and m.meal_type == meal_type]


class WeekDay(NamedTuple):
    ui_index: int
    api_index: int
    label: str
    slots: Dict[MealType, List[ScheduledMeal]]

    @property
    def is_empty(self) -> bool:
        return not any(self.slots.values())


def build_week_grid(meals: Sequence[ScheduledMeal]) -> List[WeekDay]:
    """Seven Monday-first rows, each with one list per meal type."""
    meals = list(meals)
    grid = []
    for ui_index, label in enumerate(DAYS_OF_WEEK):
        api_index = ui_to_api(ui_index)
        slots = {mt: meals_for_slot(meals, api_index, mt) for mt in MealType}
        grid.append(WeekDay(ui_index, api_index, label, slots))
    return grid


def grid_to_dict(grid: Sequence[WeekDay]) -> List[dict]:
    """JSON-friendly form of the grid for the web layer."""
    return [
        {
            "uiIndex": day.ui_index,
            "dayOfWeek": day.api_index,
            "label": day.label,
            "slots": {mt.value: [m.to_dict() for m in day.slots[mt]] for mt in MealType},
        }
        for day in grid
    ]

