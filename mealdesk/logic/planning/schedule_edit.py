"""Editing a scheduled meal.

A scheduled meal is identified by (recipe, day, meal type) and cannot be
updated in place; moving or swapping it means deleting the old record and
adding the new one. If the add fails after the delete went through, the old
record is gone and the caller is told so.
"""
import logging
from typing import NamedTuple, Optional

from mealdesk.domain.MealPlan import ScheduledMeal
from mealdesk.infra.Api_Client import ApiError

logger = logging.getLogger(__name__)


class RescheduleResult(NamedTuple):
    removed: bool
    added: Optional[ScheduledMeal]
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def partial(self) -> bool:
        return self.removed and self.added is None


def reschedule_meal(repo, plan_id: int, old: ScheduledMeal, new: ScheduledMeal) -> RescheduleResult:
    if old.key == new.key:
        return RescheduleResult(removed=False, added=old)
    try:
        repo.delete_recipe(plan_id, old.recipe_id, old.day_of_week, old.meal_type)
    except ApiError as e:
        return RescheduleResult(removed=False, added=None, error=e.message, status_code=e.status_code)
    try:
        added = repo.add_recipe(plan_id, new.recipe_id, new.day_of_week, new.meal_type)
    except ApiError as e:
        logger.warning("Plan #%s: removed %s but could not add %s: %s", plan_id, old.key, new.key, e.message)
        return RescheduleResult(removed=True, added=None, error=e.message, status_code=e.status_code)
    return RescheduleResult(removed=True, added=added)
