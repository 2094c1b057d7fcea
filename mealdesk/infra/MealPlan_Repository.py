import logging
from typing import List
from urllib.parse import quote

from mealdesk.domain.MealPlan import MealPlan, MealType, ScheduledMeal
from mealdesk.infra.Resource_Repository import ResourceRepository

logger = logging.getLogger(__name__)


class MealPlanRepository(ResourceRepository):
    resource = "mealplans"
    entity = MealPlan

    # --- scheduled recipes sub-resource ---
    def get_recipes(self, plan_id: int) -> List[ScheduledMeal]:
        return self._query(
            (self.resource, plan_id, "recipes"),
            lambda: self._scheduled(plan_id, self.client.get(f"{self.path}/{plan_id}/recipes")),
        )

    @staticmethod
    def _scheduled(plan_id: int, data) -> List[ScheduledMeal]:
        meals = []
        for record in data or []:
            try:
                meals.append(ScheduledMeal.from_dict(record))
            except ValueError as e:
                # An unknown meal type has no cell in the week; leave the record out
                logger.warning("Plan #%s: skipping scheduled meal %r: %s", plan_id, record, e)
        return meals

    def add_recipe(self, plan_id: int, recipe_id: int, day_of_week: int, meal_type) -> ScheduledMeal:
        """Schedule a recipe; day_of_week uses the backend convention (0 = Sunday)."""
        meal_type = MealType.parse(meal_type)
        data = self.client.post(
            f"{self.path}/{plan_id}/recipes",
            {"recipeId": recipe_id, "dayOfWeek": day_of_week, "mealType": meal_type.value},
        )
        self._invalidate(self.resource, plan_id, "recipes")
        logger.info("Plan #%s: scheduled recipe #%s on day %s / %s", plan_id, recipe_id, day_of_week, meal_type.value)
        if data is None:
            return ScheduledMeal(recipe_id, day_of_week, meal_type)
        return ScheduledMeal.from_dict(data)

    def delete_recipe(self, plan_id: int, recipe_id: int, day_of_week: int, meal_type) -> None:
        """Remove exactly the scheduled meal identified by (recipe, day, meal type)."""
        meal_type = MealType.parse(meal_type)
        self.client.delete(
            f"{self.path}/{plan_id}/recipes/{recipe_id}/{day_of_week}/{quote(meal_type.value, safe='')}"
        )
        self._invalidate(self.resource, plan_id, "recipes")
        logger.info("Plan #%s: removed recipe #%s from day %s / %s", plan_id, recipe_id, day_of_week, meal_type.value)
