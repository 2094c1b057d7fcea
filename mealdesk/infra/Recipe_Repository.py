import logging
from typing import List

from mealdesk.domain.Ingredient import RecipeIngredient
from mealdesk.domain.Recipe import Recipe
from mealdesk.infra.Resource_Repository import ResourceRepository

logger = logging.getLogger(__name__)


class RecipeRepository(ResourceRepository):
    resource = "recipes"
    entity = Recipe

    def update(self, id: int, data: dict):
        updated = super().update(id, data)
        # Scheduled meals carry the recipe name and cooking time
        self._invalidate("mealplans")
        return updated

    def delete(self, id: int) -> None:
        super().delete(id)
        self._invalidate("mealplans")

    # --- ingredients sub-resource ---
    def get_ingredients(self, recipe_id: int) -> List[RecipeIngredient]:
        return self._query(
            (self.resource, recipe_id, "ingredients"),
            lambda: [RecipeIngredient.from_dict(i)
                     for i in (self.client.get(f"{self.path}/{recipe_id}/ingredients") or [])],
        )

    def add_ingredient(self, recipe_id: int, ingredient_id: int, quantity: float):
        data = self.client.post(
            f"{self.path}/{recipe_id}/ingredients",
            {"ingredientId": ingredient_id, "quantity": quantity},
        )
        self._invalidate(self.resource, recipe_id, "ingredients")
        logger.info("Recipe #%s: added ingredient #%s x %s", recipe_id, ingredient_id, quantity)
        return RecipeIngredient.from_dict(data) if data is not None else None

    def delete_ingredient(self, recipe_id: int, ingredient_id: int) -> None:
        self.client.delete(f"{self.path}/{recipe_id}/ingredients/{ingredient_id}")
        self._invalidate(self.resource, recipe_id, "ingredients")
        logger.info("Recipe #%s: removed ingredient #%s", recipe_id, ingredient_id)
