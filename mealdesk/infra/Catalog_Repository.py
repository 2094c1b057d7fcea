from mealdesk.domain.Category import Category
from mealdesk.domain.Ingredient import Ingredient
from mealdesk.infra.Resource_Repository import ResourceRepository


class CategoryRepository(ResourceRepository):
    resource = "categories"
    entity = Category


class IngredientRepository(ResourceRepository):
    resource = "ingredients"
    entity = Ingredient

    def delete(self, id: int) -> None:
        super().delete(id)
        # Recipe ingredient lists embed the ingredient name and unit
        self._invalidate("recipes")
