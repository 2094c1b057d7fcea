"""Ingredient domain entities: catalogue ingredient and its use inside a recipe."""


class Ingredient:
    def __init__(self, id: int = 0, name: str = "", unit: str = ""):
        self.id = id
        self.name = name
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.id, self.name, self.unit) == (other.id, other.name, other.unit)

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from an API payload. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            id=int(d.get("id", 0) or 0),
            name=d.get("name", "") or "",
            unit=d.get("unit", "") or "",
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "unit": self.unit}


class RecipeIngredient:
    """An ingredient attached to a recipe with a quantity.

    The backend keys the association by (recipe_id, ingredient_id); a recipe
    holds each ingredient at most once.
    """

    def __init__(self, recipe_id: int = 0, ingredient_id: int = 0, quantity: float = 0,
                 ingredient_name: str = "", unit: str = ""):
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        self.quantity = quantity
        self.ingredient_name = ingredient_name
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.ingredient_name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, RecipeIngredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return RecipeIngredient(
            recipe_id=int(d.get("recipeId", 0) or 0),
            ingredient_id=int(d.get("ingredientId", 0) or 0),
            quantity=float(d.get("quantity", 0) or 0),
            ingredient_name=d.get("ingredientName", "") or "",
            unit=d.get("unit", "") or "",
        )

    def to_dict(self):
        return {
            "recipeId": self.recipe_id,
            "ingredientId": self.ingredient_id,
            "quantity": self.quantity,
            "ingredientName": self.ingredient_name,
            "unit": self.unit,
        }
