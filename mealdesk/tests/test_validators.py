import unittest
from datetime import date

from mealdesk.domain.MealPlan import MealType
from mealdesk.utilities.validators import (
    CategoryInput, IngredientInput, LoginInput, MealPlanInput, RecipeIngredientInput,
    RecipeIngredientsInput, RecipeInput, RegisterInput, RescheduleInput, ScheduledMealInput,
    UserInput, validate_form,
)


class TestValidators(unittest.TestCase):

    def test_category_name_required(self):
        result = validate_form(CategoryInput, {"name": "  "})
        self.assertFalse(result.ok)
        self.assertEqual(result.errors, {"name": "Name is required"})

        ok = validate_form(CategoryInput, {"name": "Супи", "description": ""})
        self.assertTrue(ok.ok)
        self.assertEqual(ok.value.to_payload(), {"name": "Супи", "description": None})

    def test_ingredient_fields(self):
        result = validate_form(IngredientInput, {})
        self.assertEqual(set(result.errors), {"name", "unit"})

    def test_recipe_coerces_strings(self):
        result = validate_form(RecipeInput, {
            "name": "Soup", "instructions": "Boil", "cookingTimeMinutes": "20", "categoryId": "3",
        })
        self.assertTrue(result.ok)
        self.assertEqual(result.value.to_payload(), {
            "name": "Soup", "instructions": "Boil", "cookingTimeMinutes": 20, "categoryId": 3,
        })

    def test_recipe_rules(self):
        result = validate_form(RecipeInput, {"name": "Soup", "instructions": "Boil", "cookingTimeMinutes": 0})
        self.assertEqual(result.errors["cookingTimeMinutes"], "Cooking time must be at least 1 minute")
        self.assertEqual(result.errors["categoryId"], "Category is required")

    def test_recipe_ingredient_quantity(self):
        result = validate_form(RecipeIngredientInput, {"ingredientId": 2, "quantity": 0})
        self.assertEqual(result.errors, {"quantity": "Quantity must be greater than 0"})

    def test_ingredient_list_errors_are_indexed(self):
        result = validate_form(RecipeIngredientsInput, {"ingredients": [
            {"ingredientId": 2, "quantity": 1},
            {"ingredientId": 0, "quantity": 1},
        ]})
        self.assertEqual(result.errors, {"ingredients.1.ingredientId": "Ingredient is required"})

    def test_meal_plan_dates(self):
        missing = validate_form(MealPlanInput, {"name": "Week 1"})
        self.assertEqual(missing.errors["startDate"], "Start date is required")
        self.assertEqual(missing.errors["endDate"], "End date is required")

        reversed_range = validate_form(MealPlanInput, {
            "name": "Week 1", "startDate": "2025-06-08", "endDate": "2025-06-02",
        })
        self.assertEqual(reversed_range.errors, {"__all__": "End date cannot be before start date"})

        ok = validate_form(MealPlanInput, {"name": "Week 1", "startDate": "2025-06-02", "endDate": "2025-06-08"})
        self.assertEqual(ok.value.start_date, date(2025, 6, 2))
        self.assertEqual(ok.value.to_payload()["endDate"], "2025-06-08")

    def test_scheduled_meal(self):
        ok = validate_form(ScheduledMealInput, {"recipeId": 5, "dayOfWeek": 2, "mealType": "Обяд"})
        self.assertEqual(ok.value.meal_type, MealType.LUNCH)
        self.assertEqual(ok.value.to_payload(), {"recipeId": 5, "dayOfWeek": 2, "mealType": "Обяд"})

        bad = validate_form(ScheduledMealInput, {"recipeId": 5, "dayOfWeek": 7, "mealType": "Brunch"})
        self.assertIn("dayOfWeek", bad.errors)
        self.assertEqual(bad.errors["mealType"], "Unknown meal type")

    def test_reschedule_needs_both_slots(self):
        result = validate_form(RescheduleInput, {"old": {"recipeId": 5, "dayOfWeek": 2, "mealType": "Обяд"}})
        self.assertIn("new", result.errors)

    def test_login_required_fields(self):
        result = validate_form(LoginInput, {"username": "ivan"})
        self.assertEqual(result.errors, {"password": "Password is required"})

    def test_register(self):
        result = validate_form(RegisterInput, {
            "username": "iv", "email": "not-an-email", "password": "123", "confirmPassword": "1234",
        })
        self.assertEqual(result.errors, {
            "username": "Username must be at least 3 characters",
            "email": "Invalid email address",
            "password": "Password must be at least 6 characters",
        })

        mismatch = validate_form(RegisterInput, {
            "username": "ivan", "email": "ivan@example.com", "password": "secret1", "confirmPassword": "secret2",
        })
        self.assertEqual(mismatch.errors, {"confirmPassword": "Passwords do not match"})

        ok = validate_form(RegisterInput, {
            "username": "ivan", "email": "ivan@example.com", "password": "secret1", "confirmPassword": "secret1",
        })
        self.assertEqual(ok.value.to_payload(), {"username": "ivan", "email": "ivan@example.com", "password": "secret1"})

    def test_user_edit_omits_blank_password(self):
        result = validate_form(UserInput, {"username": "ivan", "email": "ivan@example.com", "password": ""})
        self.assertEqual(result.value.to_payload(), {"username": "ivan", "email": "ivan@example.com"})

    def test_non_mapping_input(self):
        result = validate_form(LoginInput, None)
        self.assertEqual(set(result.errors), {"username", "password"})


if __name__ == '__main__':
    unittest.main()
