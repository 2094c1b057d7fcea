import unittest

from mealdesk.domain.MealPlan import MealType, ScheduledMeal
from mealdesk.logic.planning.week_grid import (
    api_to_ui, build_week_grid, grid_to_dict, meals_for_slot, ui_to_api,
)
from mealdesk.utilities.constants import DAYS_OF_WEEK


class TestDayIndexMapper(unittest.TestCase):

    def test_round_trip(self):
        for x in range(7):
            self.assertEqual(api_to_ui(ui_to_api(x)), x)
            self.assertEqual(ui_to_api(api_to_ui(x)), x)

    def test_fixed_points(self):
        self.assertEqual(ui_to_api(0), 1)  # Monday
        self.assertEqual(ui_to_api(6), 0)  # Sunday
        self.assertEqual(api_to_ui(0), 6)
        self.assertEqual(api_to_ui(1), 0)

    def test_out_of_range_is_rejected(self):
        for bad in (-1, 7, 100):
            with self.assertRaises(ValueError):
                ui_to_api(bad)
            with self.assertRaises(ValueError):
                api_to_ui(bad)

    def test_non_integers_are_rejected(self):
        for bad in (None, "1", 1.0, True):
            with self.assertRaises(ValueError):
                ui_to_api(bad)


class TestWeekGrid(unittest.TestCase):

    def test_empty_plan_gives_28_empty_cells(self):
        grid = build_week_grid([])
        self.assertEqual(len(grid), 7)
        cells = [day.slots[mt] for day in grid for mt in MealType]
        self.assertEqual(len(cells), 28)
        self.assertTrue(all(c == [] for c in cells))
        self.assertTrue(all(day.is_empty for day in grid))

    def test_rows_are_monday_first(self):
        grid = build_week_grid([])
        self.assertEqual([d.label for d in grid], list(DAYS_OF_WEEK))
        self.assertEqual(grid[0].api_index, 1)
        self.assertEqual(grid[6].api_index, 0)

    def test_grouping_is_stable(self):
        a = ScheduledMeal(1, 3, MealType.DINNER, "A", 10)
        b = ScheduledMeal(2, 3, MealType.DINNER, "B", 15)
        self.assertEqual(meals_for_slot([a, b], 3, MealType.DINNER), [a, b])
        wednesday = build_week_grid([a, b])[2]
        self.assertEqual(wednesday.slots[MealType.DINNER], [a, b])

    def test_soup_lands_in_tuesday_lunch_only(self):
        soup = ScheduledMeal.from_dict({
            "recipeId": 5, "dayOfWeek": 2, "mealType": "Обяд",
            "recipeName": "Soup", "cookingTimeMinutes": 20,
        })
        grid = build_week_grid([soup])
        hits = [(day.label, mt) for day in grid for mt in MealType if day.slots[mt]]
        self.assertEqual(hits, [(DAYS_OF_WEEK[1], MealType.LUNCH)])
        self.assertEqual(grid[1].slots[MealType.LUNCH][0].recipe_name, "Soup")

    def test_meals_for_slot_accepts_wire_labels(self):
        soup = ScheduledMeal(5, 2, "Обяд", "Soup", 20)
        self.assertEqual(meals_for_slot([soup], 2, "Обяд"), [soup])
        self.assertEqual(meals_for_slot([soup], 2, "Вечеря"), [])
        with self.assertRaises(ValueError):
            meals_for_slot([soup], 2, "Brunch")

    def test_grid_to_dict(self):
        soup = ScheduledMeal(5, 2, MealType.LUNCH, "Soup", 20)
        days = grid_to_dict(build_week_grid([soup]))
        self.assertEqual(days[1]["dayOfWeek"], 2)
        self.assertEqual(days[1]["uiIndex"], 1)
        self.assertEqual(days[1]["slots"]["Обяд"][0]["recipeName"], "Soup")
        self.assertEqual(set(days[0]["slots"]), {mt.value for mt in MealType})


if __name__ == '__main__':
    unittest.main()
