"""Meal plan domain entities: the plan itself, its meal slots and scheduled meals."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from mealdesk.utilities.constants import API_DATE_FORMAT


class MealType(str, Enum):
    """The four meal slots of a day. Values are the labels the backend stores."""
    BREAKFAST = "Закуска"
    LUNCH = "Обяд"
    DINNER = "Вечеря"
    SNACK = "Снакс"

    @classmethod
    def parse(cls, value) -> "MealType":
        """Accept a wire label ('Обяд') or a member name ('lunch', 'LUNCH')."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            v = value.strip()
            for member in cls:
                if v == member.value or v.upper() == member.name:
                    return member
        raise ValueError(f"Unknown meal type: {value!r}")


def _parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Backend may send a full timestamp ("2025-06-02T00:00:00"); keep the date part
    return datetime.strptime(str(value)[:10], API_DATE_FORMAT).date()


class MealPlan:
    def __init__(self, id: int = 0, user_id: int = 0, name: str = "",
                 start_date: Optional[date] = None, end_date: Optional[date] = None):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.start_date = start_date
        self.end_date = end_date

    def __str__(self) -> str:
        return f"{self.name} ({self.start_date} - {self.end_date})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, MealPlan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return MealPlan(
            id=int(d.get("id", 0) or 0),
            user_id=int(d.get("userId", 0) or 0),
            name=d.get("name", "") or "",
            start_date=_parse_date(d.get("startDate")),
            end_date=_parse_date(d.get("endDate")),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "startDate": self.start_date.strftime(API_DATE_FORMAT) if self.start_date else "",
            "endDate": self.end_date.strftime(API_DATE_FORMAT) if self.end_date else "",
        }


class ScheduledMeal:
    """A recipe placed on a (day, meal type) slot of a plan.

    day_of_week follows the backend convention (0 = Sunday). Two records are
    the same scheduled meal when (recipe_id, day_of_week, meal_type) match.
    """

    def __init__(self, recipe_id: int = 0, day_of_week: int = 0, meal_type: MealType = MealType.BREAKFAST,
                 recipe_name: str = "", cooking_time_minutes: int = 0):
        self.recipe_id = recipe_id
        self.day_of_week = day_of_week
        self.meal_type = MealType.parse(meal_type)
        self.recipe_name = recipe_name
        self.cooking_time_minutes = cooking_time_minutes

    @property
    def key(self) -> tuple[int, int, MealType]:
        return (self.recipe_id, self.day_of_week, self.meal_type)

    def __str__(self) -> str:
        return f"{self.recipe_name} ({self.cooking_time_minutes} min) - day {self.day_of_week} / {self.meal_type.value}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, ScheduledMeal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.key)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ScheduledMeal(
            recipe_id=int(d.get("recipeId", 0) or 0),
            day_of_week=int(d.get("dayOfWeek", 0) or 0),
            meal_type=d.get("mealType", ""),
            recipe_name=d.get("recipeName", "") or "",
            cooking_time_minutes=int(d.get("cookingTimeMinutes", 0) or 0),
        )

    def to_dict(self):
        return {
            "recipeId": self.recipe_id,
            "dayOfWeek": self.day_of_week,
            "mealType": self.meal_type.value,
            "recipeName": self.recipe_name,
            "cookingTimeMinutes": self.cooking_time_minutes,
        }

    def to_request(self):
        """Body for the add-recipe-to-plan request."""
        return {"recipeId": self.recipe_id, "dayOfWeek": self.day_of_week, "mealType": self.meal_type.value}
