"""
Form input validation schemas using Pydantic.

validate_form() runs a schema over raw form data and returns a FormResult:
either the validated model or a {field: message} map. Nothing invalid is
ever sent to the backend.
"""
import re
from datetime import date
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from mealdesk.domain.MealPlan import MealType

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FormSchema(BaseModel):
    """Base for form schemas: camelCase aliases in, camelCase payload out."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, validate_default=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def _required(v, message: str):
    if v is None or (isinstance(v, str) and not v.strip()):
        raise ValueError(message)
    return v


class CategoryInput(FormSchema):
    """Schema for category form validation."""
    name: str = ""
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required(v, 'Name is required')

    @field_validator('description')
    @classmethod
    def empty_description_is_none(cls, v):
        return v or None


class IngredientInput(FormSchema):
    """Schema for ingredient form validation."""
    name: str = ""
    unit: str = ""

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required(v, 'Name is required')

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        return _required(v, 'Unit is required')


class RecipeInput(FormSchema):
    """Schema for recipe form validation. The author is taken from the session."""
    name: str = ""
    instructions: str = ""
    cooking_time_minutes: int = Field(30, alias='cookingTimeMinutes')
    category_id: int = Field(0, alias='categoryId')

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required(v, 'Name is required')

    @field_validator('instructions')
    @classmethod
    def validate_instructions(cls, v):
        return _required(v, 'Instructions are required')

    @field_validator('cooking_time_minutes')
    @classmethod
    def validate_cooking_time(cls, v):
        if v < 1:
            raise ValueError('Cooking time must be at least 1 minute')
        return v

    @field_validator('category_id')
    @classmethod
    def validate_category(cls, v):
        if v < 1:
            raise ValueError('Category is required')
        return v


class RecipeIngredientInput(FormSchema):
    """Schema for adding an ingredient (with quantity) to a recipe."""
    ingredient_id: int = Field(0, alias='ingredientId')
    quantity: float = 0

    @field_validator('ingredient_id')
    @classmethod
    def validate_ingredient(cls, v):
        if v < 1:
            raise ValueError('Ingredient is required')
        return v

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v):
        if v <= 0:
            raise ValueError('Quantity must be greater than 0')
        return v


class RecipeIngredientsInput(FormSchema):
    """The whole edited ingredient list of a recipe."""
    ingredients: List[RecipeIngredientInput] = Field(default_factory=list)


class MealPlanInput(FormSchema):
    """Schema for meal plan form validation. The owner is taken from the session."""
    name: str = ""
    start_date: Optional[date] = Field(None, alias='startDate')
    end_date: Optional[date] = Field(None, alias='endDate')

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required(v, 'Name is required')

    @field_validator('start_date', mode='before')
    @classmethod
    def validate_start(cls, v):
        return _required(v, 'Start date is required')

    @field_validator('end_date', mode='before')
    @classmethod
    def validate_end(cls, v):
        return _required(v, 'End date is required')

    @model_validator(mode='after')
    def check_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError('End date cannot be before start date')
        return self


class ScheduledMealInput(FormSchema):
    """Schema for placing a recipe on a (day, meal type) slot; day uses the API convention."""
    recipe_id: int = Field(0, alias='recipeId')
    day_of_week: int = Field(0, alias='dayOfWeek', ge=0, le=6)
    meal_type: MealType = Field(None, alias='mealType')

    @field_validator('recipe_id')
    @classmethod
    def validate_recipe(cls, v):
        if v < 1:
            raise ValueError('Recipe is required')
        return v

    @field_validator('meal_type', mode='before')
    @classmethod
    def validate_meal_type(cls, v):
        _required(v, 'Meal type is required')
        try:
            return MealType.parse(v)
        except ValueError:
            raise ValueError('Unknown meal type')


class RescheduleInput(FormSchema):
    """Old and new slot of a scheduled meal being edited."""
    old: ScheduledMealInput
    new: ScheduledMealInput


class LoginInput(FormSchema):
    username: str = ""
    password: str = ""

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _required(v, 'Username is required')

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _required(v, 'Password is required')


def _check_email(v):
    if not v or not EMAIL_PATTERN.match(v):
        raise ValueError('Invalid email address')
    return v


class UserInput(FormSchema):
    """Schema for the user edit form; password is only sent when given."""
    username: str = ""
    email: str = ""
    password: Optional[str] = None

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        return _required(v, 'Username is required')

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)

    @field_validator('password')
    @classmethod
    def blank_password_is_none(cls, v):
        return v or None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class RegisterInput(FormSchema):
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = Field("", alias='confirmPassword')

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if len(v) < 3:
            raise ValueError('Username must be at least 3 characters')
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError('Password must be at least 6 characters')
        return v

    @field_validator('confirm_password')
    @classmethod
    def passwords_match(cls, v, info):
        if 'password' in info.data and v != info.data['password']:
            raise ValueError('Passwords do not match')
        return v

    def to_payload(self) -> Dict[str, Any]:
        return {"username": self.username, "email": self.email, "password": self.password}


# ---------------------------------------------------------------------------

S = TypeVar("S", bound=FormSchema)


class FormResult(Generic[S]):
    """Outcome of a form validation: value on success, field errors otherwise."""

    def __init__(self, value: Optional[S] = None, errors: Optional[Dict[str, str]] = None):
        self.value = value
        self.errors = errors or {}

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def __repr__(self) -> str:
        return f"FormResult(ok={self.ok}, errors={self.errors})"


def _message(err: dict) -> str:
    msg = err.get("msg", "Invalid value")
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def validate_form(schema: Type[S], data: Any) -> FormResult[S]:
    """Validate raw form data; errors are keyed by the form field name."""
    try:
        return FormResult(value=schema.model_validate(data or {}))
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            loc = err.get("loc") or ()
            field = ".".join(str(p) for p in loc) if loc else "__all__"
            # keep the first message per field
            errors.setdefault(field, _message(err))
        return FormResult(errors=errors)
