"""
Dependencies shared by the routers.

DeskContext bundles what a request needs: the backend client, the query
cache, the repositories and the signed-in session. The app builds a single
context lazily; tests swap it with app.dependency_overrides[get_context].
"""
import logging
from functools import lru_cache
from typing import Any, Dict, Optional, Type

from fastapi import Depends, HTTPException

from mealdesk.domain.User import User
from mealdesk.infra.Api_Client import ApiClient
from mealdesk.infra.Catalog_Repository import CategoryRepository, IngredientRepository
from mealdesk.infra.MealPlan_Repository import MealPlanRepository
from mealdesk.infra.Query_Cache import QueryCache
from mealdesk.infra.Recipe_Repository import RecipeRepository
from mealdesk.infra.Session_Store import SessionStore
from mealdesk.infra.User_Repository import UserRepository
from mealdesk.utilities.validators import S, validate_form

logger = logging.getLogger(__name__)


class InvalidForm(Exception):
    """Form data failed validation; carries the {field: message} map."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Invalid form data")
        self.errors = errors


class DeskContext:
    def __init__(self, client: Optional[ApiClient] = None, cache: Optional[QueryCache] = None,
                 session_store: Optional[SessionStore] = None):
        self.client = client or ApiClient()
        self.cache = cache or QueryCache()
        self.session_store = session_store or SessionStore()
        self.session = self.session_store.load()

        self.categories = CategoryRepository(self.client, self.cache)
        self.ingredients = IngredientRepository(self.client, self.cache)
        self.recipes = RecipeRepository(self.client, self.cache)
        self.mealplans = MealPlanRepository(self.client, self.cache)
        self.users = UserRepository(self.client, self.cache)

    def sign_in(self, user: User) -> None:
        self.session.set_user(user)
        self.session_store.save(self.session)

    def sign_out(self) -> None:
        self.session.logout()
        # Cached reads belong to the previous user
        self.cache.clear()
        self.session_store.save(self.session)


@lru_cache
def get_context() -> DeskContext:
    """Process-wide context (one local user per desk instance)."""
    return DeskContext()


def backend_status(status_code: Optional[int]) -> int:
    """Client errors keep the backend's status; everything else is a bad gateway."""
    if status_code is not None and 400 <= status_code < 500:
        return status_code
    return 502


def current_user(ctx: DeskContext = Depends(get_context)) -> User:
    if not ctx.session.is_authenticated:
        raise HTTPException(status_code=401, detail="You must be signed in")
    return ctx.session.user


def require_valid(schema: Type[S], data: Any) -> S:
    result = validate_form(schema, data)
    if not result.ok:
        raise InvalidForm(result.errors)
    return result.value
