"""Categories and ingredients: plain CRUD over the backend collections."""
from fastapi import APIRouter, Body, Depends

from mealdesk.api.dependencies import DeskContext, current_user, get_context, require_valid
from mealdesk.events.event_helpers import notify_success
from mealdesk.utilities.validators import CategoryInput, IngredientInput

router = APIRouter(tags=["Catalog"], dependencies=[Depends(current_user)])


def _dump(entity):
    return entity.to_dict() if entity is not None else {}


# --- categories ---
@router.get("/categories")
def list_categories(ctx: DeskContext = Depends(get_context)):
    return [c.to_dict() for c in ctx.categories.get_all()]


@router.get("/categories/{category_id}")
def get_category(category_id: int, ctx: DeskContext = Depends(get_context)):
    return ctx.categories.get_by_id(category_id).to_dict()


@router.post("/categories")
def create_category(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    form = require_valid(CategoryInput, payload)
    created = ctx.categories.create(form.to_payload())
    notify_success("Category created")
    return _dump(created)


@router.put("/categories/{category_id}")
def update_category(category_id: int, payload: dict = Body(default_factory=dict),
                    ctx: DeskContext = Depends(get_context)):
    form = require_valid(CategoryInput, payload)
    updated = ctx.categories.update(category_id, form.to_payload())
    notify_success("Category updated")
    return _dump(updated)


@router.delete("/categories/{category_id}")
def delete_category(category_id: int, ctx: DeskContext = Depends(get_context)):
    ctx.categories.delete(category_id)
    notify_success("Category deleted")
    return {"status": "success"}


# --- ingredients ---
@router.get("/ingredients")
def list_ingredients(ctx: DeskContext = Depends(get_context)):
    return [i.to_dict() for i in ctx.ingredients.get_all()]


@router.get("/ingredients/{ingredient_id}")
def get_ingredient(ingredient_id: int, ctx: DeskContext = Depends(get_context)):
    return ctx.ingredients.get_by_id(ingredient_id).to_dict()


@router.post("/ingredients")
def create_ingredient(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    form = require_valid(IngredientInput, payload)
    created = ctx.ingredients.create(form.to_payload())
    notify_success("Ingredient created")
    return _dump(created)


@router.put("/ingredients/{ingredient_id}")
def update_ingredient(ingredient_id: int, payload: dict = Body(default_factory=dict),
                      ctx: DeskContext = Depends(get_context)):
    form = require_valid(IngredientInput, payload)
    updated = ctx.ingredients.update(ingredient_id, form.to_payload())
    notify_success("Ingredient updated")
    return _dump(updated)


@router.delete("/ingredients/{ingredient_id}")
def delete_ingredient(ingredient_id: int, ctx: DeskContext = Depends(get_context)):
    ctx.ingredients.delete(ingredient_id)
    notify_success("Ingredient deleted")
    return {"status": "success"}
