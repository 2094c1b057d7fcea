"""Recipe routes, including the recipe's ingredient list and its reconciliation."""
import logging

from fastapi import APIRouter, Body, Depends

from mealdesk.api.dependencies import DeskContext, current_user, get_context, require_valid
from mealdesk.domain.User import User
from mealdesk.events.event_helpers import notify_success, notify_warning
from mealdesk.logic.recipes.ingredient_sync import TempIngredient, available_ingredients, sync_recipe_ingredients
from mealdesk.utilities.validators import RecipeIngredientInput, RecipeIngredientsInput, RecipeInput

router = APIRouter(prefix="/recipes", tags=["Recipes"], dependencies=[Depends(current_user)])
logger = logging.getLogger(__name__)


@router.get("")
def list_recipes(ctx: DeskContext = Depends(get_context)):
    return [r.to_dict() for r in ctx.recipes.get_all()]


@router.get("/{recipe_id}")
def get_recipe(recipe_id: int, ctx: DeskContext = Depends(get_context)):
    return ctx.recipes.get_by_id(recipe_id).to_dict()


@router.post("")
def create_recipe(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context),
                  user: User = Depends(current_user)):
    form = require_valid(RecipeInput, payload)
    data = form.to_payload()
    data["authorUserId"] = user.id
    created = ctx.recipes.create(data)
    notify_success("Recipe created")
    return created.to_dict() if created else {}


@router.put("/{recipe_id}")
def update_recipe(recipe_id: int, payload: dict = Body(default_factory=dict),
                  ctx: DeskContext = Depends(get_context), user: User = Depends(current_user)):
    form = require_valid(RecipeInput, payload)
    data = form.to_payload()
    data["authorUserId"] = user.id
    updated = ctx.recipes.update(recipe_id, data)
    notify_success("Recipe updated")
    return updated.to_dict() if updated else {}


@router.delete("/{recipe_id}")
def delete_recipe(recipe_id: int, ctx: DeskContext = Depends(get_context)):
    ctx.recipes.delete(recipe_id)
    notify_success("Recipe deleted")
    return {"status": "success"}


# -------------------- Ingredients --------------------
@router.get("/{recipe_id}/ingredients")
def list_recipe_ingredients(recipe_id: int, ctx: DeskContext = Depends(get_context)):
    return [ri.to_dict() for ri in ctx.recipes.get_ingredients(recipe_id)]


@router.get("/{recipe_id}/ingredients/available")
def list_available_ingredients(recipe_id: int, ctx: DeskContext = Depends(get_context)):
    """Catalogue ingredients that can still be added to the recipe."""
    free = available_ingredients(ctx.ingredients.get_all(), ctx.recipes.get_ingredients(recipe_id))
    return [i.to_dict() for i in free]


@router.post("/{recipe_id}/ingredients")
def add_recipe_ingredient(recipe_id: int, payload: dict = Body(default_factory=dict),
                          ctx: DeskContext = Depends(get_context)):
    form = require_valid(RecipeIngredientInput, payload)
    added = ctx.recipes.add_ingredient(recipe_id, form.ingredient_id, form.quantity)
    notify_success("Ingredient added to recipe")
    return added.to_dict() if added else {}


@router.delete("/{recipe_id}/ingredients/{ingredient_id}")
def delete_recipe_ingredient(recipe_id: int, ingredient_id: int, ctx: DeskContext = Depends(get_context)):
    ctx.recipes.delete_ingredient(recipe_id, ingredient_id)
    notify_success("Ingredient removed from recipe")
    return {"status": "success"}


@router.put("/{recipe_id}/ingredients")
def save_recipe_ingredients(recipe_id: int, payload: dict = Body(default_factory=dict),
                            ctx: DeskContext = Depends(get_context)):
    """Replace the recipe's ingredient list with the edited one."""
    form = require_valid(RecipeIngredientsInput, payload)
    catalogue = {i.id: i for i in ctx.ingredients.get_all()}
    temp = []
    for item in form.ingredients:
        known = catalogue.get(item.ingredient_id)
        temp.append(TempIngredient(
            item.ingredient_id, item.quantity,
            known.name if known else "", known.unit if known else "",
        ))

    report = sync_recipe_ingredients(ctx.recipes, recipe_id, temp)
    if report.ok:
        notify_success(report.summary())
    else:
        notify_warning(report.summary(), title="Partially saved")
    return {
        "status": "success" if report.ok else "partial",
        "applied": report.applied,
        "failed": [{"step": step, "error": msg} for step, msg in report.failed],
    }
