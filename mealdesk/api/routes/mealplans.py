"""Meal plan routes: plans, their scheduled recipes, the week grid and PDF export."""
import logging
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse

from mealdesk.api.dependencies import DeskContext, backend_status, current_user, get_context, require_valid
from mealdesk.domain.MealPlan import ScheduledMeal
from mealdesk.domain.User import User
from mealdesk.events.event_helpers import notify_error, notify_success, notify_warning
from mealdesk.infra.pdf_utils import export_meal_plan_pdf
from mealdesk.logic.planning.schedule_edit import reschedule_meal
from mealdesk.logic.planning.week_grid import build_week_grid, grid_to_dict
from mealdesk.utilities.validators import MealPlanInput, RescheduleInput, ScheduledMealInput

router = APIRouter(prefix="/mealplans", tags=["Meal plans"], dependencies=[Depends(current_user)])
logger = logging.getLogger(__name__)


def _plan_payload(form: MealPlanInput, user: User) -> dict:
    data = form.to_payload()
    data["userId"] = user.id
    return data


def _slot(form: ScheduledMealInput) -> ScheduledMeal:
    return ScheduledMeal(form.recipe_id, form.day_of_week, form.meal_type)


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name (RFC 5987)."""
    fallback = "".join(c if c.isascii() and c not in '"\\' else "_" for c in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get("")
def list_mealplans(ctx: DeskContext = Depends(get_context)):
    return [p.to_dict() for p in ctx.mealplans.get_all()]


@router.get("/{plan_id}")
def get_mealplan(plan_id: int, ctx: DeskContext = Depends(get_context)):
    return ctx.mealplans.get_by_id(plan_id).to_dict()


@router.post("")
def create_mealplan(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context),
                    user: User = Depends(current_user)):
    form = require_valid(MealPlanInput, payload)
    created = ctx.mealplans.create(_plan_payload(form, user))
    notify_success("Meal plan created")
    return created.to_dict() if created else {}


@router.put("/{plan_id}")
def update_mealplan(plan_id: int, payload: dict = Body(default_factory=dict),
                    ctx: DeskContext = Depends(get_context), user: User = Depends(current_user)):
    form = require_valid(MealPlanInput, payload)
    updated = ctx.mealplans.update(plan_id, _plan_payload(form, user))
    notify_success("Meal plan updated")
    return updated.to_dict() if updated else {}


@router.delete("/{plan_id}")
def delete_mealplan(plan_id: int, ctx: DeskContext = Depends(get_context)):
    ctx.mealplans.delete(plan_id)
    notify_success("Meal plan deleted")
    return {"status": "success"}


# -------------------- Scheduled recipes --------------------
@router.get("/{plan_id}/recipes")
def list_scheduled(plan_id: int, ctx: DeskContext = Depends(get_context)):
    return [m.to_dict() for m in ctx.mealplans.get_recipes(plan_id)]


@router.get("/{plan_id}/grid")
def week_grid(plan_id: int, ctx: DeskContext = Depends(get_context)):
    """Monday-first week with one list of meals per (day, meal type)."""
    plan = ctx.mealplans.get_by_id(plan_id)
    grid = build_week_grid(ctx.mealplans.get_recipes(plan_id))
    return {"plan": plan.to_dict(), "days": grid_to_dict(grid)}


@router.post("/{plan_id}/recipes")
def add_scheduled(plan_id: int, payload: dict = Body(default_factory=dict),
                  ctx: DeskContext = Depends(get_context)):
    form = require_valid(ScheduledMealInput, payload)
    added = ctx.mealplans.add_recipe(plan_id, form.recipe_id, form.day_of_week, form.meal_type)
    notify_success("Recipe added to the plan")
    return added.to_dict()


@router.delete("/{plan_id}/recipes/{recipe_id}/{day_of_week}/{meal_type}")
def delete_scheduled(plan_id: int, recipe_id: int, day_of_week: int, meal_type: str,
                     ctx: DeskContext = Depends(get_context)):
    form = require_valid(ScheduledMealInput, {"recipeId": recipe_id, "dayOfWeek": day_of_week, "mealType": meal_type})
    ctx.mealplans.delete_recipe(plan_id, form.recipe_id, form.day_of_week, form.meal_type)
    notify_success("Recipe removed from the plan")
    return {"status": "success"}


@router.put("/{plan_id}/recipes")
def reschedule(plan_id: int, payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    """Move or swap a scheduled meal (delete the old slot, add the new one)."""
    form = require_valid(RescheduleInput, payload)
    result = reschedule_meal(ctx.mealplans, plan_id, _slot(form.old), _slot(form.new))
    if result.ok:
        notify_success("Meal plan updated")
        return {"status": "success", "meal": result.added.to_dict()}
    if result.partial:
        notify_warning(f"The old entry was removed but the new one could not be added: {result.error}",
                       title="Partially saved")
        return {"status": "partial", "error": result.error}
    notify_error(result.error, status=result.status_code)
    return JSONResponse({"error": result.error}, status_code=backend_status(result.status_code))


@router.get("/{plan_id}/pdf")
def export_pdf(plan_id: int, ctx: DeskContext = Depends(get_context)):
    plan = ctx.mealplans.get_by_id(plan_id)
    filename, pdf_bytes = export_meal_plan_pdf(plan, ctx.mealplans.get_recipes(plan_id))
    notify_success("The PDF file is ready", title="Exported")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)},
    )
