from fastapi import APIRouter, Body, Depends

from mealdesk.api.dependencies import DeskContext, current_user, get_context, require_valid
from mealdesk.events.event_helpers import notify_success
from mealdesk.utilities.validators import UserInput

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(current_user)])


@router.get("")
def list_users(ctx: DeskContext = Depends(get_context)):
    return [u.to_dict() for u in ctx.users.get_all()]


@router.get("/{user_id}")
def get_user(user_id: int, ctx: DeskContext = Depends(get_context)):
    return ctx.users.get_by_id(user_id).to_dict()


@router.post("")
def create_user(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    form = require_valid(UserInput, payload)
    created = ctx.users.create(form.to_payload())
    notify_success("User created")
    return created.to_dict() if created else {}


@router.put("/{user_id}")
def update_user(user_id: int, payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    form = require_valid(UserInput, payload)
    updated = ctx.users.update(user_id, form.to_payload())
    # Keep the session in step when the signed-in user edits themself
    if updated is not None and ctx.session.user and ctx.session.user.id == user_id:
        ctx.sign_in(updated)
    notify_success("User updated")
    return updated.to_dict() if updated else {}


@router.delete("/{user_id}")
def delete_user(user_id: int, ctx: DeskContext = Depends(get_context)):
    ctx.users.delete(user_id)
    if ctx.session.user and ctx.session.user.id == user_id:
        ctx.sign_out()
    notify_success("User deleted")
    return {"status": "success"}
