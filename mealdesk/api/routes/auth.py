import logging

from fastapi import APIRouter, Body, Depends

from mealdesk.api.dependencies import DeskContext, get_context, require_valid
from mealdesk.events.event_helpers import notify_success
from mealdesk.events import web_observers
from mealdesk.utilities.validators import LoginInput, RegisterInput

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post("/login")
def login(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    form = require_valid(LoginInput, payload)
    user = ctx.users.login(form.username, form.password)
    ctx.sign_in(user)
    notify_success("Welcome back!", title="Signed in")
    return user.to_dict()


@router.post("/register")
def register(payload: dict = Body(default_factory=dict), ctx: DeskContext = Depends(get_context)):
    form = require_valid(RegisterInput, payload)
    user = ctx.users.create(form.to_payload())
    if user is None:
        # Backend answered 2xx without a body; sign in to fetch the account
        user = ctx.users.login(form.username, form.password)
    ctx.sign_in(user)
    notify_success("Your account has been created", title="Registered")
    return user.to_dict()


@router.post("/logout")
def logout(ctx: DeskContext = Depends(get_context)):
    username = ctx.session.user.username if ctx.session.user else None
    ctx.sign_out()
    web_observers.reset()
    logger.info("User %s signed out", username)
    return {"status": "success"}


@router.get("/me")
def me(ctx: DeskContext = Depends(get_context)):
    return ctx.session.to_dict()
