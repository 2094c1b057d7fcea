from fastapi import (
    FastAPI,
    Request,
    Query,
    APIRouter,
    Depends,
)
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from typing import Optional
import logging

from mealdesk.api.dependencies import DeskContext, InvalidForm, backend_status, current_user, get_context
from mealdesk.api.routes import auth, catalog, mealplans, recipes, users
from mealdesk.events.event_helpers import notify_error
from mealdesk.events.web_observers import start as start_event_observers, get_events as get_web_events
from mealdesk.domain.MealPlan import MealType
from mealdesk.infra.Api_Client import ApiError
from mealdesk.infra.Session_Store import NotAuthenticatedError
from mealdesk.infra.pdf_utils import PdfExportError, format_display_date
from mealdesk.logic.planning.week_grid import build_week_grid
from mealdesk.utilities.config import TEMPLATES_DIR
from mealdesk.utilities.constants import DAY_COLUMN_LABEL, MINUTES_SUFFIX

# Logging
logger = logging.getLogger("mealdesk_app")

# Initialize FastAPI app
app = FastAPI(title="Meal Desk")
router = APIRouter()

# Include routers
app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(users.router)
app.include_router(recipes.router)
app.include_router(mealplans.router)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for toast notifications when the app starts."""
    start_event_observers()
    logger.info("Notification observer started")


@app.on_event("shutdown")
def _close_backend_client():
    """Release the backend connection pool if a context was ever built."""
    if get_context.cache_info().currsize:
        get_context().client.close()
        logger.info("Backend client closed")


# -------------------- Error handlers --------------------
@app.exception_handler(ApiError)
def _api_error(request: Request, exc: ApiError):
    logger.warning("%s %s: backend error %s", request.method, request.url.path, exc.message)
    notify_error(exc.message, status=exc.status_code)
    return JSONResponse(status_code=backend_status(exc.status_code), content={"error": exc.message})


@app.exception_handler(InvalidForm)
def _invalid_form(request: Request, exc: InvalidForm):
    return JSONResponse(status_code=422, content={"errors": exc.errors})


@app.exception_handler(PdfExportError)
def _pdf_error(request: Request, exc: PdfExportError):
    notify_error("The PDF file could not be created", title=str(exc))
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(NotAuthenticatedError)
def _not_authenticated(request: Request, exc: NotAuthenticatedError):
    return JSONResponse(status_code=401, content={"error": str(exc)})


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request, ctx: DeskContext = Depends(get_context)):
    plans = ctx.mealplans.get_all() if ctx.session.is_authenticated else []
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "session": ctx.session,
            "plans": plans,
            "format_date": format_display_date,
        },
    )


@app.get("/mealplans/{plan_id}/week", response_class=HTMLResponse)
def week_page(request: Request, plan_id: int, ctx: DeskContext = Depends(get_context),
              user=Depends(current_user)):
    plan = ctx.mealplans.get_by_id(plan_id)
    grid = build_week_grid(ctx.mealplans.get_recipes(plan_id))
    return templates.TemplateResponse(
        request,
        "week.html",
        {
            "session": ctx.session,
            "plan": plan,
            "grid": grid,
            "day_label": DAY_COLUMN_LABEL,
            "meal_types": list(MealType),
            "minutes": MINUTES_SUFFIX,
            "format_date": format_display_date,
        },
    )


# -------------------- API: Notifications --------------------
@router.get('/api/notifications')
def api_notifications(since: Optional[int] = Query(default=None)):
    """Toast notifications newer than the 'since' cursor."""
    return get_web_events(since)


app.include_router(router)
