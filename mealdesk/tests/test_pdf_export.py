import re
from datetime import date

import pytest

from mealdesk.domain.MealPlan import MealPlan, MealType, ScheduledMeal
from mealdesk.infra import pdf_utils
from mealdesk.infra.pdf_utils import (
    PdfExportError, export_meal_plan_pdf, format_display_date, page_offsets, pdf_filename, render_week_image,
)

PLAN = MealPlan(1, 3, "Week #1 (June)", date(2025, 6, 2), date(2025, 6, 8))
MEALS = [
    ScheduledMeal(5, 2, MealType.LUNCH, "Soup", 20),
    ScheduledMeal(7, 1, MealType.BREAKFAST, "Палачинки с мед и сладко от боровинки", 25),
]


def test_filename_replaces_each_unsafe_character():
    assert pdf_filename("Week #1 (June)", date(2025, 6, 1)) == "Week__1__June__2025-06-01.pdf"
    assert re.fullmatch(r"Week__1__June__\d{4}-\d{2}-\d{2}\.pdf", pdf_filename("Week #1 (June)"))


def test_filename_keeps_cyrillic():
    assert pdf_filename("Седмица 1", date(2025, 6, 1)) == "Седмица_1_2025-06-01.pdf"


def test_display_date():
    assert format_display_date(date(2025, 6, 2)) == "02 юни 2025"
    assert format_display_date(None) == ""


def test_page_offsets():
    assert page_offsets(100) == [0.0]
    assert page_offsets(300) == [0.0, -210.0]
    assert page_offsets(210) == [0.0, -210.0]
    assert len(page_offsets(650)) == 4


def test_render_week_image_is_page_wide():
    image = render_week_image(PLAN, MEALS, scale=1)
    try:
        # 297 mm at 96 dpi
        assert abs(image.width - 1123) <= 1
        assert image.height > 200
    finally:
        image.close()


def test_export_returns_pdf_bytes():
    filename, data = export_meal_plan_pdf(PLAN, MEALS, today=date(2025, 6, 1))
    assert filename == "Week__1__June__2025-06-01.pdf"
    assert data.startswith(b"%PDF")


def test_export_failure_is_wrapped(monkeypatch):
    def broken(plan, meals, scale=2):
        raise OSError("out of memory")

    monkeypatch.setattr(pdf_utils, "render_week_image", broken)
    with pytest.raises(PdfExportError) as excinfo:
        export_meal_plan_pdf(PLAN, MEALS)
    assert str(excinfo.value) == "Export failed"
    assert isinstance(excinfo.value.__cause__, OSError)


def _capture_raster(monkeypatch):
    drawn = []
    real = pdf_utils.render_week_image

    def render(plan, meals, scale=2):
        image = real(plan, meals, scale=1)
        drawn.append(image)
        return image

    monkeypatch.setattr(pdf_utils, "render_week_image", render)
    return drawn


def test_raster_is_released_after_export(monkeypatch):
    drawn = _capture_raster(monkeypatch)
    export_meal_plan_pdf(PLAN, MEALS)
    assert len(drawn) == 1
    with pytest.raises(ValueError):
        drawn[0].load()


def test_raster_is_released_when_pagination_fails(monkeypatch):
    drawn = _capture_raster(monkeypatch)

    def broken(image):
        raise RuntimeError("cannot write page")

    monkeypatch.setattr(pdf_utils, "_paginate", broken)
    with pytest.raises(PdfExportError):
        export_meal_plan_pdf(PLAN, MEALS)
    assert len(drawn) == 1
    with pytest.raises(ValueError):
        drawn[0].load()
