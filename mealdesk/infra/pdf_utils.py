"""Weekly meal plan export to PDF.

The week is drawn off-screen as an image (Pillow) at a fixed physical width of
297 mm and 2x pixel density, then laid over as many landscape A4 pages
(reportlab) as its height needs. Each page shows the image shifted up by the
height already printed, so page N carries the N-th 210 mm band.
"""
import io
import logging
import re
from contextlib import contextmanager
from datetime import date
from functools import lru_cache
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from mealdesk.domain.MealPlan import MealPlan, MealType, ScheduledMeal
from mealdesk.logic.planning.week_grid import build_week_grid
from mealdesk.utilities.config import PDF_FONT, PDF_FONT_BOLD
from mealdesk.utilities.constants import (
    DAY_COLUMN_LABEL, EMPTY_SLOT, MINUTES_SUFFIX, MONTHS_SHORT,
    PDF_PAGE_HEIGHT_MM, PDF_PAGE_WIDTH_MM, PDF_RASTER_SCALE,
)

logger = logging.getLogger(__name__)

# CSS pixels per millimetre (96 dpi)
PX_PER_MM = 96 / 25.4

COLUMN_FRACTIONS = (0.15, 0.2125, 0.2125, 0.2125, 0.2125)

WHITE = "#ffffff"
TEXT = "#000000"
MUTED = "#666666"
PLACEHOLDER = "#999999"
BORDER = "#dddddd"
HEADER_BG = "#4285F4"
STRIPE_BG = "#f5f5f5"

FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9А-я]")


class PdfExportError(Exception):
    """The week could not be rendered or written as PDF."""


def pdf_filename(plan_name: str, today: Optional[date] = None) -> str:
    """'Week #1 (June)' -> 'Week__1__June__2025-06-01.pdf' (one '_' per unsafe char)."""
    today = today or date.today()
    return f"{FILENAME_UNSAFE.sub('_', plan_name)}_{today.strftime('%Y-%m-%d')}.pdf"


def format_display_date(d: Optional[date]) -> str:
    if d is None:
        return ""
    return f"{d.day:02d} {MONTHS_SHORT[d.month - 1]} {d.year}"


def page_offsets(image_height_mm: float, page_height_mm: float = PDF_PAGE_HEIGHT_MM) -> List[float]:
    """Vertical image offsets (mm, from the page top) for each page.

    The first page always exists; another follows while the remaining height
    is >= 0, so an image exactly one page tall yields two pages.
    """
    offsets = [0.0]
    height_left = image_height_mm - page_height_mm
    while height_left >= 0:
        offsets.append(height_left - image_height_mm)
        height_left -= page_height_mm
    return offsets


# --------------------------------------------------------------------------
# Off-screen rendering
# --------------------------------------------------------------------------

@lru_cache(maxsize=32)
def _load_font(path: str, size: int):
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.warning("Font %s not found; falling back to Pillow's default font", path)
        return ImageFont.load_default(size=size)


class _Line(NamedTuple):
    text: str
    font: object
    fill: str
    center: bool = False
    gap: int = 0  # extra space below the line


def _line_height(font) -> int:
    bottom = font.getbbox("ÁgЙ")[3]
    return int(bottom * 1.25) + 1


def _block_height(lines: Sequence[_Line]) -> int:
    return sum(_line_height(ln.font) + ln.gap for ln in lines)


def _wrap(text: str, font, max_width: int) -> List[str]:
    words = text.split()
    if not words:
        return [text]
    out, current = [], words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if font.getlength(candidate) <= max_width:
            current = candidate
        else:
            out.append(current)
            current = word
    out.append(current)
    return out


class _Renderer:
    def __init__(self, scale: int = PDF_RASTER_SCALE,
                 font_path: str = PDF_FONT, bold_font_path: str = PDF_FONT_BOLD):
        self.scale = scale
        self.font_path = font_path
        self.bold_font_path = bold_font_path

    def px(self, css_px: float) -> int:
        return int(round(css_px * self.scale))

    def regular(self, css_px: int):
        return _load_font(self.font_path, self.px(css_px))

    def bold(self, css_px: int):
        return _load_font(self.bold_font_path, self.px(css_px))

    def slot_lines(self, meals: List[ScheduledMeal], width: int) -> List[_Line]:
        if not meals:
            return [_Line(EMPTY_SLOT, self.regular(12), PLACEHOLDER)]
        lines: List[_Line] = []
        name_font, time_font = self.bold(12), self.regular(11)
        for m in meals:
            for part in _wrap(m.recipe_name, name_font, width):
                lines.append(_Line(part, name_font, TEXT))
            lines.append(_Line(f"{m.cooking_time_minutes} {MINUTES_SUFFIX}", time_font, MUTED, gap=self.px(8)))
        return lines

    def render(self, plan: MealPlan, meals: Iterable[ScheduledMeal]) -> Image.Image:
        width = self.px(PDF_PAGE_WIDTH_MM * PX_PER_MM)
        pad = self.px(20 * PX_PER_MM)
        cell_pad = self.px(12)
        border = max(1, self.scale)
        inner = width - 2 * pad
        col_widths = [int(inner * f) for f in COLUMN_FRACTIONS]
        col_widths[-1] = inner - sum(col_widths[:-1])

        title = [_Line(t, self.bold(24), TEXT, center=True) for t in _wrap(plan.name, self.bold(24), inner)]
        subtitle = [_Line(f"{format_display_date(plan.start_date)} - {format_display_date(plan.end_date)}",
                          self.regular(14), MUTED, center=True)]

        header = [[_Line(label, self.bold(14), WHITE, center=True)]
                  for label in [DAY_COLUMN_LABEL] + [mt.value for mt in MealType]]
        rows = []
        for day in build_week_grid(list(meals)):
            cells = [[_Line(day.label, self.bold(12), TEXT, center=True)]]
            for mt, col_w in zip(MealType, col_widths[1:]):
                cells.append(self.slot_lines(day.slots[mt], col_w - 2 * cell_pad))
            rows.append(cells)

        def row_height(cells):
            return max(_block_height(c) for c in cells) + 2 * cell_pad

        table_top = pad + _block_height(title) + self.px(10) + _block_height(subtitle) + self.px(20) + self.px(20)
        height = table_top + row_height(header) + sum(row_height(r) for r in rows) + pad

        image = Image.new("RGB", (width, height), WHITE)
        draw = ImageDraw.Draw(image)

        y = pad
        y = self._draw_lines(draw, title, pad, y, inner) + self.px(10)
        self._draw_lines(draw, subtitle, pad, y, inner)

        y = table_top
        all_rows: List[Tuple[List[List[_Line]], str]] = [(header, HEADER_BG)]
        all_rows += [(r, STRIPE_BG if i % 2 == 0 else WHITE) for i, r in enumerate(rows)]
        for cells, background in all_rows:
            h = row_height(cells)
            x = pad
            for lines, col_w in zip(cells, col_widths):
                draw.rectangle([x, y, x + col_w, y + h], fill=background, outline=BORDER, width=border)
                self._draw_lines(draw, lines, x + cell_pad, y + cell_pad, col_w - 2 * cell_pad)
                x += col_w
            y += h
        return image

    @staticmethod
    def _draw_lines(draw, lines: Sequence[_Line], x: int, y: int, width: int) -> int:
        for ln in lines:
            lx = x
            if ln.center:
                lx = x + max(0, int((width - ln.font.getlength(ln.text)) / 2))
            draw.text((lx, y), ln.text, font=ln.font, fill=ln.fill)
            y += _line_height(ln.font) + ln.gap
        return y


def render_week_image(plan: MealPlan, meals: Iterable[ScheduledMeal], scale: int = PDF_RASTER_SCALE) -> Image.Image:
    """Draw the plan's week table as an RGB image at the given pixel density."""
    return _Renderer(scale).render(plan, meals)


@contextmanager
def _offscreen(plan: MealPlan, meals: Iterable[ScheduledMeal]):
    """Render the week off-screen; the raster is released however the block exits."""
    image = render_week_image(plan, meals)
    try:
        yield image
    finally:
        image.close()


def _paginate(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    page_w, page_h = landscape(A4)
    pdf = canvas.Canvas(buf, pagesize=(page_w, page_h))
    img_w_mm = PDF_PAGE_WIDTH_MM
    img_h_mm = image.height * img_w_mm / image.width
    reader = ImageReader(image)
    for i, offset in enumerate(page_offsets(img_h_mm)):
        if i:
            pdf.showPage()
        # offset is measured from the page top; reportlab's origin is bottom-left
        y = page_h - (offset + img_h_mm) * mm
        pdf.drawImage(reader, 0, y, width=img_w_mm * mm, height=img_h_mm * mm)
    pdf.save()
    return buf.getvalue()


def export_meal_plan_pdf(plan: MealPlan, meals: Iterable[ScheduledMeal],
                         today: Optional[date] = None) -> Tuple[str, bytes]:
    """Build the PDF for a plan. Returns (filename, pdf bytes); raises PdfExportError."""
    try:
        with _offscreen(plan, meals) as image:
            pdf_bytes = _paginate(image)
    except Exception as e:
        logger.exception("PDF export failed for plan #%s", plan.id)
        raise PdfExportError("Export failed") from e
    filename = pdf_filename(plan.name, today)
    logger.info("Exported plan #%s as %s (%d bytes)", plan.id, filename, len(pdf_bytes))
    return filename, pdf_bytes
