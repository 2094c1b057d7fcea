from typing import Final

# Backend date format (ISO)
API_DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Monday-first labels, indexed by UI day index
DAYS_OF_WEEK: Final[tuple[str, ...]] = (
    "Понеделник",
    "Вторник",
    "Сряда",
    "Четвъртък",
    "Петък",
    "Събота",
    "Неделя",
)

# Short month names for the PDF date range (dd MMM yyyy)
MONTHS_SHORT: Final[tuple[str, ...]] = (
    "яну", "фев", "мар", "апр", "май", "юни",
    "юли", "авг", "сеп", "окт", "ное", "дек",
)

DAY_COLUMN_LABEL: Final[str] = "Ден"
EMPTY_SLOT: Final[str] = "-"
MINUTES_SUFFIX: Final[str] = "мин"

# PDF page geometry (landscape A4, millimetres)
PDF_PAGE_WIDTH_MM: Final[int] = 297
PDF_PAGE_HEIGHT_MM: Final[int] = 210
PDF_RASTER_SCALE: Final[int] = 2

# Notification buffer size for the web observer
MAX_NOTIFICATIONS: Final[int] = 300
