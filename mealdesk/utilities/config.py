"""Configuration management for the Meal Desk client."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Backend API
API_BASE_URL: Final[str] = os.getenv('MEALDESK_API_URL', 'http://localhost:5000').rstrip('/')
API_TIMEOUT: Final[float] = float(os.getenv('MEALDESK_API_TIMEOUT', '10'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Query cache lifetime in seconds (0 keeps entries until invalidated)
CACHE_TTL: Final[float] = float(os.getenv('MEALDESK_CACHE_TTL', '0'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
SESSION_FILE: Final[Path] = Path(os.getenv('MEALDESK_SESSION_FILE', str(DATA_DIR / 'auth-storage.json')))

# TrueType font used for the PDF raster; must cover Cyrillic
PDF_FONT: Final[str] = os.getenv('MEALDESK_PDF_FONT', 'DejaVuSans.ttf')
PDF_FONT_BOLD: Final[str] = os.getenv('MEALDESK_PDF_FONT_BOLD', 'DejaVuSans-Bold.ttf')
