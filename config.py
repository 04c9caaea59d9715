"""Configuration settings for the application."""

import os
import sys
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# OpenAI API Settings
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
EXTRACTION_TEMPERATURE = 0.1
EXTRACTION_MAX_TOKENS = 2000
ANALYSIS_TEMPERATURE = 0.3
ANALYSIS_MAX_TOKENS = 1000

# PDF Processing Settings
PAGE_ZOOM_FACTOR = 2.0  # Higher = better quality but larger payloads
MAX_FILE_SIZE_MB = 20

# Report Settings
DAYS_IN_MONTH = 30  # Fixed assumption for Avg/day
ENTITY_NAMES = ("Lantabur", "Taqwa")
NO_DATA_TEXT = "No data available."

# Preferences (durable across sessions)
PREFERENCES_PATH = Path(
    os.getenv("DASHBOARD_PREFERENCES_PATH", Path.home() / ".production_dashboard" / "preferences.json")
)
API_KEY_PREFERENCE = "apiKey"
ACCENT_COLOR_PREFERENCE = "accentColor"

# Accent palette: name -> HSL value
ACCENT_COLORS = [
    ("Light Green", "120 73% 75%"),
    ("Sky Blue", "197 71% 73%"),
    ("Thistle", "300 24% 80%"),
    ("Coral", "16 100% 70%"),
]

# Logging Settings
LOG_LEVEL = os.getenv("DASHBOARD_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("DASHBOARD_LOG_FILE", "vlm_extraction.log")


def setup_logging(level: str = None, log_file: str = None) -> None:
    """Configure root logging with a stdout handler and an append-mode log file."""
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    log_file = log_file if log_file is not None else LOG_FILE
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel((level or LOG_LEVEL).upper())
