# envirosense_config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _list_env(name: str, default: str) -> list:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


PROJECT_KNOWLEDGE = {
    "project_name": "EnviroSense",
    "description": "Satellite-style environmental indicator dashboard for Pakistan "
                   "(NDVI, Aerosol Index, NO₂, SO₂, CO).",
    "country": "Pakistan",
}

# --- Web layer ---
PORT = _int_env("PORT", 5000)
LOG_LEVEL = os.getenv("ENVIROSENSE_LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = _list_env(
    "ENVIROSENSE_ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:8080,http://127.0.0.1:8080",
)
USER_ID_HEADER = os.getenv("ENVIROSENSE_USER_ID_HEADER", "X-User-Id")

# --- Analysis defaults ---
DEFAULT_START_YEAR = _int_env("ENVIROSENSE_DEFAULT_START_YEAR", 2019)
DEFAULT_END_YEAR = _int_env("ENVIROSENSE_DEFAULT_END_YEAR", 2025)
MAX_YEAR_SPAN = _int_env("ENVIROSENSE_MAX_YEAR_SPAN", 50)

# --- Persistence (MongoDB Atlas Data API) ---
MONGODB_DATA_API_KEY = os.getenv("MONGODB_DATA_API_KEY")
MONGODB_APP_ID = os.getenv("MONGODB_APP_ID")
MONGODB_DATA_SOURCE = os.getenv("MONGODB_DATA_SOURCE", "Cluster0")
MONGODB_DATABASE = os.getenv("MONGODB_DATABASE", "envirosense")
MONGODB_TIMEOUT = _int_env("MONGODB_TIMEOUT", 10)
PROFILES_COLLECTION = "profiles"
HISTORY_COLLECTION = "analysis_history"
