import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _normalize_database_url(url: str) -> str:
    # hosted Postgres providers hand out sync-style URLs, the async engine needs asyncpg
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on", "require")


DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    logger.warning("DATABASE_URL is not set. Falling back to a local SQLite file (quiz.db).")
    DATABASE_URL = "sqlite+aiosqlite:///./quiz.db"
DATABASE_URL = _normalize_database_url(DATABASE_URL)

DATABASE_SSL = _env_flag("DATABASE_SSL", DATABASE_URL.startswith("postgresql"))
SQL_ECHO = _env_flag("SQL_ECHO", False)

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or None
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

HOST = "0.0.0.0"
PORT = int(os.getenv("PORT") or 4000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
