"""Central config. Values come from the environment / .env, defaults only live here."""
import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = "AI Mentor Buddy"
ASSISTANT_NAME = "AI Mentor Buddy"


def get_gemini_api_key() -> str | None:
    return (os.getenv("GEMINI_API_KEY") or "").strip() or None


def get_gemini_model() -> str:
    """Model name, set GEMINI_MODEL_NAME in .env to override."""
    return (os.getenv("GEMINI_MODEL_NAME") or "").strip() or "gemini-2.0-flash"


def get_max_output_tokens() -> int:
    return int(os.getenv("MODEL_MAX_OUTPUT_TOKENS", "1000"))


def get_temperature() -> float:
    return float(os.getenv("MODEL_TEMPERATURE", "0.7"))


def get_database_url() -> str:
    return (os.getenv("DATABASE_URL") or "").strip() or "sqlite:///./mentor_buddy.db"


def get_storage_backend() -> str:
    """'database' (default) or 'memory'."""
    return (os.getenv("STORAGE_BACKEND") or "database").strip().lower()


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]
