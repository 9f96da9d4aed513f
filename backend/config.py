import os
from dotenv import load_dotenv

load_dotenv()

# --- Tutor provider ---
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "").strip()
TUTOR_PROVIDER = os.getenv("TUTOR_PROVIDER", "gemini").strip().lower()  # gemini/openai
TUTOR_MODEL = os.getenv("TUTOR_MODEL", "").strip() or None
TUTOR_TIMEOUT_SECONDS = float(os.getenv("TUTOR_TIMEOUT_SECONDS", "60"))

# --- Database ---
# Default to local SQLite, but prefer environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/planner.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Server ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
UPCOMING_EVENTS_LIMIT = 10
CHAT_HISTORY_LIMIT = 50
