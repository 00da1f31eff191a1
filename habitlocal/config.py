import os
from dotenv import load_dotenv

load_dotenv()

# --- Storage ---
# Default to local SQLite, but prefer environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/habitlocal.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# Keys inside the key-value store
HABITS_STORAGE_KEY = os.getenv("HABITS_STORAGE_KEY", "habitlocal_habits")
API_KEY_STORAGE_KEY = os.getenv("API_KEY_STORAGE_KEY", "habitlocal_gemini_api_key")

# --- Gemini ---
# Optional fallback when no key has been saved through the settings API
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
AI_CACHE_TTL = int(os.getenv("AI_CACHE_TTL", "0"))  # seconds, 0 = off

# --- Encryption of the stored API key ---
SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret-key")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
