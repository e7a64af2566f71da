# FILE: aibuilder/core/config.py
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# ================== ENV ==================

ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / ".env")


def env(*names: str, default: Optional[str] = None) -> str:
    for n in names:
        v = os.environ.get(n)
        if v is not None and str(v).strip() != "":
            return v
    if default is not None:
        return default
    raise KeyError(f"Missing required env var. Tried: {', '.join(names)}")


def env_int(name: str, default: int) -> int:
    return int(env(name, default=str(default)))


LOG_LEVEL = env("LOG_LEVEL", default="INFO").upper()

CORS_ORIGINS: List[str] = [
    o.strip() for o in env("CORS_ORIGINS", "FRONTEND_URL", default="http://localhost:5173").split(",") if o.strip()
]

# ================== JWT ==================

JWT_SECRET = env("JWT_SECRET", default="demo-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = env_int("JWT_EXPIRATION_HOURS", 24 * 7)

# ================== DEMO IDENTITY ==================

DEMO_TOKEN = env("DEMO_TOKEN", default="demo-token")
DEMO_USER_ID = "00000000-0000-0000-0000-000000000000"
DEMO_USER_EMAIL = env("DEMO_USER_EMAIL", default="demo@aibuilder.dev")
DEMO_USER_PREFIX = "demo-"

# ================== BILLING ==================

GENERATION_COST = env_int("GENERATION_COST", 2)
DEFAULT_CREDITS = env_int("DEFAULT_CREDITS", 10)
FREE_PLAN_PROJECT_LIMIT = env_int("FREE_PLAN_PROJECT_LIMIT", 2)

# ================== RATE LIMIT ==================
# per client IP, across all /api routes

RATE_LIMIT_MAX = env_int("RATE_LIMIT_MAX", 100)
RATE_LIMIT_WINDOW_SECONDS = env_int("RATE_LIMIT_WINDOW_SECONDS", 15 * 60)

# ================== VENDORS ==================
# Keys are read per call: the server must start without any of them.

OPENAI_MODEL = env("OPENAI_MODEL", default="gpt-4-turbo-preview")
GROQ_MODEL = env("GROQ_MODEL", default="llama-3.3-70b-versatile")
GROQ_BASE_URL = env("GROQ_BASE_URL", default="https://api.groq.com/openai/v1")

STABILITY_URL = "https://api.stability.ai/v1/generation/stable-diffusion-xl-1024-v1-0/text-to-image"
HUGGINGFACE_URL = "https://api-inference.huggingface.co/models"
HUGGINGFACE_IMAGE_MODEL = env("HUGGINGFACE_IMAGE_MODEL", default="stabilityai/stable-diffusion-xl-base-1.0")

ELEVENLABS_URL = "https://api.elevenlabs.io/v1"
ELEVENLABS_DEFAULT_VOICE = env("ELEVENLABS_DEFAULT_VOICE", default="21m00Tcm4TlvDq8ikWAM")  # Rachel
DEEPGRAM_URL = "https://api.deepgram.com/v1/listen"

LLM_TIMEOUT_SECONDS = float(env("LLM_TIMEOUT_SECONDS", default="60"))
IMAGE_TIMEOUT_SECONDS = float(env("IMAGE_TIMEOUT_SECONDS", default="60"))
VENDOR_TIMEOUT_SECONDS = float(env("VENDOR_TIMEOUT_SECONDS", default="15"))


def vendor_key(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def openai_key() -> Optional[str]:
    return vendor_key("OPENAI_API_KEY")


def groq_key() -> Optional[str]:
    return vendor_key("GROQ_API_KEY")


def stability_key() -> Optional[str]:
    return vendor_key("STABILITY_API_KEY")


def huggingface_key() -> Optional[str]:
    return vendor_key("HUGGINGFACE_API_KEY")


def elevenlabs_key() -> Optional[str]:
    return vendor_key("ELEVENLABS_API_KEY")


def deepgram_key() -> Optional[str]:
    return vendor_key("DEEPGRAM_API_KEY")


def configured_services() -> dict:
    return {
        "ai": bool(openai_key() or groq_key()),
        "image": bool(stability_key() or huggingface_key()),
        "voice": bool(elevenlabs_key() or deepgram_key()),
    }

# ================== DATABASE ==================
# SQLite for local development, MySQL when configured.


def get_database_url() -> str:
    """Get database URL - supports SQLite or MySQL."""
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return url

    mysql_host = os.environ.get("MYSQL_HOST")
    if mysql_host:
        mysql_port = int(os.environ.get("MYSQL_PORT", "3306"))
        mysql_user = os.environ.get("MYSQL_USER", "root")
        mysql_password = os.environ.get("MYSQL_PASSWORD", "")
        mysql_db = os.environ.get("MYSQL_DB", "aibuilder")
        return f"mysql+aiomysql://{mysql_user}:{mysql_password}@{mysql_host}:{mysql_port}/{mysql_db}?charset=utf8mb4"

    db_path = ROOT_DIR / "aibuilder.db"
    return f"sqlite+aiosqlite:///{db_path}"
