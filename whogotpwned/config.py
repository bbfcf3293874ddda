# whogotpwned/config.py
import os
from dotenv import load_dotenv

# load .env located one level above the package
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
ENV_PATH = os.path.join(BASE_DIR, ".env")
load_dotenv(ENV_PATH)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


APP_NAME = os.getenv("APP_NAME", "Email Breach Checker API")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
PORT = int(os.getenv("PORT", "8000"))

# memory | mongo | leakcheck
LOOKUP_BACKEND = os.getenv("LOOKUP_BACKEND", "memory").lower()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "email_breach_checker")
SEED_SAMPLE_DATA = _flag("SEED_SAMPLE_DATA", "true")
RECORD_CHECKS = _flag("RECORD_CHECKS", "false")

LEAKCHECK_URL = os.getenv("LEAKCHECK_URL", "https://leakcheck.net/api/public")
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "10"))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]

ENABLE_DEBUG_ROUTES = _flag("ENABLE_DEBUG_ROUTES", "true")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = _flag("LOG_JSON", "false")
