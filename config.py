import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./studio.db")
    DB_BUSY_TIMEOUT_SECONDS = int(data.get("DB_BUSY_TIMEOUT_SECONDS", 30))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Booking rules
    CHECKIN_OPENS_BEFORE_MINUTES = int(data.get("CHECKIN_OPENS_BEFORE_MINUTES", 15))
    CHECKIN_CLOSES_AFTER_MINUTES = int(data.get("CHECKIN_CLOSES_AFTER_MINUTES", 30))
    CHECKIN_FALLBACK_MINUTES = int(data.get("CHECKIN_FALLBACK_MINUTES", 120))
    CANCEL_CUTOFF_MINUTES = int(data.get("CANCEL_CUTOFF_MINUTES", 120))
    CREDIT_LEDGER_ENABLED = bool(data.get("CREDIT_LEDGER_ENABLED", True))
