import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    DB_AUTO_CREATE = bool(data.get("DB_AUTO_CREATE", 1))
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    CACHE_BACKEND = data.get("CACHE_BACKEND", "redis")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["*"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", False)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_TTL_HOURS = data.get("SESSION_TTL_HOURS", 24)
    NOTIFIER_BACKEND = data.get("NOTIFIER_BACKEND", "sendgrid")
    SENDGRID_API_KEY = data.get("SENDGRID_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@fleet-admin.local")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:5173")
    RESET_TOKEN_TTL_HOURS = data.get("RESET_TOKEN_TTL_HOURS", 24)
    RATE_LIMIT_MAX_REQUESTS = data.get("RATE_LIMIT_MAX_REQUESTS", 5)
    RATE_LIMIT_WINDOW_SECONDS = data.get("RATE_LIMIT_WINDOW_SECONDS", 3600)
    REQUEST_TIMEOUT_SECONDS = data.get("REQUEST_TIMEOUT_SECONDS", 10)
