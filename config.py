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
    APP_ENV = data.get("APP_ENV", "development")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoices.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Hosted auth provider
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    AUTH_URL = data.get("AUTH_URL", "")  # e.g. https://<project>.example.co/auth/v1
    AUTH_API_KEY = data.get("AUTH_API_KEY", "")
    AUTH_TIMEOUT = data.get("AUTH_TIMEOUT", 10.0)
    DEV_USER_ID = data.get("DEV_USER_ID", "00000000-0000-0000-0000-000000000001")
    DEV_USER_EMAIL = data.get("DEV_USER_EMAIL", "dev@localhost")

    # Persistence protocol
    VERIFY_ATTEMPTS = data.get("VERIFY_ATTEMPTS", 5)
    VERIFY_BACKOFF_SECONDS = data.get("VERIFY_BACKOFF_SECONDS", 0.1)  # multiplied by attempt number
    LINE_ITEM_INSERT_ATTEMPTS = data.get("LINE_ITEM_INSERT_ATTEMPTS", 3)
    LINE_ITEM_BACKOFF_SECONDS = data.get("LINE_ITEM_BACKOFF_SECONDS", 0.2)  # multiplied by attempt number
    LINE_ITEMS_ROUTINE = data.get("LINE_ITEMS_ROUTINE", "insert_line_items_for_invoice")

    # Rendering pipeline (client side)
    PUBLIC_BASE_URL = data.get("PUBLIC_BASE_URL", "http://localhost:8000")
    RENDER_SERVICE_URL = data.get("RENDER_SERVICE_URL", "http://localhost:8000/api/generate-pdf")
    RENDER_SERVICE_URL_DEV = data.get("RENDER_SERVICE_URL_DEV", "http://localhost:3001/api/generate-pdf")
    RENDER_REQUEST_TIMEOUT = data.get("RENDER_REQUEST_TIMEOUT", 60.0)

    # Rendering service
    RENDER_SERVICE_ENABLED = bool(data.get("RENDER_SERVICE_ENABLED", True))
    RENDER_SERVICE_PATH = data.get("RENDER_SERVICE_PATH", "/api/generate-pdf")
    RENDER_SERVICE_PORT = data.get("RENDER_SERVICE_PORT", 3001)
    RENDER_RESPONSE_ENCODING = data.get("RENDER_RESPONSE_ENCODING", "binary")  # binary | base64
    RENDER_CONTENT_TIMEOUT_MS = data.get("RENDER_CONTENT_TIMEOUT_MS", 30000)
    RENDER_IMAGE_TIMEOUT_MS = data.get("RENDER_IMAGE_TIMEOUT_MS", 5000)
    CHROMIUM_EXECUTABLE_PATH = data.get("CHROMIUM_EXECUTABLE_PATH", None)

    @classmethod
    def render_endpoint(cls) -> str:
        """Rendering service URL for the current environment"""
        if cls.APP_ENV == "development":
            return cls.RENDER_SERVICE_URL_DEV
        return cls.RENDER_SERVICE_URL
