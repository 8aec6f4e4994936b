from typing import Optional

from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - ATLAS_SSO_URL, ATLAS_APP_CODE, ATLAS_ENCRYPTION_KEY, ATLAS_ENCRYPTION_IV
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "BBWA Site Compliance"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Create schema and tables on startup (local development only)
    DB_AUTO_CREATE: bool = False

    # CSRF token for the public check-in form
    CSRF_SECRET: str
    CSRF_ALG: str = "HS256"
    CSRF_TOKEN_TTL_SECONDS: int = 3600
    CSRF_COOKIE_NAME: str = "csrf_token"
    CSRF_COOKIE_SECURE: bool = False

    # Compliance rules
    WHITE_CARD_TYPE: str = "White Card"
    EXPIRY_WARNING_DAYS: int = 30
    DEFAULT_SITE_RADIUS_M: int = 100

    # Automation webhook (compliance alerts, expiry reminders)
    AUTOMATION_WEBHOOK_URL: Optional[str] = None
    AUTOMATION_WEBHOOK_SECRET: Optional[str] = None
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0
    COMPLIANCE_ALERT_COOLDOWN_MINUTES: int = 60

    # Expiry reminder sweep
    EXPIRY_REMINDER_WINDOW_DAYS: int = 30
    EXPIRY_REMINDER_COOLDOWN_DAYS: int = 7


settings = Settings()
