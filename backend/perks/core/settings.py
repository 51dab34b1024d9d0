import os


def _getenv(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _getenv_bool(name: str, default: bool = False) -> bool:
    raw = _getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


DEFAULT_JWT_SECRET = "development-only-secret-change-me-in-production"


class Settings:
    def __init__(self) -> None:
        self.environment = (_getenv("ENVIRONMENT", "development") or "development").lower()
        self.log_level = (_getenv("LOG_LEVEL", "INFO") or "INFO").upper()
        self.database_url = _getenv("DATABASE_URL", "sqlite:///./perks.db") or "sqlite:///./perks.db"
        self.db_auto_create = _getenv_bool("DB_AUTO_CREATE", default=True)

        self.jwt_secret = _getenv("JWT_SECRET")
        self.jwt_algorithm = _getenv("JWT_ALGORITHM", "HS256") or "HS256"
        self.jwt_expires_minutes = _getenv_int("JWT_EXPIRES_MINUTES", 7 * 24 * 60)
        self.bcrypt_rounds = _getenv_int("BCRYPT_ROUNDS", 10)

        self.cors_allow_origins = _getenv("CORS_ALLOW_ORIGINS")

        self.rate_limit_enabled = _getenv_bool("RATE_LIMIT_ENABLED", default=True)
        self.rate_limit_general_max = _getenv_int("RATE_LIMIT_GENERAL_MAX", 100)
        self.rate_limit_general_window_s = _getenv_int("RATE_LIMIT_GENERAL_WINDOW_S", 60)
        self.rate_limit_auth_max = _getenv_int("RATE_LIMIT_AUTH_MAX", 5)
        self.rate_limit_auth_window_s = _getenv_int("RATE_LIMIT_AUTH_WINDOW_S", 15 * 60)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def resolved_jwt_secret(self) -> str:
        if self.jwt_secret:
            return self.jwt_secret
        if self.is_production:
            raise RuntimeError("JWT_SECRET must be set in production")
        return DEFAULT_JWT_SECRET

    def resolved_cors_origins(self) -> list[str]:
        raw = self.cors_allow_origins
        if raw is None:
            return ["http://localhost:3000", "http://localhost:3001"]
        if raw.strip() == "*":
            return ["*"]
        origins = [o.strip() for o in raw.split(",") if o.strip()]
        return origins
