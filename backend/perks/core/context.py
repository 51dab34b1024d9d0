from __future__ import annotations

import logging
import time

from passlib.context import CryptContext
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from perks.core.database import Base, build_engine, build_session_factory
from perks.core.security import TokenCodec, build_password_context
from perks.core.settings import Settings
from perks.models import claim, deal, user  # noqa: F401
from perks.services.ratelimit import SlidingWindowRateLimiter


logger = logging.getLogger(__name__)


class AppContext:
    """Shared handles for one application instance.

    Built once by ``create_app``; ``startup`` runs when the server starts and
    ``close`` when it shuts down.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.started_at = time.monotonic()
        self.engine: Engine = build_engine(settings.database_url)
        self.session_factory: sessionmaker = build_session_factory(self.engine)
        self.passwords: CryptContext = build_password_context(settings.bcrypt_rounds)
        self.tokens = TokenCodec(
            secret=settings.resolved_jwt_secret(),
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expires_minutes,
        )
        self.general_limiter = SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_general_max,
            window_s=settings.rate_limit_general_window_s,
        )
        self.auth_limiter = SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_auth_max,
            window_s=settings.rate_limit_auth_window_s,
        )

    def startup(self) -> None:
        if self.settings.db_auto_create:
            Base.metadata.create_all(bind=self.engine)
        logger.info(
            "context.startup environment=%s db_dialect=%s",
            self.settings.environment,
            self.engine.dialect.name,
        )

    def close(self) -> None:
        self.engine.dispose()
        logger.info("context.close")
