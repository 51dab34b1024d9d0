import os
from unittest import mock

from perks.core.context import AppContext
from perks.core.settings import Settings
from perks.models.deal import AccessLevel, Deal
from perks.models.user import User


TEST_ENV = {
    "ENVIRONMENT": "test",
    "DATABASE_URL": "sqlite://",
    "JWT_SECRET": "test-secret-0123456789-abcdefghijklmnopqrstuvwxyz",
    "BCRYPT_ROUNDS": "4",
    "RATE_LIMIT_ENABLED": "false",
    "DB_AUTO_CREATE": "true",
    "LOG_LEVEL": "WARNING",
}


def make_settings(**overrides) -> Settings:
    env = dict(TEST_ENV)
    env.update({k.upper(): str(v) for k, v in overrides.items()})
    with mock.patch.dict(os.environ, env):
        return Settings()


def make_context(**overrides) -> AppContext:
    ctx = AppContext(make_settings(**overrides))
    ctx.startup()
    return ctx


def add_user(db, email: str = "founder@example.com", *, is_verified: bool = False, password_hash: str = "x") -> User:
    user = User(email=email, password_hash=password_hash, name=email.split("@")[0], is_verified=is_verified)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_deal(
    db,
    slug: str,
    *,
    access_level: AccessLevel = AccessLevel.PUBLIC,
    is_active: bool = True,
    **fields,
) -> Deal:
    fields.setdefault("title", slug.replace("-", " ").title())
    fields.setdefault("category", "cloud")
    deal = Deal(slug=slug, access_level=access_level, is_active=is_active, **fields)
    db.add(deal)
    db.commit()
    db.refresh(deal)
    return deal
