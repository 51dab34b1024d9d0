from __future__ import annotations

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from perks.core.errors import InvalidCredentials, UserExists
from perks.core.security import TokenCodec
from perks.models.user import User
from perks.schemas.auth import user_view


logger = logging.getLogger(__name__)


def normalize_email(value: str) -> str:
    return str(value or "").strip().lower()


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def issue_session(tokens: TokenCodec, user: User) -> dict:
    token = tokens.issue(subject_id=user.id, email=user.email, is_verified=bool(user.is_verified))
    return {"user": user_view(user), "token": token}


def register(
    db: Session,
    *,
    passwords: CryptContext,
    tokens: TokenCodec,
    email: str,
    password: str,
    name: str,
) -> dict:
    email = normalize_email(email)
    if find_user_by_email(db, email) is not None:
        raise UserExists()

    user = User(
        email=email,
        password_hash=passwords.hash(password),
        name=(name or "").strip(),
        is_verified=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if find_user_by_email(db, email) is None:
            raise
        raise UserExists()
    db.refresh(user)

    logger.info("auth.register.created user_id=%s", user.id)
    return issue_session(tokens, user)


def login(
    db: Session,
    *,
    passwords: CryptContext,
    tokens: TokenCodec,
    email: str,
    password: str,
) -> dict:
    user = find_user_by_email(db, email)
    # same error for unknown email and wrong password
    if user is None:
        passwords.dummy_verify()
        logger.info("auth.login.failed reason=unknown_email")
        raise InvalidCredentials()
    if not passwords.verify(password, user.password_hash):
        logger.info("auth.login.failed reason=bad_password user_id=%s", user.id)
        raise InvalidCredentials()

    logger.info("auth.login.ok user_id=%s", user.id)
    return issue_session(tokens, user)
