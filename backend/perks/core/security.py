from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import jwt
from fastapi import Request
from passlib.context import CryptContext

from perks.core.errors import AuthError, InvalidToken
from perks.core.timeutil import utcnow


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str
    is_verified: bool


def build_password_context(rounds: int = 10) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class TokenCodec:
    """Issues and verifies the session JWTs handed out at register/login."""

    def __init__(self, *, secret: str, algorithm: str = "HS256", expires_minutes: int = 7 * 24 * 60) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=max(1, int(expires_minutes)))

    def issue(self, *, subject_id: str, email: str, is_verified: bool) -> str:
        now = utcnow()
        payload = {
            "sub": subject_id,
            "email": email,
            "isVerified": bool(is_verified),
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidToken(details=str(exc)) from exc
        return dict(payload)


def _get_bearer_token(request: Request) -> str:
    auth = request.headers.get("authorization") or ""
    if not auth.startswith("Bearer "):
        raise AuthError("Missing or invalid Authorization header")
    token = auth[len("Bearer "):].strip()
    if not token:
        raise AuthError("Missing or invalid Authorization header")
    return token


def get_current_user(request: Request) -> CurrentUser:
    token = _get_bearer_token(request)
    claims = request.app.state.context.tokens.decode(token)
    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise InvalidToken()
    return CurrentUser(
        id=user_id,
        email=str(claims.get("email") or ""),
        is_verified=bool(claims.get("isVerified")),
    )
