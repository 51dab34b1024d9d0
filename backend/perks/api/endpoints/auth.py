from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from perks.core.database import get_db
from perks.schemas.auth import LoginRequest, RegisterRequest
from perks.services import identity


router = APIRouter()


@router.post("/auth/register", status_code=201)
def register(body: RegisterRequest, request: Request, db: Session = Depends(get_db)) -> dict:
    ctx = request.app.state.context
    return identity.register(
        db,
        passwords=ctx.passwords,
        tokens=ctx.tokens,
        email=body.email,
        password=body.password,
        name=body.name,
    )


@router.post("/auth/login")
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)) -> dict:
    ctx = request.app.state.context
    return identity.login(
        db,
        passwords=ctx.passwords,
        tokens=ctx.tokens,
        email=body.email,
        password=body.password,
    )
