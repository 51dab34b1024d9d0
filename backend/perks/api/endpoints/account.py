from __future__ import annotations

from fastapi import APIRouter, Depends

from perks.core.security import CurrentUser, get_current_user


router = APIRouter()


@router.get("/protected/me")
def me(current_user: CurrentUser = Depends(get_current_user)) -> dict:
    return {
        "message": "You are authenticated!",
        "user": {
            "sub": current_user.id,
            "email": current_user.email,
            "isVerified": current_user.is_verified,
        },
    }
