from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from perks.core.database import get_db
from perks.core.security import CurrentUser, get_current_user
from perks.schemas.claim import CreateClaimRequest
from perks.services import claims_engine


router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("/claims", status_code=201)
def create_claim(
    body: CreateClaimRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> dict:
    claim = claims_engine.submit_claim(db, current_user.id, body.deal_id)
    return {"claim": claim, "message": "Deal claimed successfully"}


@router.get("/claims/me")
def my_claims(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> dict:
    return claims_engine.list_claims(db, current_user.id)
