from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from perks.core.database import get_db
from perks.services import catalog


router = APIRouter()


@router.get("/deals")
def list_deals(
    category: str | None = None,
    access_level: str | None = Query(None, alias="accessLevel"),
    search: str | None = None,
    limit: str | None = None,
    skip: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    return catalog.list_deals(
        db,
        category=category,
        access_level=access_level,
        search=search,
        limit=limit,
        skip=skip,
    )


@router.get("/deals/{slug_or_id}")
def get_deal(slug_or_id: str, db: Session = Depends(get_db)) -> dict:
    return catalog.get_deal(db, slug_or_id)
