from __future__ import annotations

import re
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from perks.core.errors import DealNotFound, InvalidAccessLevel
from perks.models.deal import AccessLevel, Deal
from perks.schemas.deal import deal_view


DEFAULT_LIMIT = 50
MAX_LIMIT = 100

_ID_SHAPE = re.compile(r"^[0-9a-f]{32}$")


def looks_like_id(value: str) -> bool:
    return bool(_ID_SHAPE.match(value or ""))


def _parse_int(raw: Any) -> int | None:
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def clamp_limit(raw: Any) -> int:
    value = _parse_int(raw)
    if not value:
        value = DEFAULT_LIMIT
    return max(0, min(value, MAX_LIMIT))


def clamp_skip(raw: Any) -> int:
    value = _parse_int(raw) or 0
    return max(0, value)


def parse_access_level(raw: str | None) -> AccessLevel | None:
    if raw is None or raw == "":
        return None
    try:
        return AccessLevel(raw)
    except ValueError:
        raise InvalidAccessLevel(details={"accessLevel": raw, "allowed": [a.value for a in AccessLevel]})


def resolve_deal(db: Session, identifier: str) -> Deal:
    """Find an active deal by id, falling back to its slug."""
    identifier = (identifier or "").strip()
    if not identifier:
        raise DealNotFound()

    deal = None
    if looks_like_id(identifier):
        deal = db.query(Deal).filter(Deal.id == identifier, Deal.is_active.is_(True)).first()
    if deal is None:
        deal = db.query(Deal).filter(Deal.slug == identifier.lower(), Deal.is_active.is_(True)).first()
    if deal is None:
        raise DealNotFound()
    return deal


def list_deals(
    db: Session,
    *,
    category: str | None = None,
    access_level: str | None = None,
    search: str | None = None,
    limit: Any = None,
    skip: Any = None,
) -> dict:
    level = parse_access_level(access_level)
    limit_num = clamp_limit(limit)
    skip_num = clamp_skip(skip)

    query = db.query(Deal).filter(Deal.is_active.is_(True))
    if category:
        query = query.filter(Deal.category == category)
    if level is not None:
        query = query.filter(Deal.access_level == level)

    terms = [t for t in (search or "").split() if t]
    if terms:
        clauses = []
        for term in terms:
            needle = term.lower()
            clauses.extend(
                [
                    func.lower(Deal.title).contains(needle, autoescape=True),
                    func.lower(func.coalesce(Deal.description, "")).contains(needle, autoescape=True),
                    func.lower(func.coalesce(Deal.partner_name, "")).contains(needle, autoescape=True),
                ]
            )
        query = query.filter(or_(*clauses))

    total = int(query.order_by(None).count())
    rows = []
    if limit_num > 0:
        rows = query.order_by(Deal.created_at.desc(), Deal.id.desc()).offset(skip_num).limit(limit_num).all()

    return {
        "deals": [deal_view(d) for d in rows],
        "pagination": {
            "total": total,
            "limit": limit_num,
            "skip": skip_num,
            "hasMore": skip_num + len(rows) < total,
        },
    }


def get_deal(db: Session, slug_or_id: str) -> dict:
    return {"deal": deal_view(resolve_deal(db, slug_or_id))}
