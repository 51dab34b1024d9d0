from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from perks.core.errors import DuplicateClaim, VerificationRequired
from perks.core.timeutil import isoformat, utcnow
from perks.models.claim import Claim, ClaimStatus
from perks.models.deal import AccessLevel, Deal
from perks.models.user import User
from perks.schemas.claim import claim_view
from perks.schemas.deal import listed_deal_view
from perks.services.catalog import resolve_deal


logger = logging.getLogger(__name__)


def _find_claim(db: Session, user_id: str, deal_id: str) -> Claim | None:
    return db.query(Claim).filter(Claim.user_id == user_id, Claim.deal_id == deal_id).first()


def _duplicate(claim: Claim | None) -> DuplicateClaim:
    if claim is None:
        return DuplicateClaim()
    return DuplicateClaim(
        details={
            "claimId": claim.id,
            "claimedAt": isoformat(claim.claimed_at),
            "status": getattr(claim.status, "value", claim.status),
        }
    )


def ensure_can_claim_locked(db: Session, user_id: str, deal: Deal) -> None:
    # A user id with no row behind it is treated like an unverified account.
    user = db.query(User).filter(User.id == user_id).first()
    is_verified = bool(user.is_verified) if user is not None else False
    if not is_verified:
        logger.info(
            "claims.submit.verification_required user_id=%s deal=%s user_found=%s",
            user_id,
            deal.slug,
            user is not None,
        )
        raise VerificationRequired(
            details={"dealSlug": deal.slug, "dealTitle": deal.title, "isVerified": is_verified}
        )


def submit_claim(db: Session, user_id: str, deal_identifier: str) -> dict:
    deal = resolve_deal(db, deal_identifier)

    if deal.access_level == AccessLevel.LOCKED:
        ensure_can_claim_locked(db, user_id, deal)

    existing = _find_claim(db, user_id, deal.id)
    if existing is not None:
        logger.info("claims.submit.duplicate user_id=%s deal_id=%s claim_id=%s", user_id, deal.id, existing.id)
        raise _duplicate(existing)

    claim = Claim(user_id=user_id, deal_id=deal.id, status=ClaimStatus.PENDING, claimed_at=utcnow())
    db.add(claim)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # a concurrent request won the race; the unique constraint is authoritative
        winner = _find_claim(db, user_id, deal.id)
        if winner is None:
            raise
        logger.info("claims.submit.duplicate_race user_id=%s deal_id=%s claim_id=%s", user_id, deal.id, winner.id)
        raise _duplicate(winner)
    db.refresh(claim)

    logger.info("claims.submit.created user_id=%s deal_id=%s claim_id=%s", user_id, deal.id, claim.id)
    return claim_view(claim, deal)


def claim_stats(claims: list[dict]) -> dict[str, int]:
    stats = {"total": len(claims)}
    for status in ClaimStatus:
        stats[status.value] = sum(1 for c in claims if c.get("status") == status.value)
    return stats


def list_claims(db: Session, user_id: str) -> dict:
    rows = (
        db.query(Claim)
        .options(joinedload(Claim.deal))
        .filter(Claim.user_id == user_id)
        .order_by(Claim.claimed_at.desc(), Claim.created_at.desc())
        .all()
    )
    claims = [claim_view(c, c.deal, deal_fields=listed_deal_view) for c in rows]
    return {"claims": claims, "stats": claim_stats(claims)}
