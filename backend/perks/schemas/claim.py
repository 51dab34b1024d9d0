from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from perks.core.timeutil import isoformat
from perks.models.claim import Claim
from perks.models.deal import Deal
from perks.schemas.deal import claimed_deal_view


class CreateClaimRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    deal_id: str = Field(alias="dealId", min_length=1)


def claim_view(claim: Claim, deal: Deal, deal_fields: Callable[[Deal], dict] = claimed_deal_view) -> dict:
    status = getattr(claim.status, "value", claim.status)
    return {
        "id": claim.id,
        "userId": claim.user_id,
        "dealId": claim.deal_id,
        "deal": deal_fields(deal),
        "status": status,
        "claimedAt": isoformat(claim.claimed_at),
        "createdAt": isoformat(claim.created_at),
        "updatedAt": isoformat(claim.updated_at),
    }
