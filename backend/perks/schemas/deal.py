from perks.core.timeutil import isoformat
from perks.models.deal import Deal


def _access_level(deal: Deal) -> str:
    level = deal.access_level
    return getattr(level, "value", level)


def deal_view(deal: Deal) -> dict:
    return {
        "id": deal.id,
        "title": deal.title,
        "slug": deal.slug,
        "description": deal.description,
        "partnerName": deal.partner_name,
        "partnerUrl": deal.partner_url,
        "category": deal.category,
        "accessLevel": _access_level(deal),
        "eligibility": deal.eligibility,
        "ctaText": deal.cta_text,
        "ctaUrl": deal.cta_url,
        "isActive": bool(deal.is_active),
        "createdAt": isoformat(deal.created_at),
        "updatedAt": isoformat(deal.updated_at),
    }


def claimed_deal_view(deal: Deal) -> dict:
    """Deal fields returned alongside a freshly admitted claim."""
    return {
        "id": deal.id,
        "title": deal.title,
        "slug": deal.slug,
        "description": deal.description,
        "partnerName": deal.partner_name,
        "category": deal.category,
        "accessLevel": _access_level(deal),
        "ctaText": deal.cta_text,
        "ctaUrl": deal.cta_url,
    }


def listed_deal_view(deal: Deal) -> dict:
    """Deal fields shown next to each claim in a user's claim list."""
    out = claimed_deal_view(deal)
    out["partnerUrl"] = deal.partner_url
    out["eligibility"] = deal.eligibility
    out["isActive"] = bool(deal.is_active)
    return out
