from __future__ import annotations

import logging
from typing import Any

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from perks.models.claim import Claim
from perks.models.deal import AccessLevel, Deal
from perks.models.user import User


logger = logging.getLogger(__name__)

DEMO_PASSWORD = "hashme"

DEMO_USERS: list[dict[str, Any]] = [
    {"email": "test@example.com", "name": "Test User (Unverified)", "is_verified": False},
    {"email": "verified@example.com", "name": "Verified User", "is_verified": True},
]

DEMO_DEALS: list[dict[str, Any]] = [
    {
        "title": "AWS Cloud Credits - $5,000",
        "slug": "aws-cloud-credits",
        "description": "Get $5,000 in AWS cloud credits for hosting, compute, storage and scaling your infrastructure.",
        "partner_name": "Amazon Web Services",
        "partner_url": "https://aws.amazon.com",
        "category": "cloud",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "Startups less than 2 years old with less than $1M in funding",
        "cta_text": "Claim Credits",
        "cta_url": "https://aws.amazon.com/activate",
    },
    {
        "title": "Google Cloud Platform - $10,000 Credits",
        "slug": "gcp-credits",
        "description": "Google Cloud credits for compute, storage, AI/ML services and BigQuery.",
        "partner_name": "Google Cloud",
        "partner_url": "https://cloud.google.com",
        "category": "cloud",
        "access_level": AccessLevel.LOCKED,
        "eligibility": "Venture-backed startups or accelerator participants",
        "cta_text": "Apply Now",
    },
    {
        "title": "MongoDB Atlas Credits - $500",
        "slug": "mongodb-atlas",
        "description": "Cloud database credits with automated backups, monitoring and global clusters.",
        "partner_name": "MongoDB",
        "partner_url": "https://mongodb.com",
        "category": "cloud",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "All startups",
        "cta_text": "Claim Credits",
    },
    {
        "title": "Microsoft Azure - $25,000 Credits",
        "slug": "azure-startup-credits",
        "description": "Enterprise-grade cloud computing including AI services, DevOps tools and global infrastructure.",
        "partner_name": "Microsoft Azure",
        "partner_url": "https://azure.microsoft.com",
        "category": "cloud",
        "access_level": AccessLevel.LOCKED,
        "eligibility": "Series A+ startups or Microsoft partner network members",
        "cta_text": "Apply for Credits",
    },
    {
        "title": "GitHub Enterprise - Free for 1 Year",
        "slug": "github-enterprise",
        "description": "Advanced collaboration, security scanning and compliance features for your development team.",
        "partner_name": "GitHub",
        "partner_url": "https://github.com",
        "category": "development",
        "access_level": AccessLevel.LOCKED,
        "eligibility": "Teams of 5+ developers",
        "cta_text": "Apply Now",
    },
    {
        "title": "Vercel Pro - 12 Months Free",
        "slug": "vercel-pro-startup",
        "description": "Deploy Next.js, React or Vue apps with serverless functions, analytics and custom domains.",
        "partner_name": "Vercel",
        "partner_url": "https://vercel.com",
        "category": "development",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "All startups building web applications",
        "cta_text": "Claim Pro Plan",
    },
    {
        "title": "Figma Professional - 50% Off",
        "slug": "figma-pro-discount",
        "description": "Collaborative design tool with unlimited files, advanced prototyping and design systems.",
        "partner_name": "Figma",
        "partner_url": "https://figma.com",
        "category": "design",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "Design teams at startups",
        "cta_text": "Get Deal",
    },
    {
        "title": "Notion Pro - Free for 1 Year",
        "slug": "notion-pro",
        "description": "All-in-one workspace for notes, docs, wikis and project management.",
        "partner_name": "Notion",
        "partner_url": "https://notion.so",
        "category": "productivity",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "Early-stage startups",
        "cta_text": "Get Started",
    },
    {
        "title": "HubSpot for Startups - 90% Off",
        "slug": "hubspot-startups",
        "description": "CRM, marketing automation, sales tools and customer service platform.",
        "partner_name": "HubSpot",
        "partner_url": "https://hubspot.com",
        "category": "marketing",
        "access_level": AccessLevel.LOCKED,
        "eligibility": "Funded startups (Seed+) associated with partner networks",
        "cta_text": "Apply",
    },
    {
        "title": "Stripe Atlas - $100 Off",
        "slug": "stripe-atlas-discount",
        "description": "Launch your US business entity: Delaware C-corp formation, IRS tax ID and legal templates.",
        "partner_name": "Stripe",
        "partner_url": "https://stripe.com/atlas",
        "category": "legal",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "First-time founders anywhere in the world",
        "cta_text": "Learn More",
    },
    {
        "title": "Heroku Hobby Dynos - Retired",
        "slug": "heroku-hobby",
        "description": "Free hobby dynos for side projects. No longer offered.",
        "partner_name": "Heroku",
        "partner_url": "https://heroku.com",
        "category": "cloud",
        "access_level": AccessLevel.PUBLIC,
        "eligibility": "All startups",
        "cta_text": "Claim",
        "is_active": False,
    },
]


def reset_tables(db: Session) -> None:
    db.query(Claim).delete()
    db.query(Deal).delete()
    db.query(User).delete()
    db.commit()


def seed_database(db: Session, passwords: CryptContext, *, reset: bool = True) -> dict[str, int]:
    if reset:
        reset_tables(db)

    password_hash = passwords.hash(DEMO_PASSWORD)
    for row in DEMO_USERS:
        db.add(User(password_hash=password_hash, **row))

    for row in DEMO_DEALS:
        fields = dict(row)
        fields["slug"] = fields["slug"].strip().lower()
        fields.setdefault("is_active", True)
        db.add(Deal(**fields))
    db.commit()

    deals = db.query(Deal).all()
    counts = {
        "users": db.query(User).count(),
        "deals": len(deals),
        "public": sum(1 for d in deals if d.access_level == AccessLevel.PUBLIC),
        "locked": sum(1 for d in deals if d.access_level == AccessLevel.LOCKED),
    }
    logger.info(
        "seed.done users=%s deals=%s public=%s locked=%s",
        counts["users"],
        counts["deals"],
        counts["public"],
        counts["locked"],
    )
    return counts
