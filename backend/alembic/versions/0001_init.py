"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _inspector():
    from sqlalchemy import inspect as sa_inspect
    return sa_inspect(op.get_bind())


def upgrade() -> None:
    inspector = _inspector()
    existing_tables = set(inspector.get_table_names())

    def existing_indexes(table: str) -> set[str]:
        if table not in existing_tables:
            return set()
        return {idx["name"] for idx in inspector.get_indexes(table)}

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.String(32), primary_key=True),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("role", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)")),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        )
    idxs = existing_indexes("users")
    if "ix_users_email" not in idxs:
        op.create_index("ix_users_email", "users", ["email"], unique=True)

    if "deals" not in existing_tables:
        op.create_table(
            "deals",
            sa.Column("id", sa.String(32), primary_key=True),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("slug", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("partner_name", sa.String(), nullable=True),
            sa.Column("partner_url", sa.String(), nullable=True),
            sa.Column("category", sa.String(), nullable=True),
            sa.Column("access_level", sa.Enum("public", "locked", name="accesslevel"), nullable=False, server_default="public"),
            sa.Column("eligibility", sa.Text(), nullable=True),
            sa.Column("cta_text", sa.String(), nullable=True),
            sa.Column("cta_url", sa.String(), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)")),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        )
    idxs = existing_indexes("deals")
    if "ix_deals_slug" not in idxs:
        op.create_index("ix_deals_slug", "deals", ["slug"], unique=True)
    if "ix_deals_category" not in idxs:
        op.create_index("ix_deals_category", "deals", ["category"])
    if "ix_deals_access_level" not in idxs:
        op.create_index("ix_deals_access_level", "deals", ["access_level"])
    if "ix_deals_is_active" not in idxs:
        op.create_index("ix_deals_is_active", "deals", ["is_active"])

    if "claims" not in existing_tables:
        op.create_table(
            "claims",
            sa.Column("id", sa.String(32), primary_key=True),
            sa.Column("user_id", sa.String(32), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("deal_id", sa.String(32), sa.ForeignKey("deals.id"), nullable=False),
            sa.Column(
                "status",
                sa.Enum("pending", "approved", "rejected", name="claimstatus"),
                nullable=False,
                server_default="pending",
            ),
            sa.Column("claimed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("(CURRENT_TIMESTAMP)")),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)")),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
            sa.UniqueConstraint("user_id", "deal_id", name="uq_claims_user_deal"),
        )
    idxs = existing_indexes("claims")
    if "ix_claims_user_id" not in idxs:
        op.create_index("ix_claims_user_id", "claims", ["user_id"])
    if "ix_claims_deal_id" not in idxs:
        op.create_index("ix_claims_deal_id", "claims", ["deal_id"])


def downgrade() -> None:
    op.drop_index("ix_claims_deal_id", table_name="claims")
    op.drop_index("ix_claims_user_id", table_name="claims")
    op.drop_table("claims")
    op.drop_index("ix_deals_is_active", table_name="deals")
    op.drop_index("ix_deals_access_level", table_name="deals")
    op.drop_index("ix_deals_category", table_name="deals")
    op.drop_index("ix_deals_slug", table_name="deals")
    op.drop_table("deals")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    if op.get_bind().dialect.name == "postgresql":
        op.execute(sa.text("DROP TYPE IF EXISTS claimstatus"))
        op.execute(sa.text("DROP TYPE IF EXISTS accesslevel"))
