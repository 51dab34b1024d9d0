import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from perks.core.database import Base
from perks.core.timeutil import utcnow
from perks.models.user import new_id


class ClaimStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Claim(Base):
    __tablename__ = "claims"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    deal_id = Column(String(32), ForeignKey("deals.id"), index=True, nullable=False)
    status = Column(
        Enum(ClaimStatus, name="claimstatus", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ClaimStatus.PENDING,
    )
    claimed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # one claim per user and deal, whatever the application checks beforehand
    __table_args__ = (UniqueConstraint("user_id", "deal_id", name="uq_claims_user_deal"),)

    user = relationship("User", back_populates="claims")
    deal = relationship("Deal", back_populates="claims")
