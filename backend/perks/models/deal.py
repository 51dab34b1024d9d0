import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, String, Text
from sqlalchemy.orm import relationship

from perks.core.database import Base
from perks.core.timeutil import utcnow
from perks.models.user import new_id


class AccessLevel(str, enum.Enum):
    PUBLIC = "public"
    LOCKED = "locked"


class Deal(Base):
    __tablename__ = "deals"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    partner_name = Column(String, nullable=True)
    partner_url = Column(String, nullable=True)
    category = Column(String, index=True, nullable=True)
    access_level = Column(
        Enum(AccessLevel, name="accesslevel", values_callable=lambda e: [m.value for m in e]),
        index=True,
        nullable=False,
        default=AccessLevel.PUBLIC,
    )
    eligibility = Column(Text, nullable=True)
    cta_text = Column(String, nullable=True)
    cta_url = Column(String, nullable=True)
    is_active = Column(Boolean, index=True, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    claims = relationship("Claim", back_populates="deal")
