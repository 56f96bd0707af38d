import uuid
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Text, Uuid, func
from sqlalchemy.orm import relationship, validates
from shared.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    space_id = Column(Uuid, ForeignKey("spaces.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    space = relationship("Space", back_populates="reviews")

    @validates("comment")
    def trim_comment(self, key, value):
        if value is None:
            return None
        return value.strip() or None
