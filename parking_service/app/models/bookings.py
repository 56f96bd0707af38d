import uuid
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from shared.utils.enums import BookingStatus


def _utcnow():
    return datetime.now(timezone.utc)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    space_id = Column(Uuid, ForeignKey("spaces.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)

    customer_name = Column(String(200), nullable=False)
    customer_email = Column(String(200), nullable=False)
    customer_phone = Column(String(30))

    vehicle = Column(String(50), nullable=False)
    vehicle_type = Column(String(50), nullable=False, default="N/A")
    booking_period = Column(String(100), nullable=False)

    amount = Column(Integer, nullable=False)  # minor units
    currency = Column(String(3), nullable=False, default="gbp")
    description = Column(Text, nullable=False)
    stripe_product_id = Column(String(100))
    price_id = Column(String(100))

    status = Column(String(20), nullable=False,
                    default=BookingStatus.RESERVED.value)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_bookings_amount_positive"),
    )

    space = relationship("Space", back_populates="bookings")
