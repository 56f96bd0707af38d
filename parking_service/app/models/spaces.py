import uuid
from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, Integer, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Space(Base):
    __tablename__ = "spaces"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # owner lives in the auth store, so no FK
    host_id = Column(Uuid, nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text)
    location = Column(String(200), nullable=False)
    postcode = Column(String(20), nullable=False)
    address = Column(String(300), nullable=False)
    latitude = Column(String(32), nullable=False)
    longitude = Column(String(32), nullable=False)
    what3words = Column(String(100))
    available_days = Column(String(100))

    price_per_hour = Column(Numeric(10, 2), nullable=False, default=0)
    price_per_day = Column(Numeric(10, 2), nullable=False, default=0)
    price_per_week = Column(Numeric(10, 2), nullable=False, default=0)
    price_per_month = Column(Numeric(10, 2), nullable=False, default=0)

    total_spaces = Column(Integer, nullable=False, default=1)
    booked_spaces = Column(Integer, nullable=False, default=0)

    available_from = Column(Date, nullable=False)
    available_to = Column(Date, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    features = Column(Text)  # comma separated tags
    image_url = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("booked_spaces >= 0", name="ck_spaces_booked_non_negative"),
        CheckConstraint("booked_spaces <= total_spaces", name="ck_spaces_capacity"),
        CheckConstraint("available_from <= available_to", name="ck_spaces_window"),
        CheckConstraint(
            "price_per_hour >= 0 AND price_per_day >= 0 AND price_per_week >= 0 AND price_per_month >= 0",
            name="ck_spaces_prices_non_negative"),
    )

    reviews = relationship("Review", back_populates="space")
    bookings = relationship("Booking", back_populates="space")

    @property
    def available_spaces(self) -> int:
        return max((self.total_spaces or 0) - (self.booked_spaces or 0), 0)
