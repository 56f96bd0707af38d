from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class BookingCustomer(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class BookingMetadata(BaseModel):
    vehicle: str = Field(min_length=1)
    vehicle_type: Optional[str] = Field(default="N/A", alias="vehicleType")
    booking_period: str = Field(min_length=1, alias="bookingPeriod")

    model_config = {"populate_by_name": True}


class ReserveRequest(BaseModel):
    id: UUID  # space being reserved
    customer: BookingCustomer
    metadata: BookingMetadata
    amount: int = Field(gt=0, strict=True)
    currency: str = "gbp"
    description: str = Field(min_length=1)
    stripe_product_id: Optional[str] = Field(default=None, alias="stripeProductId")
    price_id: Optional[str] = Field(default=None, alias="priceId")

    model_config = {"populate_by_name": True}

    @field_validator("currency")
    @classmethod
    def lower_currency(cls, v):
        return v.strip().lower()


class BookingOut(BaseModel):
    id: UUID
    space_id: UUID
    user_id: UUID
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    vehicle: str
    vehicle_type: str
    booking_period: str
    amount: int
    currency: str
    description: str
    stripe_product_id: Optional[str] = None
    price_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OrderStatusUpdate(BaseModel):
    orderId: str = Field(min_length=1)
    paymentIntentId: Optional[str] = None
    status: str = Field(min_length=1)


class OrderStatusResult(BaseModel):
    success: bool
    message: str
    orderId: str
    status: str
