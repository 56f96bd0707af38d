from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class PaymentIntentRequest(BaseModel):
    orderId: str = Field(min_length=1)
    amount: int = Field(gt=0, strict=True)  # minor units
    currency: str = "gbp"
    customerEmail: Optional[EmailStr] = None

    @field_validator("currency")
    @classmethod
    def lower_currency(cls, v):
        v = v.strip().lower()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("currency must be a three letter code")
        return v


class PaymentIntentResponse(BaseModel):
    client_secret: str
