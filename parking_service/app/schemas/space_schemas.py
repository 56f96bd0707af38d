from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from shared.helpers.value_helper import coerce_bool, split_features


class SpaceBase(BaseModel):
    host_id: UUID
    title: str = Field(min_length=1)
    description: Optional[str] = None
    location: str = Field(min_length=1)
    postcode: str = Field(min_length=1)
    address: str = Field(min_length=1)
    latitude: str
    longitude: str
    what3words: Optional[str] = None
    available_days: Optional[str] = None

    price_per_hour: Decimal = Field(default=Decimal(0), ge=0)
    price_per_day: Decimal = Field(default=Decimal(0), ge=0)
    price_per_week: Decimal = Field(default=Decimal(0), ge=0)
    price_per_month: Decimal = Field(default=Decimal(0), ge=0)

    total_spaces: int = Field(default=1, ge=0)
    available_from: date
    available_to: date
    is_available: bool = True
    features: Optional[str] = None
    image_url: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class SpaceCreate(SpaceBase):
    booked_spaces: int = Field(default=0, ge=0)

    @field_validator("title", "location", "postcode", "address", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coordinates_as_text(cls, v):
        return str(v).strip() if isinstance(v, (int, float)) else v

    @field_validator("is_available", mode="before")
    @classmethod
    def normalize_availability(cls, v):
        if v is None:
            return True
        return coerce_bool(v, "is_available")

    @model_validator(mode="after")
    def check_window_and_capacity(self):
        if self.available_from > self.available_to:
            raise ValueError("available_from must not be after available_to")
        if self.booked_spaces > self.total_spaces:
            raise ValueError("booked_spaces cannot exceed total_spaces")
        return self


class SpaceOut(BaseModel):
    id: UUID
    host_id: UUID
    title: str
    description: Optional[str] = None
    location: str
    postcode: str
    address: str
    latitude: str
    longitude: str
    what3words: Optional[str] = None
    available_days: Optional[str] = None
    price_per_hour: float
    price_per_day: float
    price_per_week: float
    price_per_month: float
    total_spaces: int
    booked_spaces: int
    available_spaces: int
    available_from: date
    available_to: date
    is_available: bool
    features: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def feature_list(self) -> List[str]:
        return split_features(self.features)


class SpaceSearchParams(BaseModel):
    q: Optional[str] = None
    available: Optional[str] = None
    limit: Optional[int] = None
    sort: Optional[Literal["price_asc"]] = None
