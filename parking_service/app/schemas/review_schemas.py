from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class ReviewCreate(BaseModel):
    space_id: UUID
    # range is enforced by the reviews table
    rating: int
    comment: Optional[str] = None


class ReviewOut(BaseModel):
    id: UUID
    space_id: UUID
    user_id: UUID
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SpaceReviewsResponse(BaseModel):
    reviews: List[ReviewOut]
    average_rating: float
    total: int
