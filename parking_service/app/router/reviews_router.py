from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_parking_db as get_db
from shared.core.schemas import UserToken
from ..crud import review_crud as crud
from ..schemas.review_schemas import ReviewCreate, ReviewOut, SpaceReviewsResponse

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("", response_model=SpaceReviewsResponse)
def get_reviews(
        space_id: Optional[str] = Query(None),
        db: Session = Depends(get_db)):
    return crud.get_space_reviews(db, space_id)


@router.post("", response_model=ReviewOut, status_code=201)
def create_review(
        req: ReviewCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.create_review(db, current_user, req)
