import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from parking_service.app.crud.space_crud import get_space_model
from parking_service.app.models.reviews import Review
from parking_service.app.schemas.review_schemas import ReviewCreate, ReviewOut, SpaceReviewsResponse
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.helpers.value_helper import mean_rounded
from shared.utils.enums import ErrorKind

logger = logging.getLogger(__name__)


def parse_space_id(space_id: Optional[str]) -> UUID:
    if not space_id or not space_id.strip():
        return error_response(message="space_id is required", kind=ErrorKind.INVALID_INPUT)
    try:
        return UUID(space_id.strip())
    except ValueError:
        return error_response(message="space_id is not a valid id", kind=ErrorKind.INVALID_INPUT)


def get_space_reviews(db: Session, space_id: Optional[str]) -> SpaceReviewsResponse:
    space_uuid = parse_space_id(space_id)

    try:
        rows = (
            db.query(Review)
            .filter(Review.space_id == space_uuid)
            .order_by(Review.created_at.desc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Failed to fetch reviews for space %s", space_uuid)
        return error_response(message="Failed to fetch reviews", kind=ErrorKind.UPSTREAM_FAILURE)

    logger.info("Found %d reviews for space %s", len(rows), space_uuid)

    return SpaceReviewsResponse(
        reviews=[ReviewOut.model_validate(row) for row in rows],
        average_rating=mean_rounded(row.rating for row in rows),
        total=len(rows),
    )


def create_review(db: Session, current_user: UserToken, req: ReviewCreate) -> ReviewOut:
    get_space_model(db, req.space_id)

    review = Review(
        space_id=req.space_id,
        user_id=UUID(current_user.user_id),
        rating=req.rating,
        comment=req.comment,
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return error_response(message="Rating must be between 1 and 5",
                              kind=ErrorKind.INVALID_INPUT)

    db.refresh(review)
    return ReviewOut.model_validate(review)
