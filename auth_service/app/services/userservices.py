import logging
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from parking_service.app.crud.space_crud import get_host_space_ids
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.enums import ErrorKind, UserRole
from ..schemas.userschema import UserProfile

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[Users]:
    return db.query(Users).filter(Users.email == email.strip().lower()).first()


def get_or_create_user(
        db: Session,
        email: str,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None) -> Tuple[Users, bool]:
    """Reuse the account registered under this email, or create one on first sign-in."""
    user = get_user_by_email(db, email)
    if user:
        return user, False

    user = Users(
        full_name=full_name or email.split("@")[0],
        email=email,
        role=UserRole.DRIVER.value,
        avatar_url=avatar_url,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # another sign-in for the same email won the race
        db.rollback()
        return get_user_by_email(db, email), False

    db.refresh(user)
    logger.info("Created user %s on first sign-in", user.id)
    return user, True


def get_profile(auth_db: Session, parking_db: Session, current_user: UserToken) -> UserProfile:
    user = auth_db.query(Users).filter(Users.id == UUID(current_user.user_id)).first()
    if not user:
        return error_response(message="User not found", kind=ErrorKind.NOT_FOUND)

    profile = UserProfile.model_validate(user)
    profile.space_ids = get_host_space_ids(parking_db, user.id)
    return profile
