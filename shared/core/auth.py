from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from shared.core.config import Settings
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.enums import ErrorKind

security = HTTPBearer(auto_error=False)


def _require_secret(settings: Settings) -> str:
    if not settings.JWT_SECRET:
        return error_response(
            message="Authentication is not configured",
            kind=ErrorKind.CONFIGURATION
        )
    return settings.JWT_SECRET


def create_access_token(settings: Settings, user: Users) -> str:
    expires = datetime.now(timezone.utc) + \
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload = {
        "user_id": str(user.id),
        "email": user.email,
        "role": user.role,
        "name": user.full_name,
        "exp": expires,
    }
    return jwt.encode(payload, _require_secret(settings),
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(settings: Settings, token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, _require_secret(settings),
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except (JWTError, ValueError):
        return error_response(
            message="Invalid or expired token",
            kind=ErrorKind.UNAUTHORIZED
        )


def validate_current_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None:
        return error_response(
            message="Not authenticated",
            kind=ErrorKind.UNAUTHORIZED
        )

    user_data = verify_token(request.app.state.settings, credentials.credentials)

    user = db.query(Users).filter(Users.id == _as_uuid(user_data.user_id)).first()

    if not user:
        return error_response(
            message="User not found",
            kind=ErrorKind.UNAUTHORIZED
        )

    if not user.is_active:
        return error_response(
            message="User is not active. Access denied",
            kind=ErrorKind.FORBIDDEN
        )

    return user_data


def _as_uuid(value: str):
    try:
        return UUID(value)
    except ValueError:
        return error_response(message="Invalid token structure",
                              kind=ErrorKind.UNAUTHORIZED)
