import logging

import requests
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import Settings
from shared.helpers.json_response_helper import error_response
from shared.utils.enums import ErrorKind
from ..schemas import authschema
from ..schemas.userschema import UserResponse
from . import userservices

logger = logging.getLogger(__name__)

VERIFIED_VALUES = (True, "true", "True", "1", 1)


#### GOOGLE AUTHENTICATION ###

def fetch_google_identity(settings: Settings, access_token: str) -> dict:
    """Read the verified identity claims for a Google access token."""
    try:
        response = requests.get(
            settings.GOOGLE_USERINFO_URL,
            params={"alt": "json", "access_token": access_token},
            timeout=10,
        )
    except requests.RequestException:
        logger.exception("Google userinfo request failed")
        return error_response(
            message="Could not reach the sign-in provider",
            kind=ErrorKind.UPSTREAM_FAILURE
        )

    if response.status_code != 200:
        logger.warning("Google userinfo rejected token: HTTP %s", response.status_code)
        return error_response(
            message="Invalid access token",
            kind=ErrorKind.UNAUTHORIZED
        )

    id_info = response.json()

    email = id_info.get("email")
    if not email or id_info.get("verified_email") not in VERIFIED_VALUES:
        return error_response(
            message="Google email not verified",
            kind=ErrorKind.UNAUTHORIZED
        )

    return id_info


def google_login(
        settings: Settings,
        db: Session,
        req: authschema.GoogleAuthRequest) -> authschema.AuthenticationResponse:
    id_info = fetch_google_identity(settings, req.access_token)

    user, created = userservices.get_or_create_user(
        db,
        email=id_info["email"],
        full_name=id_info.get("name"),
        avatar_url=id_info.get("picture"),
    )

    if not user.is_active:
        return error_response(
            message="User is not active. Access denied",
            kind=ErrorKind.FORBIDDEN
        )

    return authschema.AuthenticationResponse(
        access_token=auth.create_access_token(settings, user),
        is_new_user=created,
        user=UserResponse.model_validate(user),
    )
