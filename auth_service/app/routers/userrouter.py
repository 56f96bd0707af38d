from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core.auth import validate_current_token
from shared.core.database import get_auth_db, get_parking_db
from shared.core.schemas import UserToken
from ..schemas import userschema
from ..services import userservices

router = APIRouter(prefix="/api/user", tags=["Parkpal User"])


@router.get("/me", response_model=userschema.UserProfile)
def me(
        auth_db: Session = Depends(get_auth_db),
        parking_db: Session = Depends(get_parking_db),
        current_user: UserToken = Depends(validate_current_token)):
    return userservices.get_profile(auth_db, parking_db, current_user)
