from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from shared.core.database import get_auth_db as get_db
from ..schemas import authschema
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Parkpal Auth"])


@router.post("/google", response_model=authschema.AuthenticationResponse)
def google_login(
        req: authschema.GoogleAuthRequest,
        request: Request,
        db: Session = Depends(get_db)):
    return authservices.google_login(request.app.state.settings, db, req)
