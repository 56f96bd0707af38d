from typing import List, Literal, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.config import Settings
from shared.core.database import get_parking_db as get_db
from ..core.dependencies import get_settings
from ..crud import space_crud as crud
from ..schemas.space_schemas import SpaceOut, SpaceSearchParams

router = APIRouter(tags=["spaces"])


@router.get("/api/spaces/search", response_model=List[SpaceOut])
def search_spaces(
    q: Optional[str] = Query(None, description="Matches title, location, address or postcode"),
    available: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    sort: Optional[Literal["price_asc"]] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    params = SpaceSearchParams(q=q, available=available, limit=limit, sort=sort)
    return crud.search_spaces(db, settings, params)


@router.get("/api/get/spaces/all", response_model=List[SpaceOut])
def get_all_spaces(
    available: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    return crud.list_spaces(db, available)


@router.get("/api/spaces/{space_id}", response_model=SpaceOut)
def get_space(space_id: UUID, db: Session = Depends(get_db)):
    return crud.get_space(db, space_id)
