import logging
from typing import Any, Iterable, List, Optional
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from parking_service.app.models.spaces import Space
from parking_service.app.schemas.space_schemas import SpaceCreate, SpaceOut, SpaceSearchParams
from shared.core.config import Settings
from shared.helpers.json_response_helper import error_response
from shared.helpers.value_helper import coerce_bool
from shared.utils.enums import ErrorKind

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (Space.title, Space.location, Space.address, Space.postcode)


def parse_available(value: Optional[str]) -> Optional[bool]:
    # a bare ?available with no value still asks for open spaces
    if value is not None and not value.strip():
        return True
    return coerce_bool(value, "available")


def resolve_limit(settings: Settings, limit: Optional[int]) -> int:
    if limit is None:
        return settings.SEARCH_DEFAULT_LIMIT
    return min(limit, settings.SEARCH_MAX_LIMIT)


def search_spaces(db: Session, settings: Settings, params: SpaceSearchParams) -> List[SpaceOut]:
    only_available = parse_available(params.available)

    query = db.query(Space)

    if params.q and params.q.strip():
        # % and _ in the search text are literal characters, not wildcards
        term = params.q.strip()
        query = query.filter(or_(*(field.icontains(term, autoescape=True) for field in SEARCH_FIELDS)))

    if only_available:
        query = query.filter(Space.is_available == True)

    if params.sort == "price_asc":
        query = query.order_by(Space.price_per_day.asc(), Space.created_at.desc())
    else:
        query = query.order_by(Space.created_at.desc())

    try:
        rows = query.limit(resolve_limit(settings, params.limit)).all()
    except SQLAlchemyError:
        logger.exception("Space search failed for %r", params.model_dump())
        return error_response(message="Query failed", kind=ErrorKind.UPSTREAM_FAILURE)

    logger.info("Space search q=%r available=%s returned %d rows",
                params.q, only_available, len(rows))
    return [SpaceOut.model_validate(row) for row in rows]


def list_spaces(db: Session, available: Optional[str]) -> List[SpaceOut]:
    query = db.query(Space)

    if parse_available(available):
        query = query.filter(Space.is_available == True)

    try:
        rows = query.order_by(Space.created_at.desc()).all()
    except SQLAlchemyError:
        logger.exception("Listing spaces failed")
        return error_response(message="Query failed", kind=ErrorKind.UPSTREAM_FAILURE)

    return [SpaceOut.model_validate(row) for row in rows]


def get_space_model(db: Session, space_id: UUID) -> Space:
    space = db.query(Space).filter(Space.id == space_id).first()
    if not space:
        return error_response(message="Space not found", kind=ErrorKind.NOT_FOUND)
    return space


def get_space(db: Session, space_id: UUID) -> SpaceOut:
    return SpaceOut.model_validate(get_space_model(db, space_id))


def get_host_space_ids(db: Session, host_id: UUID) -> List[UUID]:
    rows = db.query(Space.id).filter(Space.host_id == host_id).all()
    return [row.id for row in rows]


def create_space(db: Session, data: SpaceCreate) -> SpaceOut:
    space = Space(**data.model_dump())

    db.add(space)
    db.commit()
    db.refresh(space)

    return SpaceOut.model_validate(space)


def import_spaces(db: Session, rows: Iterable[dict[str, Any]]) -> List[SpaceOut]:
    """Validate legacy listing rows and insert them.

    Rows exported from the old document store carry availability flags as
    "true"/"false" strings and numbers as text; they are normalized here so
    the table only ever holds real booleans. Every row is validated before
    anything is written.
    """
    validated: List[SpaceCreate] = []
    for index, row in enumerate(rows):
        try:
            validated.append(SpaceCreate.model_validate(row))
        except ValidationError as e:
            logger.warning("Rejected space row %d: %s", index, e)
            return error_response(
                message=f"Invalid space row {index}: {e.errors()[0].get('msg')}",
                kind=ErrorKind.INVALID_INPUT
            )

    spaces = [Space(**data.model_dump()) for data in validated]
    db.add_all(spaces)
    db.commit()
    for space in spaces:
        db.refresh(space)

    logger.info("Imported %d spaces", len(spaces))
    return [SpaceOut.model_validate(space) for space in spaces]
