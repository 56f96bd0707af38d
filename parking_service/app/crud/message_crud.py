import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from parking_service.app.models.messages import ChatMessage
from parking_service.app.schemas.chat_schemas import ChatMessageOut
from shared.helpers.json_response_helper import error_response
from shared.utils.enums import ChatRole, ErrorKind

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def save_exchange(db: Session, user_message: str, reply: str) -> bool:
    """Store one user/assistant pair. Failures are logged, never raised."""
    try:
        now = datetime.now(timezone.utc)
        db.add(ChatMessage(role=ChatRole.USER.value,
                           content=user_message, created_at=now))
        # reply sorts after the question even on a coarse clock
        db.add(ChatMessage(role=ChatRole.ASSISTANT.value, content=reply,
                           created_at=now + timedelta(microseconds=1)))
        db.commit()
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not store chat exchange")
        return False


def get_history(db: Session, limit: int = HISTORY_LIMIT) -> List[ChatMessageOut]:
    try:
        rows = (
            db.query(ChatMessage)
            .order_by(ChatMessage.created_at.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Error fetching chat history")
        return error_response(message="Failed to fetch chat history",
                              kind=ErrorKind.UPSTREAM_FAILURE)

    # newest N, shown oldest first
    return [ChatMessageOut.model_validate(row) for row in reversed(rows)]
