from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_parking_db as get_db
from ..core.dependencies import get_completion_client
from ..crud import message_crud
from ..schemas.chat_schemas import ChatHistory, ChatReply, ChatRequest, NearbyChatReply, NearbyChatRequest
from ..services import chat_service
from ..services.completion_client import CompletionClient

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatReply)
def chat(
        req: ChatRequest,
        db: Session = Depends(get_db),
        completions: CompletionClient = Depends(get_completion_client)):
    return chat_service.chat(db, completions, req)


@router.post("/nearby", response_model=NearbyChatReply)
def chat_nearby(
        req: NearbyChatRequest,
        completions: CompletionClient = Depends(get_completion_client)):
    return chat_service.chat_nearby(completions, req)


@router.get("/history", response_model=ChatHistory)
def chat_history(db: Session = Depends(get_db)):
    return ChatHistory(messages=message_crud.get_history(db))
