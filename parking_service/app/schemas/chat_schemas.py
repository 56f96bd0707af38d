from datetime import datetime
from typing import Any, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str
    conversation: List[ConversationTurn] = []

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v):
        if not v.strip():
            raise ValueError("message is required")
        return v.strip()

    @field_validator("conversation", mode="before")
    @classmethod
    def null_conversation(cls, v):
        return v or []


class ChatReply(BaseModel):
    message: str


class Location(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class NearbySpace(BaseModel):
    """Space as the client already holds it; unknown fields are passed back untouched."""
    title: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    postcode: Optional[str] = None
    latitude: Optional[Any] = None
    longitude: Optional[Any] = None
    price_per_day: Optional[float] = None

    model_config = {"extra": "allow"}


class NearbyChatRequest(ChatRequest):
    location: Location
    spaces: List[NearbySpace] = []


class NearbyChatReply(BaseModel):
    message: str
    timestamp: datetime
    parkingSpaces: List[dict]
    totalFound: int


class ChatMessageOut(BaseModel):
    id: UUID
    role: str
    content: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ChatHistory(BaseModel):
    messages: List[ChatMessageOut]
