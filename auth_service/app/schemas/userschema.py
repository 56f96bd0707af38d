from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: UUID
    full_name: str
    email: str
    role: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserProfile(UserResponse):
    space_ids: List[UUID] = []
