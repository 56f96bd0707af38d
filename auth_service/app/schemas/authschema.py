from pydantic import BaseModel, field_validator

from .userschema import UserResponse


# -------- Google --------

class GoogleAuthRequest(BaseModel):
    access_token: str

    @field_validator("access_token")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Missing access token")
        return v.strip()


class AuthenticationResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    is_new_user: bool
    user: UserResponse
