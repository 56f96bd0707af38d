import uuid
from sqlalchemy import TIMESTAMP, Boolean, Column, String, Text, Uuid, func
from sqlalchemy.orm import validates
from ..core.database import AuthBase
from ..utils.enums import UserRole


class Users(AuthBase):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.DRIVER.value)
    bio = Column(Text, nullable=True)
    avatar_url = Column(Text, nullable=True)
    stripe_customer_id = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    @validates("full_name")
    def trim_name(self, key, value):
        return value.strip() if value else value
