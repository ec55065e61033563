# schemas/user.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from datetime import datetime


# =====================================================================
# REQUEST SCHEMAS
# =====================================================================

class UserCreate(BaseModel):
    """Registration payload sent by the client after identity-provider sign-in."""
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    external_id: str = Field(
        ...,
        min_length=1,
        description="Opaque identity-provider token (e.g. Firebase UID)",
    )

    @field_validator('name', 'external_id')
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Value must not be blank')
        return v


# =====================================================================
# RECORD SCHEMAS
# =====================================================================

class User(BaseModel):
    """Stored user record."""
    id: int
    email: str
    name: str
    external_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
