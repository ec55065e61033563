from __future__ import annotations
from typing import List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict


# ----------------------
# Pain Log Schemas
# ----------------------


class PainLogCreate(BaseModel):
    pain_level: int = Field(..., ge=1, le=10, description="1 (none) to 10 (worst)")
    tags: List[str] = Field(
        default_factory=list, description="Free-text tags, e.g. body location"
    )
    notes: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"pain_level": 6, "tags": ["lower back"], "notes": "After a long drive"}
        }
    )


class PainLog(BaseModel):
    id: int
    user_id: int
    pain_level: int
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    date: datetime

    model_config = ConfigDict(from_attributes=True)


# ----------------------
# Mood Log Schemas
# ----------------------


class MoodLogCreate(BaseModel):
    mood: int = Field(..., ge=1, le=5, description="1 (very sad) to 5 (very happy)")
    anxiety_level: int = Field(..., ge=1, le=10)
    triggers: List[str] = Field(default_factory=list)
    helpers: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mood": 3,
                "anxiety_level": 4,
                "triggers": ["work"],
                "helpers": ["walk"],
                "notes": None,
            }
        }
    )


class MoodLog(BaseModel):
    id: int
    user_id: int
    mood: int
    anxiety_level: int
    triggers: List[str] = Field(default_factory=list)
    helpers: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    date: datetime

    model_config = ConfigDict(from_attributes=True)
