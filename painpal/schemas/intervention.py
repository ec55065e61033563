from __future__ import annotations
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict


# ----------------------
# Intervention Schemas
# ----------------------


class InterventionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    frequency: str = Field(
        ..., min_length=1, description="Free text, e.g. 'daily' or 'twice a week'"
    )


class Intervention(BaseModel):
    id: int
    user_id: int
    name: str
    frequency: str
    current_streak: int = Field(0, ge=0, description="Consecutive days logged, ending today")
    is_active: bool = True
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ----------------------
# Intervention Log Schemas
# ----------------------


class InterventionLogCreate(BaseModel):
    """Body of POST /interventions/{id}/logs; the parent id comes from the path."""

    pain_level: int = Field(..., ge=1, le=10, description="Pain level after the intervention")
    notes: Optional[str] = None


class InterventionLog(BaseModel):
    id: int
    user_id: int
    intervention_id: int
    pain_level: int
    notes: Optional[str] = None
    date: datetime

    model_config = ConfigDict(from_attributes=True)
