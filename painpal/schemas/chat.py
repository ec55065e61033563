from __future__ import annotations
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict


# ----------------------
# Chat Message Schemas
# ----------------------


class ChatMessageCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Message text")
    is_from_user: bool = True


class ChatMessage(BaseModel):
    id: int
    user_id: int
    content: str
    is_from_user: bool
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


# ----------------------
# Companion / Summary Schemas
# ----------------------


class DailySummaryResponse(BaseModel):
    summary: str


class PatternInsightsResponse(BaseModel):
    insights: str


class DashboardStatsResponse(BaseModel):
    day_streak: int = Field(..., ge=0, description="Consecutive days with a pain log, ending today")
    average_pain: float = Field(..., description="Mean of the 7 most recent pain levels")
    latest_mood: Optional[int] = None
    active_interventions: int
