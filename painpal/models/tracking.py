# models/tracking.py

from sqlalchemy import Column, DateTime, Integer, JSON, ForeignKey, Text
from sqlalchemy.orm import relationship
from painpal.core.config import Base


class PainLog(Base):
    __tablename__ = "pain_logs"

    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    pain_level = Column(Integer, nullable=False)  # 1-10
    tags = Column(JSON, nullable=False, default=list)  # ["lower back", ...]
    notes = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, index=True)

    user = relationship("User", back_populates="pain_logs")


class MoodLog(Base):
    __tablename__ = "mood_logs"

    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    mood = Column(Integer, nullable=False)  # 1-5 (very sad to very happy)
    anxiety_level = Column(Integer, nullable=False)  # 1-10
    triggers = Column(JSON, nullable=False, default=list)
    helpers = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, index=True)

    user = relationship("User", back_populates="mood_logs")
