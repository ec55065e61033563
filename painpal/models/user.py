# models/user.py

from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship
from painpal.core.config import Base


class User(Base):
    __tablename__ = "users"

    # Ids are allocated from id_counters, never by the database
    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    external_id = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)

    # ---- Relationships ----
    pain_logs = relationship("PainLog", back_populates="user", cascade="all, delete-orphan")
    mood_logs = relationship("MoodLog", back_populates="user", cascade="all, delete-orphan")
    interventions = relationship("Intervention", back_populates="user", cascade="all, delete-orphan")
    chat_messages = relationship("ChatMessage", back_populates="user", cascade="all, delete-orphan")
