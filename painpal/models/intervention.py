# models/intervention.py

from sqlalchemy import Column, Boolean, DateTime, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from painpal.core.config import Base


class Intervention(Base):
    __tablename__ = "interventions"

    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    frequency = Column(Text, nullable=False)
    current_streak = Column(Integer, nullable=False, default=0)  # derived, rewritten on each log
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="interventions")
    logs = relationship("InterventionLog", back_populates="intervention", cascade="all, delete-orphan")


class InterventionLog(Base):
    __tablename__ = "intervention_logs"

    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    intervention_id = Column(
        Integer, ForeignKey("interventions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pain_level = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, index=True)

    intervention = relationship("Intervention", back_populates="logs")
