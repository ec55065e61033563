# models/id_counter.py

from sqlalchemy import Column, Integer, String
from painpal.core.config import Base


class IdCounter(Base):
    """Last id handed out for one collection (users, pain_logs, ...)."""
    __tablename__ = "id_counters"

    name = Column(String(50), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
