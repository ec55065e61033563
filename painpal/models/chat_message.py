# models/chat_message.py

from sqlalchemy import Column, Boolean, DateTime, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from painpal.core.config import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, autoincrement=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_from_user = Column(Boolean, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)

    user = relationship("User", back_populates="chat_messages")
