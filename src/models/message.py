"""Direct message model."""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func

from src.database import Base


class Message(Base):
    """Direct message between two users, addressed by name."""

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_pair", "sender", "receiver"),)

    id = Column(Integer, primary_key=True, index=True)
    sender = Column(String(50), nullable=False)
    receiver = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
