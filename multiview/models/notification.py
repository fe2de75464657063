"""
Modelo Notification para o histórico de avisos ao utilizador.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Text, ForeignKey, JSON
from datetime import datetime
from multiview.core.database import Base
from multiview.models.user import generate_id
import enum


class NotificationType(str, enum.Enum):
    """Enum de tipos de notificação."""
    STREAM_ONLINE = "STREAM_ONLINE"
    STREAM_OFFLINE = "STREAM_OFFLINE"
    RECORDING_STARTED = "RECORDING_STARTED"
    RECORDING_COMPLETED = "RECORDING_COMPLETED"
    RECORDING_FAILED = "RECORDING_FAILED"
    SYSTEM = "SYSTEM"


class Notification(Base):
    """Modelo de notificação."""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_id)
    type = Column(Enum(NotificationType), nullable=False)
    message = Column(Text, nullable=False)
    stream_id = Column(String(36), ForeignKey("streams.id", ondelete="SET NULL"))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    is_read = Column(Boolean, default=False)
    meta_data = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)
