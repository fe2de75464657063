"""
Modelo Stream para as fontes de vídeo monitoradas.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Text, Integer, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from multiview.core.database import Base
from multiview.models.user import generate_id
import enum


class StreamProtocol(str, enum.Enum):
    """Enum de protocolos de ingestão."""
    SRT = "SRT"
    RTMP = "RTMP"
    RTMPS = "RTMPS"
    RTSP = "RTSP"
    HLS = "HLS"


class Stream(Base):
    """Modelo de stream."""
    __tablename__ = "streams"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    url = Column(Text, nullable=False)
    protocol = Column(Enum(StreamProtocol), nullable=False)
    is_active = Column(Boolean, default=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    order = Column(Integer, default=0)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime)

    # Relacionamentos
    recordings = relationship("Recording", back_populates="stream", cascade="all, delete-orphan")
