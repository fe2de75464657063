"""
Modelo Recording para gravações de streams.
"""
from sqlalchemy import Column, String, DateTime, Enum, Text, Integer, BigInteger, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from multiview.core.database import Base
from multiview.models.user import generate_id
import enum


class RecordingStatus(str, enum.Enum):
    """Enum de status de gravação."""
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    RECORDING = "RECORDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class RecordingFormat(str, enum.Enum):
    """Enum de contentores de saída."""
    MP4 = "MP4"
    MKV = "MKV"


class StorageType(str, enum.Enum):
    """Enum de destinos de armazenamento."""
    LOCAL = "LOCAL"
    S3 = "S3"
    GOOGLE_DRIVE = "GOOGLE_DRIVE"


class Recording(Base):
    """Modelo de gravação."""
    __tablename__ = "recordings"

    id = Column(String(36), primary_key=True, default=generate_id)
    stream_id = Column(String(36), ForeignKey("streams.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    format = Column(Enum(RecordingFormat), nullable=False, default=RecordingFormat.MP4)
    status = Column(Enum(RecordingStatus), nullable=False, default=RecordingStatus.PENDING)
    storage_type = Column(Enum(StorageType), nullable=False, default=StorageType.LOCAL)
    storage_url = Column(Text)
    file_path = Column(Text)
    file_size = Column(BigInteger)
    duration = Column(Integer)
    error = Column(Text)
    scheduled_at = Column(DateTime, index=True)
    started_at = Column(DateTime)
    ended_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relacionamentos
    stream = relationship("Stream", back_populates="recordings")
