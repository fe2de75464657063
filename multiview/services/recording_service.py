"""
Serviço de gravações.
"""
from sqlalchemy.orm import Session
from multiview.models.recording import Recording, RecordingStatus
from typing import Optional, List
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class RecordingService:
    """Serviço para gerenciar gravações."""

    @staticmethod
    def get_recording_by_id(db: Session, recording_id: str) -> Optional[Recording]:
        """Obtém uma gravação pelo ID."""
        return db.query(Recording).filter(Recording.id == recording_id).first()

    @staticmethod
    def get_due_recordings(db: Session, now: datetime) -> List[Recording]:
        """Gravações agendadas cujo horário já chegou."""
        return db.query(Recording).filter(
            Recording.status == RecordingStatus.SCHEDULED,
            Recording.scheduled_at <= now
        ).order_by(Recording.scheduled_at.asc()).all()

    @staticmethod
    def update_recording(db: Session, recording_id: str, **kwargs) -> Optional[Recording]:
        """
        Atualiza apenas os campos indicados de uma gravação.

        Valores None são gravados como NULL; campos omitidos não mudam.
        """
        recording = RecordingService.get_recording_by_id(db, recording_id)
        if recording:
            for key, value in kwargs.items():
                if not hasattr(recording, key):
                    raise AttributeError(f"Recording não tem o campo '{key}'")
                setattr(recording, key, value)
            db.commit()
            db.refresh(recording)
        return recording
