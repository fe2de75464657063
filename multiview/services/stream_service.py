"""
Serviço de streams (apenas leitura para o ciclo de gravação).
"""
from sqlalchemy.orm import Session
from multiview.models.stream import Stream
from typing import Optional


class StreamService:
    """Serviço para consultar streams."""

    @staticmethod
    def get_stream_by_id(db: Session, stream_id: str) -> Optional[Stream]:
        """Obtém um stream pelo ID."""
        return db.query(Stream).filter(Stream.id == stream_id).first()
