"""
Acesso assíncrono aos dados usados pelo supervisor de gravações.

Cada operação abre uma sessão curta e executa o ORM (bloqueante) numa
thread, mantendo o event loop livre para os processos supervisionados.
"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional
from sqlalchemy.orm import Session
from multiview.models.recording import Recording
from multiview.models.stream import Stream
from multiview.models.notification import Notification
from multiview.services.recording_service import RecordingService
from multiview.services.stream_service import StreamService
from multiview.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class DataStore:
    """Fachada de persistência para gravações, streams e notificações."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _run(self, operation: Callable[[Session], object]):
        db = self.session_factory()
        try:
            return operation(db)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def find_recording(self, recording_id: str) -> Optional[Recording]:
        return await asyncio.to_thread(
            self._run, lambda db: RecordingService.get_recording_by_id(db, recording_id)
        )

    async def find_stream(self, stream_id: str) -> Optional[Stream]:
        return await asyncio.to_thread(
            self._run, lambda db: StreamService.get_stream_by_id(db, stream_id)
        )

    async def find_due_recordings(self, now: datetime) -> List[Recording]:
        return await asyncio.to_thread(
            self._run, lambda db: RecordingService.get_due_recordings(db, now)
        )

    async def update_recording(self, recording_id: str, **fields) -> Optional[Recording]:
        """Atualização parcial: só os campos passados são alterados."""
        return await asyncio.to_thread(
            self._run, lambda db: RecordingService.update_recording(db, recording_id, **fields)
        )

    async def create_notification(self, **fields) -> Notification:
        return await asyncio.to_thread(
            self._run, lambda db: NotificationService.create_notification(db, **fields)
        )
