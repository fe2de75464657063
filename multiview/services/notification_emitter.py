"""
Emissor de notificações do ciclo de vida das gravações.
"""
import logging
from typing import Optional
from multiview.schemas.events import (
    RECORDING_STATUS_UPDATE,
    RECORDING_PROGRESS,
    NOTIFICATION_NEW,
    RecordingStatusEvent,
    RecordingProgressEvent,
    NotificationEvent
)

logger = logging.getLogger(__name__)


class NotificationEmitter:
    """Converte eventos do supervisor em notificações persistidas e mensagens em tempo real."""

    def __init__(self, store, publisher):
        self.store = store
        self.publisher = publisher

    async def status_changed(self, user_id: str, recording_id: str, status: str):
        event = RecordingStatusEvent(recording_id=recording_id, status=status)
        await self.publisher.publish_to_user(user_id, RECORDING_STATUS_UPDATE, event.to_payload())

    async def progress(self, user_id: str, recording_id: str, duration: int):
        event = RecordingProgressEvent(recording_id=recording_id, duration=duration)
        await self.publisher.publish_to_user(user_id, RECORDING_PROGRESS, event.to_payload())

    async def notify(
        self,
        user_id: str,
        notification_type: str,
        message: str,
        stream_id: Optional[str] = None,
        meta_data: Optional[dict] = None
    ):
        """Persiste a notificação e avisa as sessões abertas do utilizador."""
        await self.store.create_notification(
            type=notification_type,
            message=message,
            user_id=user_id,
            stream_id=stream_id,
            meta_data=meta_data
        )

        event = NotificationEvent(type=notification_type, stream_id=stream_id)
        await self.publisher.publish_to_user(user_id, NOTIFICATION_NEW, event.to_payload())
        logger.debug(f"Notificação {notification_type} enviada ao utilizador {user_id}")
