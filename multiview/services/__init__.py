"""
Módulo services com a lógica de negócio.
"""
from multiview.services.recording_service import RecordingService
from multiview.services.stream_service import StreamService
from multiview.services.notification_service import NotificationService
from multiview.services.data_store import DataStore
from multiview.services.realtime import ConnectionManager
from multiview.services.notification_emitter import NotificationEmitter

__all__ = [
    "RecordingService",
    "StreamService",
    "NotificationService",
    "DataStore",
    "ConnectionManager",
    "NotificationEmitter"
]
