"""
Módulo schemas com os eventos Pydantic enviados em tempo real.
"""
from multiview.schemas.events import (
    RECORDING_STATUS_UPDATE,
    RECORDING_PROGRESS,
    NOTIFICATION_NEW,
    RecordingStatusEvent,
    RecordingProgressEvent,
    NotificationEvent,
    RealtimeMessage
)

__all__ = [
    "RECORDING_STATUS_UPDATE",
    "RECORDING_PROGRESS",
    "NOTIFICATION_NEW",
    "RecordingStatusEvent",
    "RecordingProgressEvent",
    "NotificationEvent",
    "RealtimeMessage"
]
