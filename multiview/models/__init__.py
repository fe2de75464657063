"""
Módulo models com os modelos SQLAlchemy.
"""
from multiview.models.user import User, UserRole
from multiview.models.stream import Stream, StreamProtocol
from multiview.models.recording import Recording, RecordingStatus, RecordingFormat, StorageType
from multiview.models.notification import Notification, NotificationType

__all__ = [
    "User",
    "UserRole",
    "Stream",
    "StreamProtocol",
    "Recording",
    "RecordingStatus",
    "RecordingFormat",
    "StorageType",
    "Notification",
    "NotificationType"
]
