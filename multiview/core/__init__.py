"""
Módulo core com configurações, banco de dados, scheduler e segurança.
"""
from multiview.core.config import settings
from multiview.core.database import Base, engine, SessionLocal
from multiview.core.exceptions import (
    RecordingError,
    RecordingNotFoundError,
    RecordingAlreadyActiveError,
    RecordingNotActiveError
)
from multiview.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_token,
    get_user_id_from_token
)

__all__ = [
    "settings",
    "Base",
    "engine",
    "SessionLocal",
    "RecordingError",
    "RecordingNotFoundError",
    "RecordingAlreadyActiveError",
    "RecordingNotActiveError",
    "InvalidTokenError",
    "create_access_token",
    "decode_token",
    "get_user_id_from_token"
]
