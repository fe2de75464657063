"""
Modelo User, dono de streams, gravações e notificações.
"""
from sqlalchemy import Column, String, DateTime, Enum
import uuid
from datetime import datetime
from multiview.core.database import Base
import enum


def generate_id() -> str:
    """Gera um id textual para chaves primárias."""
    return uuid.uuid4().hex


class UserRole(str, enum.Enum):
    """Enum de roles de utilizador."""
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    """Modelo de utilizador."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.USER)
    language = Column(String(10), default="pt")
    created_at = Column(DateTime, default=datetime.utcnow)
