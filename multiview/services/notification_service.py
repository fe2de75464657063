"""
Serviço de notificações.
"""
from sqlalchemy.orm import Session
from multiview.models.notification import Notification
from typing import Optional


class NotificationService:
    """Serviço para gerenciar notificações."""

    @staticmethod
    def create_notification(
        db: Session,
        type: str,
        message: str,
        user_id: str,
        stream_id: Optional[str] = None,
        meta_data: Optional[dict] = None
    ) -> Notification:
        """Cria uma nova notificação."""
        notification = Notification(
            type=type,
            message=message,
            user_id=user_id,
            stream_id=stream_id,
            meta_data=meta_data or {}
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification
