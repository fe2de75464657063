"""
Canal em tempo real: conexões WebSocket agrupadas por utilizador.
"""
import logging
from typing import Dict, List
from fastapi import WebSocket
from multiview.schemas.events import RealtimeMessage

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Mantém as conexões abertas de cada utilizador e publica eventos."""

    def __init__(self):
        self.connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, user_id: str, websocket: WebSocket):
        self.connections.setdefault(user_id, []).append(websocket)
        await websocket.accept()
        logger.info(f"Cliente conectado (utilizador {user_id}, {len(self.connections[user_id])} sessões)")

    def disconnect(self, user_id: str, websocket: WebSocket):
        sockets = self.connections.get(user_id)
        if not sockets:
            return

        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            del self.connections[user_id]
        logger.info(f"Cliente desconectado (utilizador {user_id})")

    def connection_count(self, user_id: str = None) -> int:
        if user_id is not None:
            return len(self.connections.get(user_id, []))
        return sum(len(sockets) for sockets in self.connections.values())

    async def publish_to_user(self, user_id: str, event: str, payload: dict):
        """
        Envia um evento a todas as sessões do utilizador.

        Melhor esforço: sessões cujo envio falha são descartadas e o erro
        não chega a quem publicou.
        """
        sockets = list(self.connections.get(user_id, []))
        if not sockets:
            return

        message = RealtimeMessage(event=event, data=payload).model_dump()

        for websocket in sockets:
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"Falha ao enviar '{event}' ao utilizador {user_id}: {e}")
                self.disconnect(user_id, websocket)
