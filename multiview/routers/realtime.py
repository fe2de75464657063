"""
Rota WebSocket do canal em tempo real.
"""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query, status
from typing import Optional
from multiview.core.security import InvalidTokenError, get_user_id_from_token
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime_socket(
    websocket: WebSocket,
    token: Optional[str] = Query(None, description="Token JWT de acesso")
):
    """
    Sessão em tempo real de um utilizador.

    O servidor apenas publica eventos; mensagens do cliente são ignoradas.
    """
    try:
        user_id = get_user_id_from_token(token)
    except InvalidTokenError as e:
        logger.info(f"Conexão WebSocket recusada: {e}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    manager = websocket.app.state.connection_manager
    await manager.connect(user_id, websocket)

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(user_id, websocket)
