import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from multiview.core.security import create_access_token
from multiview.routers import realtime
from multiview.services.notification_emitter import NotificationEmitter
from multiview.services.realtime import ConnectionManager


class RecordingSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


@pytest.mark.asyncio
async def test_publish_reaches_every_session_of_user():
    manager = ConnectionManager()
    first, second, other = RecordingSocket(), RecordingSocket(), RecordingSocket()
    await manager.connect("u1", first)
    await manager.connect("u1", second)
    await manager.connect("u2", other)

    await manager.publish_to_user("u1", "recording:progress", {"recordingId": "r1", "duration": 3})

    expected = {"event": "recording:progress", "data": {"recordingId": "r1", "duration": 3}}
    assert first.sent == [expected]
    assert second.sent == [expected]
    assert other.sent == []


@pytest.mark.asyncio
async def test_publish_without_sessions_is_noop():
    manager = ConnectionManager()

    await manager.publish_to_user("nobody", "recording:statusUpdate", {"recordingId": "r1", "status": "FAILED"})

    assert manager.connection_count() == 0


@pytest.mark.asyncio
async def test_failed_session_is_dropped():
    manager = ConnectionManager()
    healthy, broken = RecordingSocket(), RecordingSocket(fail=True)
    await manager.connect("u1", healthy)
    await manager.connect("u1", broken)

    await manager.publish_to_user("u1", "notification:new", {"type": "SYSTEM", "streamId": None})

    assert manager.connection_count("u1") == 1
    assert len(healthy.sent) == 1


@pytest.mark.asyncio
async def test_emitter_payloads_use_client_keys():
    class Store:
        def __init__(self):
            self.created = []

        async def create_notification(self, **fields):
            self.created.append(fields)

    class Publisher:
        def __init__(self):
            self.events = []

        async def publish_to_user(self, user_id, event, payload):
            self.events.append((user_id, event, payload))

    store, publisher = Store(), Publisher()
    emitter = NotificationEmitter(store, publisher)

    await emitter.status_changed("u1", "r1", "RECORDING")
    await emitter.progress("u1", "r1", 42)
    await emitter.notify("u1", "RECORDING_FAILED", "Gravação falhou: Camera 1", stream_id="s1")

    assert publisher.events == [
        ("u1", "recording:statusUpdate", {"recordingId": "r1", "status": "RECORDING"}),
        ("u1", "recording:progress", {"recordingId": "r1", "duration": 42}),
        ("u1", "notification:new", {"type": "RECORDING_FAILED", "streamId": "s1"}),
    ]
    assert store.created[0]["message"] == "Gravação falhou: Camera 1"
    assert store.created[0]["user_id"] == "u1"


def _realtime_app():
    app = FastAPI()
    app.include_router(realtime.router)
    app.state.connection_manager = ConnectionManager()
    return app


def test_websocket_receives_events_for_its_user():
    app = _realtime_app()
    manager = app.state.connection_manager
    token = create_access_token({"sub": "u1"})

    with TestClient(app) as client:
        with client.websocket_connect(f"/ws?token={token}") as websocket:
            client.portal.call(
                manager.publish_to_user, "u1", "recording:statusUpdate",
                {"recordingId": "r1", "status": "RECORDING"}
            )
            message = websocket.receive_json()

    assert message == {"event": "recording:statusUpdate", "data": {"recordingId": "r1", "status": "RECORDING"}}


@pytest.mark.parametrize("query", ["", "?token=not-a-jwt"])
def test_websocket_rejects_missing_or_invalid_token(query):
    client = TestClient(_realtime_app())

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(f"/ws{query}"):
            pass

    assert exc_info.value.code == 1008
