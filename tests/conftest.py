import asyncio
import os
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

# Antes de importar multiview: o engine global é criado no import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

from multiview.services.notification_emitter import NotificationEmitter  # noqa: E402
from multiview.utils.storage_manager import StorageManager  # noqa: E402
from multiview.workers.recording_supervisor import RecordingSupervisor  # noqa: E402


class FakeProcess:
    """Processo FFmpeg simulado, controlado pelo teste."""

    def __init__(self, respond_to_quit=True, quit_exit_code=255):
        self.pid = 4242
        self.respond_to_quit = respond_to_quit
        self.quit_exit_code = quit_exit_code
        self.exit_code = None
        self.quit_requests = 0
        self.killed = False
        self.read_error = None
        self._chunks = asyncio.Queue()
        self._exited = asyncio.Event()

    def emit(self, text):
        self._chunks.put_nowait(text.encode())

    def exit(self, code):
        if self.exit_code is None:
            self.exit_code = code
            self._chunks.put_nowait(b"")
            self._exited.set()

    def fail_reading(self, error):
        self.read_error = error
        self._chunks.put_nowait(b"")

    async def read_diagnostics(self):
        chunk = await self._chunks.get()
        if not chunk and self.read_error is not None:
            raise self.read_error
        return chunk

    async def request_quit(self):
        self.quit_requests += 1
        if self.respond_to_quit:
            self.exit(self.quit_exit_code)

    def kill(self):
        self.killed = True
        self.exit(-9)

    async def wait(self):
        await self._exited.wait()
        return self.exit_code


class FakeProcessHost:
    def __init__(self):
        self.calls = []
        self.processes = []
        self.spawn_error = None
        self.next_process_options = {}

    async def spawn(self, command, args):
        self.calls.append((command, list(args)))
        if self.spawn_error is not None:
            raise self.spawn_error
        process = FakeProcess(**self.next_process_options)
        self.processes.append(process)
        return process


class FakeStore:
    def __init__(self):
        self.recordings = {}
        self.streams = {}
        self.updates = []
        self.notifications = []
        self.update_error = None
        self.notification_error = None

    def add(self, recording_id="r1", stream_id="s1", user_id="u1", name="Camera 1",
            url="https://h/x.m3u8", protocol="HLS", format="MP4"):
        self.streams[stream_id] = SimpleNamespace(id=stream_id, name=name, url=url, protocol=protocol)
        self.recordings[recording_id] = SimpleNamespace(
            id=recording_id, stream_id=stream_id, user_id=user_id, format=format,
            status="PENDING", file_path=None, file_size=None, duration=None,
            error=None, started_at=None, ended_at=None
        )
        return self.recordings[recording_id]

    async def find_recording(self, recording_id):
        return self.recordings.get(recording_id)

    async def find_stream(self, stream_id):
        return self.streams.get(stream_id)

    async def update_recording(self, recording_id, **fields):
        if self.update_error is not None:
            raise self.update_error
        self.updates.append((recording_id, fields))
        recording = self.recordings[recording_id]
        for key, value in fields.items():
            setattr(recording, key, value)
        return recording

    async def create_notification(self, **fields):
        if self.notification_error is not None:
            raise self.notification_error
        self.notifications.append(fields)
        return SimpleNamespace(**fields)

    def terminal_updates(self, recording_id):
        return [
            fields for rid, fields in self.updates
            if rid == recording_id and fields.get("status") in ("COMPLETED", "FAILED")
        ]


class FakePublisher:
    def __init__(self):
        self.events = []

    async def publish_to_user(self, user_id, event, payload):
        self.events.append((user_id, event, payload))

    def named(self, event):
        return [payload for _, name, payload in self.events if name == event]


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 5, 17, 12, 30, 45, 123000)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
def host():
    return FakeProcessHost()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def supervisor(store, publisher, host, clock, tmp_path):
    return RecordingSupervisor(
        store=store,
        emitter=NotificationEmitter(store, publisher),
        process_host=host,
        storage=StorageManager(str(tmp_path / "recordings")),
        ffmpeg_path="ffmpeg",
        stop_timeout=0.05,
        clock=clock
    )
