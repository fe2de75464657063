from datetime import datetime

import pytest

from multiview.utils.storage_manager import StorageManager, filename_timestamp, sanitize_name


def test_sanitize_name_replaces_non_alphanumerics():
    assert sanitize_name("Câmera 1 / Hall-B") == "C_mera_1___Hall_B"


def test_filename_timestamp_has_no_colons_or_dots():
    moment = datetime(2024, 5, 17, 12, 30, 45, 123456)

    assert filename_timestamp(moment) == "2024-05-17T12-30-45-123Z"


def test_build_recording_path_uses_format_extension(tmp_path):
    storage = StorageManager(str(tmp_path))
    moment = datetime(2024, 1, 2, 3, 4, 5)

    assert storage.build_recording_path("Lobby Cam", "MKV", moment) == tmp_path / "Lobby_Cam_2024-01-02T03-04-05-000Z.mkv"
    assert storage.build_recording_path("Lobby Cam", "MP4", moment).suffix == ".mp4"


@pytest.mark.asyncio
async def test_ensure_directory_creates_nested_path(tmp_path):
    storage = StorageManager(str(tmp_path / "a" / "b" / "recordings"))

    directory = await storage.ensure_directory()
    again = await storage.ensure_directory()

    assert directory.is_dir()
    assert again == directory


@pytest.mark.asyncio
async def test_get_file_size(tmp_path):
    storage = StorageManager(str(tmp_path))
    target = tmp_path / "out.mp4"
    target.write_bytes(b"0123456789")

    assert await storage.get_file_size(str(target)) == 10
    assert await storage.get_file_size(str(tmp_path / "missing.mp4")) is None
    assert await storage.get_file_size(str(tmp_path)) is None
