"""
Storage Manager - Gestão do storage local das gravações.
"""
import re
import logging
from pathlib import Path
from typing import Optional
from datetime import datetime
import aiofiles.os

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def sanitize_name(name: str) -> str:
    """Substitui todo caractere fora de [A-Za-z0-9] por `_`."""
    return _UNSAFE_CHARS.sub("_", name)


def filename_timestamp(moment: datetime) -> str:
    """Timestamp ISO-8601 (UTC, milissegundos) com `:` e `.` trocados por `-`."""
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


def recording_extension(recording_format: str) -> str:
    return "mkv" if recording_format == "MKV" else "mp4"


class StorageManager:
    """Gerenciador do storage local de gravações."""

    def __init__(self, recordings_path: str):
        self.recordings_path = Path(recordings_path)

    def build_recording_path(self, stream_name: str, recording_format: str, moment: datetime) -> Path:
        """
        Caminho do ficheiro de uma nova gravação.

        Formato: <nome-sanitizado>_<timestamp>.<mp4|mkv>
        """
        filename = (
            f"{sanitize_name(stream_name)}_{filename_timestamp(moment)}"
            f".{recording_extension(recording_format)}"
        )
        return self.recordings_path / filename

    async def ensure_directory(self) -> Path:
        """Garante que o diretório de gravações existe (criação recursiva)."""
        directory = self.recordings_path
        if not await aiofiles.os.path.exists(directory):
            await aiofiles.os.makedirs(directory, exist_ok=True)
            logger.info(f"📁 Diretório criado: {directory}")
        return directory

    async def file_exists(self, file_path: str) -> bool:
        return await aiofiles.os.path.isfile(file_path)

    async def get_file_size(self, file_path: str) -> Optional[int]:
        """
        Tamanho do ficheiro em bytes.

        Returns:
            Tamanho ou None se o ficheiro não existir
        """
        if not await self.file_exists(file_path):
            return None

        try:
            stat = await aiofiles.os.stat(file_path)
        except FileNotFoundError:
            return None
        return stat.st_size
