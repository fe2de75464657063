"""
Módulo utils com utilitários para FFmpeg e storage.
"""
from multiview.utils.ffmpeg_wrapper import FFmpegProcess, FFmpegProcessHost
from multiview.utils.storage_manager import StorageManager

__all__ = [
    "FFmpegProcess",
    "FFmpegProcessHost",
    "StorageManager"
]
