"""
Módulo workers com tarefas em background.
"""
from multiview.workers.recording_supervisor import RecordingSupervisor
from multiview.workers.recording_scheduler import RecordingScheduler

__all__ = [
    "RecordingSupervisor",
    "RecordingScheduler"
]
