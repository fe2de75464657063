"""
Recording Scheduler - Inicia as gravações agendadas quando chega a hora.
"""
import logging
from datetime import datetime
from typing import Callable
from multiview.core.exceptions import RecordingAlreadyActiveError
from multiview.models.recording import RecordingStatus

logger = logging.getLogger(__name__)

JOB_ID = "start_due_recordings"


class RecordingScheduler:
    """Verifica periodicamente gravações SCHEDULED vencidas."""

    def __init__(
        self,
        store,
        supervisor,
        interval_seconds: int = 60,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        self.store = store
        self.supervisor = supervisor
        self.interval_seconds = interval_seconds
        self.clock = clock

    def register(self, scheduler):
        """Regista o job periódico no APScheduler."""
        scheduler.add_job(
            self.run_once,
            trigger="interval",
            seconds=self.interval_seconds,
            id=JOB_ID,
            replace_existing=True
        )
        logger.info(f"RecordingScheduler registado (a cada {self.interval_seconds}s)")

    async def run_once(self) -> int:
        """
        Executa um ciclo: inicia cada gravação vencida.

        Returns:
            Número de gravações disparadas
        """
        try:
            due = await self.store.find_due_recordings(self.clock())
        except Exception as e:
            logger.error(f"Erro no scheduler de gravações: {e}")
            return 0

        started = 0
        for recording in due:
            if await self._start(recording.id):
                started += 1

        return started

    async def _start(self, recording_id: str) -> bool:
        logger.info(f"Iniciando gravação agendada: {recording_id}")
        try:
            await self.supervisor.start(recording_id)
            return True

        except RecordingAlreadyActiveError:
            logger.debug(f"Gravação agendada já está ativa: {recording_id}")
            return False

        except Exception as e:
            logger.error(f"Falha ao iniciar gravação agendada {recording_id}: {e}")
            try:
                await self.store.update_recording(
                    recording_id,
                    status=RecordingStatus.FAILED,
                    ended_at=self.clock(),
                    error=f"Falha ao iniciar: {e}"
                )
            except Exception as update_error:
                logger.error(f"Erro ao marcar gravação {recording_id} como falhada: {update_error}")
            return False
