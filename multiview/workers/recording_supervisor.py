"""
Recording Supervisor - Lança, acompanha e finaliza os processos FFmpeg de gravação.

Cada gravação ativa tem um RecordingJob no registro do supervisor e uma task
que lê o progresso do stderr e trata o evento terminal (saída ou erro) uma
única vez. O estado persistido da gravação é a fonte de verdade para o resto
do sistema; o registro serve apenas para controlar concorrência e a posse
dos processos.
"""
import asyncio
import logging
import re
from datetime import datetime
from typing import Callable, Dict, List, Optional, Set
from multiview.core.exceptions import (
    RecordingNotFoundError,
    RecordingAlreadyActiveError,
    RecordingNotActiveError
)
from multiview.models.recording import RecordingStatus
from multiview.models.notification import NotificationType
from multiview.utils.ffmpeg_wrapper import build_recording_args, parse_elapsed_seconds

logger = logging.getLogger(__name__)

# 255 é o código do FFmpeg ao sair pela tecla "q"
CLEAN_EXIT_CODES = (0, 255)

_LINE_BREAK = re.compile(r"[\r\n]")
_MAX_PENDING_CHARS = 8192


class RecordingJob:
    """Supervisão em memória de um processo de gravação."""

    def __init__(
        self,
        recording_id: str,
        process,
        user_id: str,
        stream_id: str,
        stream_name: str,
        file_path: str,
        started_at: datetime
    ):
        self.recording_id = recording_id
        self.process = process
        self.user_id = user_id
        self.stream_id = stream_id
        self.stream_name = stream_name
        self.file_path = file_path
        self.started_at = started_at
        self.task: Optional[asyncio.Task] = None
        self.kill_timer: Optional[asyncio.TimerHandle] = None
        self.ready = asyncio.Event()
        self.finished = False


class RecordingSupervisor:
    """Supervisor dos processos de gravação."""

    def __init__(
        self,
        store,
        emitter,
        process_host,
        storage,
        ffmpeg_path: str = "ffmpeg",
        stop_timeout: float = 10.0,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        self.store = store
        self.emitter = emitter
        self.process_host = process_host
        self.storage = storage
        self.ffmpeg_path = ffmpeg_path
        self.stop_timeout = stop_timeout
        self.clock = clock
        self._jobs: Dict[str, RecordingJob] = {}
        self._starting: Set[str] = set()

    def list_active(self) -> List[str]:
        """IDs das gravações com processo supervisionado."""
        return list(self._jobs.keys())

    async def start(self, recording_id: str):
        """
        Inicia a gravação e retorna logo após o processo estar registado.

        Raises:
            RecordingNotFoundError: Se a gravação ou o stream não existirem
            RecordingAlreadyActiveError: Se a gravação já estiver a correr
        """
        if recording_id in self._jobs or recording_id in self._starting:
            raise RecordingAlreadyActiveError("Recording already active", recording_id)

        self._starting.add(recording_id)
        try:
            await self._start(recording_id)
        finally:
            self._starting.discard(recording_id)

    async def _start(self, recording_id: str):
        recording = await self.store.find_recording(recording_id)
        stream = await self.store.find_stream(recording.stream_id) if recording else None

        if recording is None or stream is None:
            raise RecordingNotFoundError("Recording or stream not found", recording_id)

        await self.storage.ensure_directory()

        started_at = self.clock()
        file_path = str(self.storage.build_recording_path(stream.name, recording.format, started_at))
        args = build_recording_args(stream.url, stream.protocol, file_path, recording.format)

        try:
            process = await self.process_host.spawn(self.ffmpeg_path, args)
        except OSError as e:
            logger.error(f"❌ Erro ao iniciar FFmpeg para gravação {recording_id}: {type(e).__name__}: {e}")
            try:
                await self._record_failure(
                    recording_id, recording.user_id, stream.id, stream.name, str(e)
                )
            except Exception:
                logger.exception(f"Erro ao registar falha da gravação {recording_id}")
            return

        job = RecordingJob(
            recording_id=recording_id,
            process=process,
            user_id=recording.user_id,
            stream_id=stream.id,
            stream_name=stream.name,
            file_path=file_path,
            started_at=started_at
        )
        self._jobs[recording_id] = job

        try:
            await self.store.update_recording(
                recording_id,
                status=RecordingStatus.RECORDING,
                started_at=started_at,
                file_path=file_path
            )
        except Exception:
            # Sem o estado RECORDING persistido o processo não pode continuar
            del self._jobs[recording_id]
            process.kill()
            await process.wait()
            raise

        job.task = asyncio.create_task(self._supervise(job))
        logger.info(f"Gravação iniciada: {stream.name} -> {file_path} (PID: {process.pid})")

        try:
            await self._announce(
                job.user_id,
                recording_id,
                stream.id,
                RecordingStatus.RECORDING,
                NotificationType.RECORDING_STARTED,
                f"Gravação iniciada: {stream.name}",
                {"recordingId": recording_id}
            )
        finally:
            job.ready.set()

    async def stop(self, recording_id: str):
        """
        Pede a paragem graciosa; o processo é morto se não sair dentro do timeout.

        O estado final chega depois, pelo tratamento da saída do processo.

        Raises:
            RecordingNotActiveError: Se não houver processo para a gravação
        """
        job = self._jobs.get(recording_id)
        if job is None:
            raise RecordingNotActiveError("Recording not active", recording_id)

        if job.kill_timer is None:
            loop = asyncio.get_running_loop()
            job.kill_timer = loop.call_later(self.stop_timeout, self._force_kill, job)

        logger.info(f"⏹️ Parando gravação: {recording_id}")
        await self._request_quit(job)

    async def shutdown(self):
        """Para todas as gravações ativas (paragem graciosa com kill de recurso)."""
        jobs = list(self._jobs.values())
        if not jobs:
            return

        logger.info(f"⏹️ Parando {len(jobs)} gravações ativas")

        for job in jobs:
            await self._request_quit(job)

        tasks = [job.task for job in jobs if job.task is not None]
        if tasks:
            await asyncio.wait(tasks, timeout=self.stop_timeout)

        for job in jobs:
            if not job.finished:
                logger.warning(f"Gravação forçada a parar: {job.recording_id}")
                job.process.kill()

        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("✓ Todas as gravações paradas")

    async def _request_quit(self, job: RecordingJob):
        try:
            await job.process.request_quit()
        except (BrokenPipeError, ConnectionResetError) as e:
            logger.warning(f"stdin do FFmpeg fechado ({job.recording_id}): {e}")

    def _force_kill(self, job: RecordingJob):
        if self._jobs.get(job.recording_id) is job:
            logger.warning(f"Gravação não parou em {self.stop_timeout}s, forçando kill: {job.recording_id}")
            job.process.kill()

    async def _supervise(self, job: RecordingJob):
        """Acompanha o processo até ao evento terminal."""
        await job.ready.wait()

        try:
            await self._watch_progress(job)
            exit_code = await job.process.wait()
        except Exception as e:
            logger.error(f"Erro no processo de gravação {job.recording_id}: {type(e).__name__}: {e}")
            job.process.kill()
            await self._finalize(job, error=str(e) or type(e).__name__)
        else:
            await self._finalize(job, exit_code=exit_code)

    async def _watch_progress(self, job: RecordingJob):
        pending = ""
        while True:
            chunk = await job.process.read_diagnostics()
            if not chunk:
                break

            pending += chunk.decode("utf-8", errors="ignore")
            *lines, pending = _LINE_BREAK.split(pending)
            pending = pending[-_MAX_PENDING_CHARS:]

            for line in lines:
                await self._report_progress(job, line)

        if pending:
            await self._report_progress(job, pending)

    async def _report_progress(self, job: RecordingJob, line: str):
        line = line.strip()
        if not line:
            return

        logger.debug(f"FFmpeg [{job.recording_id}]: {line}")
        elapsed = parse_elapsed_seconds(line)
        if elapsed is not None:
            await self.emitter.progress(job.user_id, job.recording_id, elapsed)

    def _release(self, job: RecordingJob) -> bool:
        """Retira o job do registro; só a primeira chamada retorna True."""
        if job.finished:
            return False

        job.finished = True
        if self._jobs.get(job.recording_id) is job:
            del self._jobs[job.recording_id]
        if job.kill_timer is not None:
            job.kill_timer.cancel()
            job.kill_timer = None
        return True

    async def _finalize(self, job: RecordingJob, exit_code: Optional[int] = None, error: Optional[str] = None):
        if not self._release(job):
            return

        try:
            if error is not None:
                await self._record_failure(
                    job.recording_id, job.user_id, job.stream_id, job.stream_name, error
                )
            else:
                await self._record_exit(job, exit_code)
        except Exception:
            logger.exception(f"Erro ao finalizar gravação {job.recording_id}")

    async def _record_exit(self, job: RecordingJob, exit_code: int):
        ended_at = self.clock()
        file_size = await self.storage.get_file_size(job.file_path)
        duration = max(0, int((ended_at - job.started_at).total_seconds()))

        if exit_code not in CLEAN_EXIT_CODES:
            logger.error(f"Gravação {job.recording_id} falhou (código {exit_code})")
            await self._record_failure(
                job.recording_id,
                job.user_id,
                job.stream_id,
                job.stream_name,
                f"FFmpeg exited with code {exit_code}",
                ended_at=ended_at,
                file_size=file_size,
                duration=duration
            )
            return

        await self.store.update_recording(
            job.recording_id,
            status=RecordingStatus.COMPLETED,
            ended_at=ended_at,
            file_size=file_size,
            duration=duration
        )
        logger.info(f"✓ Gravação concluída: {job.recording_id} ({duration}s, {file_size} bytes)")

        await self._announce(
            job.user_id,
            job.recording_id,
            job.stream_id,
            RecordingStatus.COMPLETED,
            NotificationType.RECORDING_COMPLETED,
            f"Gravação concluída: {job.stream_name}",
            {"recordingId": job.recording_id}
        )

    async def _record_failure(
        self,
        recording_id: str,
        user_id: str,
        stream_id: str,
        stream_name: str,
        error: str,
        ended_at: Optional[datetime] = None,
        **fields
    ):
        await self.store.update_recording(
            recording_id,
            status=RecordingStatus.FAILED,
            ended_at=ended_at or self.clock(),
            error=error,
            **fields
        )

        await self._announce(
            user_id,
            recording_id,
            stream_id,
            RecordingStatus.FAILED,
            NotificationType.RECORDING_FAILED,
            f"Gravação falhou: {stream_name}",
            {"recordingId": recording_id, "error": error}
        )

    async def _announce(
        self,
        user_id: str,
        recording_id: str,
        stream_id: str,
        status: RecordingStatus,
        notification_type: NotificationType,
        message: str,
        meta_data: dict
    ):
        """Publica o novo status e depois cria a notificação; uma falha não impede a outra."""
        try:
            await self.emitter.status_changed(user_id, recording_id, status.value)
        except Exception as e:
            logger.error(f"Erro ao publicar status {status.value} da gravação {recording_id}: {e}")

        try:
            await self.emitter.notify(
                user_id,
                notification_type.value,
                message,
                stream_id=stream_id,
                meta_data=meta_data
            )
        except Exception as e:
            logger.error(f"Erro ao criar notificação {notification_type.value} da gravação {recording_id}: {e}")
