"""
Wrapper para FFmpeg - Argumentos de gravação, parsing de progresso e processos.
Suporta: SRT, RTMP, RTMPS, RTSP, HLS
"""
import asyncio
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

# Alguns servidores HLS rejeitam o user-agent padrão do FFmpeg
HLS_USER_AGENT = "User-Agent: Mozilla/5.0"

# Tecla de saída interativa do FFmpeg: finaliza o contentor e termina
QUIT_COMMAND = b"q"

_TIME_PATTERN = re.compile(r"time=(\d{2}):(\d{2}):(\d{2})\.\d{2}")

_URL_PREFIXES = ("http://", "https://", "srt://", "rtsp://", "rtmp://", "rtmps://")


def _build_input_args(protocol: str, source_url: str) -> List[str]:
    """Constrói argumentos de input baseado no protocolo."""
    if protocol == "RTSP":
        # RTSP: forçar transporte TCP
        return ["-rtsp_transport", "tcp", "-i", source_url]

    if protocol == "HLS":
        return ["-headers", HLS_USER_AGENT, "-i", source_url]

    # SRT, RTMP, RTMPS e desconhecidos: apenas a URL
    return ["-i", source_url]


def _build_output_args(output_path: str, recording_format: str) -> List[str]:
    """Constrói argumentos de output (cópia sem transcodificação)."""
    container = "matroska" if recording_format == "MKV" else "mp4"
    return [
        "-c", "copy",
        "-movflags", "+faststart",
        "-f", container,
        output_path
    ]


def build_recording_args(
    source_url: str,
    protocol: str,
    output_path: str,
    recording_format: str
) -> List[str]:
    """
    Constrói os argumentos do FFmpeg para gravar um stream.

    Args:
        source_url: URL da fonte
        protocol: Protocolo do stream (SRT, RTMP, RTMPS, RTSP, HLS)
        output_path: Caminho do ficheiro de saída
        recording_format: Formato da gravação (MP4 ou MKV)

    Returns:
        Lista ordenada de argumentos (sem o executável)
    """
    args = ["-y"]
    args.extend(_build_input_args(protocol, source_url))
    args.extend(_build_output_args(output_path, recording_format))
    return args


def parse_elapsed_seconds(line: str) -> Optional[int]:
    """
    Extrai o tempo decorrido de uma linha de diagnóstico do FFmpeg.

    Reconhece `time=HH:MM:SS.hh` em qualquer posição; a fração é truncada.
    Retorna None quando a linha não traz progresso.
    """
    match = _TIME_PATTERN.search(line)
    if not match:
        return None

    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def mask_command(command: str, args: List[str]) -> str:
    """Linha de comando para log, com URLs de stream mascaradas."""
    parts = [
        "<STREAM_URL>" if arg.startswith(_URL_PREFIXES) else arg
        for arg in args
    ]
    return " ".join([command, *parts])


class FFmpegProcess:
    """Representa um processo FFmpeg ativo."""

    def __init__(self, process: asyncio.subprocess.Process):
        self.process = process

    @property
    def pid(self) -> int:
        return self.process.pid

    async def read_diagnostics(self, size: int = 4096) -> bytes:
        """Lê o próximo bloco do stderr (b"" no EOF)."""
        return await self.process.stderr.read(size)

    async def request_quit(self):
        """Pede ao FFmpeg que finalize o ficheiro e termine."""
        self.process.stdin.write(QUIT_COMMAND)
        await self.process.stdin.drain()

    def kill(self):
        """Termina o processo à força (SIGKILL)."""
        if self.process.returncode is None:
            try:
                self.process.kill()
            except ProcessLookupError:
                pass

    async def wait(self) -> int:
        """Aguarda o término do processo."""
        return await self.process.wait()


class FFmpegProcessHost:
    """Lança processos FFmpeg com stdin e stderr capturados."""

    async def spawn(self, command: str, args: List[str]) -> FFmpegProcess:
        """
        Inicia um processo FFmpeg.

        Raises:
            OSError: Se o executável não puder ser lançado
        """
        safe_cmd = mask_command(command, args)
        logger.info(f"🚀 Comando FFmpeg: {safe_cmd}")

        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE
        )

        logger.info(f"✓ Processo FFmpeg iniciado (PID: {process.pid})")
        return FFmpegProcess(process)
