"""
Aplicação FastAPI principal para monitoramento multiview e gravação de streams.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from multiview.core.config import settings
from multiview.core.database import Base, engine, SessionLocal
from multiview.core.scheduler import SchedulerManager
from multiview.routers import realtime
from multiview.services.data_store import DataStore
from multiview.services.realtime import ConnectionManager
from multiview.services.notification_emitter import NotificationEmitter
from multiview.utils.ffmpeg_wrapper import FFmpegProcessHost
from multiview.utils.storage_manager import StorageManager
from multiview.workers.recording_supervisor import RecordingSupervisor
from multiview.workers.recording_scheduler import RecordingScheduler

# Configurar logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gerencia o ciclo de vida da aplicação.
    Monta o supervisor de gravações no startup e para tudo no shutdown.
    """
    # Startup
    logger.info("Iniciando aplicação...")

    # Criar tabelas no banco de dados
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas do banco de dados criadas/verificadas")

    store = DataStore(SessionLocal)
    connection_manager = ConnectionManager()
    supervisor = RecordingSupervisor(
        store=store,
        emitter=NotificationEmitter(store, connection_manager),
        process_host=FFmpegProcessHost(),
        storage=StorageManager(settings.recordings_path),
        ffmpeg_path=settings.ffmpeg_path,
        stop_timeout=settings.recording_stop_timeout_seconds
    )

    app.state.connection_manager = connection_manager
    app.state.recording_supervisor = supervisor

    # Iniciar scheduler de gravações agendadas
    RecordingScheduler(
        store,
        supervisor,
        interval_seconds=settings.scheduler_interval_seconds
    ).register(SchedulerManager.get_scheduler())
    SchedulerManager.start()

    logger.info("Supervisor de gravações pronto")

    yield

    # Shutdown
    logger.info("Parando aplicação...")

    SchedulerManager.shutdown()

    # Parar todos os processos FFmpeg
    await supervisor.shutdown()

    logger.info("Aplicação parada")


# Criar aplicação FastAPI
app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    debug=settings.debug,
    lifespan=lifespan
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Incluir rotas
app.include_router(realtime.router)


@app.get("/health")
async def health_check(request: Request):
    """Health check da API."""
    supervisor = request.app.state.recording_supervisor
    return {
        "status": "ok",
        "scheduler": SchedulerManager.is_running(),
        "active_recordings": supervisor.list_active()
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
