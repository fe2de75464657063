"""
Configuração do APScheduler para tarefas periódicas.
"""
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.executors.asyncio import AsyncIOExecutor
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class SchedulerManager:
    """Gerenciador central do APScheduler."""

    _instance: Optional[AsyncIOScheduler] = None

    @classmethod
    def get_scheduler(cls) -> AsyncIOScheduler:
        """Retorna a instância do scheduler, criando-a se necessário."""
        if cls._instance is None:
            jobstores = {
                'default': MemoryJobStore()
            }
            # Jobs são corrotinas: executam no próprio event loop
            executors = {
                'default': AsyncIOExecutor()
            }
            job_defaults = {
                'coalesce': True,
                'max_instances': 1,
                'misfire_grace_time': 30
            }

            cls._instance = AsyncIOScheduler(
                jobstores=jobstores,
                executors=executors,
                job_defaults=job_defaults,
                timezone='UTC'
            )
            logger.info("APScheduler inicializado")

        return cls._instance

    @classmethod
    def start(cls):
        """Inicia o scheduler."""
        scheduler = cls.get_scheduler()
        if not scheduler.running:
            scheduler.start()
            logger.info("APScheduler iniciado")

    @classmethod
    def is_running(cls) -> bool:
        return cls._instance is not None and cls._instance.running

    @classmethod
    def shutdown(cls):
        """Para o scheduler."""
        if cls._instance and cls._instance.running:
            cls._instance.shutdown(wait=False)
            logger.info("APScheduler parado")
        cls._instance = None
