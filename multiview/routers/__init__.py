"""
Módulo routers com as rotas da API.
"""
from multiview.routers import realtime

__all__ = ["realtime"]
