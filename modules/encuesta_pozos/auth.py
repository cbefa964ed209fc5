# Nombre de archivo: auth.py
# Ubicación de archivo: modules/encuesta_pozos/auth.py
# Descripción: Verificación única de sesión al iniciar (formulario o pedido de login)

from __future__ import annotations

import asyncio
import logging
from enum import Enum

import httpx

from integrations.ingesta import IngestaClient

logger = logging.getLogger(__name__)


class EstadoAuth(str, Enum):
    PENDIENTE = "pendiente"
    AUTENTICADO = "autenticado"
    NO_AUTENTICADO = "no_autenticado"


class AuthGate:
    """Decide una sola vez si se muestra el formulario o el enlace de login.

    Pendiente -> {Autenticado, NoAutenticado}, terminal en la primera
    resolución. Una respuesta no 2xx y un error de red dan el mismo resultado.
    """

    def __init__(self, cliente: IngestaClient) -> None:
        self.cliente = cliente
        self.estado = EstadoAuth.PENDIENTE
        self._lock = asyncio.Lock()

    @property
    def login_url(self) -> str:
        return self.cliente.login_url

    @property
    def resuelto(self) -> bool:
        return self.estado is not EstadoAuth.PENDIENTE

    async def verificar(self) -> EstadoAuth:
        async with self._lock:
            if not self.resuelto:
                self.estado = await self._consultar()
        return self.estado

    async def _consultar(self) -> EstadoAuth:
        try:
            resp = await self.cliente.auth_status()
        except httpx.HTTPError as exc:
            logger.warning("action=auth_status resultado=no_autenticado error=%s", exc)
            return EstadoAuth.NO_AUTENTICADO
        estado = EstadoAuth.AUTENTICADO if resp.is_success else EstadoAuth.NO_AUTENTICADO
        logger.info("action=auth_status resultado=%s status=%s", estado.value, resp.status_code)
        return estado


__all__ = ["AuthGate", "EstadoAuth"]
