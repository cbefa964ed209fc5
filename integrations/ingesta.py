# Nombre de archivo: ingesta.py
# Ubicación de archivo: integrations/ingesta.py
# Descripción: Cliente HTTP para el backend de ingesta de encuestas de pozos

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional, Tuple

import httpx

from core.config import get_settings

logger = logging.getLogger(__name__)

# (campo, (nombre_archivo | None, contenido[, content_type]))
ParteMultipart = Tuple[str, Tuple[Any, ...]]


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class IngestaClient:
    """Cliente asíncrono para las rutas del backend usando HTTPX.

    Las rutas se piden siempre con URL absoluta sobre ``base_url``, también
    cuando se inyecta un ``http_client`` propio.

    No configura timeout salvo que se indique (ENCUESTA_HTTP_TIMEOUT): una
    solicitud colgada bloquea solo a quien la espera.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        reloj: Callable[[], int] = _epoch_ms,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.backend.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.backend.timeout
        self.http_client = http_client or httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        self.reloj = reloj

    @property
    def login_url(self) -> str:
        """URL del flujo de login externo; se ofrece como enlace, no se consulta."""
        return f"{self.base_url}/login"

    async def auth_status(self) -> httpx.Response:
        """GET /auth/status con un parámetro anti-caché (epoch en ms)."""
        params = {"_": str(self.reloj())}
        logger.debug("service=ingesta action=auth_status params=%s", params)
        return await self.http_client.get(f"{self.base_url}/auth/status", params=params)

    async def ingestar_encuesta(self, partes: List[ParteMultipart]) -> httpx.Response:
        """POST multipart a /ingestar-encuesta con las partes ya armadas."""
        logger.info(
            "service=ingesta action=ingestar_encuesta url=%s/ingestar-encuesta partes=%s",
            self.base_url,
            len(partes),
        )
        return await self.http_client.post(f"{self.base_url}/ingestar-encuesta", files=partes)

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "IngestaClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["IngestaClient", "ParteMultipart"]
