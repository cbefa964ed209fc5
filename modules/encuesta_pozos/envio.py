# Nombre de archivo: envio.py
# Ubicación de archivo: modules/encuesta_pozos/envio.py
# Descripción: Serialización y envío multipart de encuestas, con cola de un único consumidor

"""Envío de encuestas al backend de ingesta.

Cada envío toma una copia de la encuesta y de sus fotos, arma un cuerpo
multipart (parte ``data`` con el JSON y una parte ``fotos`` por foto) y hace
un único POST, sin reintentos. Los envíos se procesan de a uno, en orden,
mediante ``ColaEnvios``; cada llamador recibe un futuro con el resultado.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

import httpx
import orjson
from pydantic_core import PydanticSerializationError

from core.config import get_settings
from core.metrics import metrics
from integrations.ingesta import IngestaClient, ParteMultipart

from .errors import EnvioEnCurso, ErrorSerializacion
from .schemas import Adjunto, Encuesta

if TYPE_CHECKING:  # pragma: no cover - solo para type checking
    from .estado import FormularioEncuesta

logger = logging.getLogger(__name__)

CAMPO_DATA = "data"
CAMPO_FOTOS = "fotos"


class EstadoEnvio(str, Enum):
    ENVIADA = "enviada"
    NO_AUTORIZADA = "no_autorizada"
    ERROR_TRANSPORTE = "error_transporte"
    ERROR_SERIALIZACION = "error_serializacion"


class PoliticaEnvio(str, Enum):
    """Qué hacer si llega un envío mientras otro sigue pendiente."""

    ENCOLAR = "encolar"
    RECHAZAR = "rechazar"
    FUSIONAR = "fusionar"


@dataclass(slots=True)
class ResultadoEnvio:
    """Resultado de un intento de envío."""

    estado: EstadoEnvio
    status_code: Optional[int] = None
    detalle: Optional[str] = None

    @property
    def ok(self) -> bool:
        return (
            self.estado is EstadoEnvio.ENVIADA
            and self.status_code is not None
            and 200 <= self.status_code < 300
        )

    @property
    def requiere_login(self) -> bool:
        return self.estado is EstadoEnvio.NO_AUTORIZADA


def serializar_encuesta(encuesta: Encuesta) -> str:
    """JSON de la encuesta con las claves del backend (``conexiones`` para la lista)."""
    try:
        payload = encuesta.model_dump(mode="json", by_alias=True)
        return orjson.dumps(payload).decode("utf-8")
    except (PydanticSerializationError, orjson.JSONEncodeError, TypeError, ValueError) as exc:
        raise ErrorSerializacion(f"No se pudo serializar la encuesta a JSON: {exc}") from exc


def construir_multipart(encuesta: Encuesta, adjuntos: Sequence[Adjunto] = ()) -> List[ParteMultipart]:
    """Arma las partes del cuerpo: una ``data`` y una ``fotos`` por adjunto, en orden."""
    json_data = serializar_encuesta(encuesta)
    logger.debug("action=construir_multipart json=%s", json_data)
    partes: List[ParteMultipart] = [(CAMPO_DATA, (None, json_data))]
    for adjunto in adjuntos:
        partes.append((CAMPO_FOTOS, (adjunto.nombre, adjunto.contenido, adjunto.content_type)))
    return partes


async def enviar_encuesta(
    cliente: IngestaClient,
    encuesta: Encuesta,
    adjuntos: Sequence[Adjunto] = (),
) -> ResultadoEnvio:
    """Hace un único intento de envío y devuelve su resultado sin lanzar excepciones."""
    inicio = time.perf_counter()
    resultado = await _enviar(cliente, encuesta, adjuntos)
    metrics.record(resultado.estado.value, time.perf_counter() - inicio)
    return resultado


async def _enviar(cliente: IngestaClient, encuesta: Encuesta, adjuntos: Sequence[Adjunto]) -> ResultadoEnvio:
    try:
        partes = construir_multipart(encuesta, adjuntos)
    except ErrorSerializacion as exc:
        logger.error("action=envio_encuesta estado=error_serializacion pozo=%s error=%s", encuesta.pozo_numero, exc)
        return ResultadoEnvio(EstadoEnvio.ERROR_SERIALIZACION, detalle=str(exc))

    try:
        resp = await cliente.ingestar_encuesta(partes)
    except httpx.HTTPError as exc:
        logger.error("action=envio_encuesta estado=error_transporte pozo=%s error=%r", encuesta.pozo_numero, exc)
        return ResultadoEnvio(EstadoEnvio.ERROR_TRANSPORTE, detalle=str(exc) or type(exc).__name__)

    if resp.status_code == 401:
        logger.warning(
            "action=envio_encuesta estado=no_autorizada pozo=%s status=401 hint=reautenticar",
            encuesta.pozo_numero,
        )
        return ResultadoEnvio(EstadoEnvio.NO_AUTORIZADA, status_code=401)

    logger.info(
        "action=envio_encuesta estado=enviada pozo=%s status=%s conexiones=%s fotos=%s",
        encuesta.pozo_numero,
        resp.status_code,
        len(encuesta.lista_conexiones),
        len(adjuntos),
    )
    return ResultadoEnvio(EstadoEnvio.ENVIADA, status_code=resp.status_code)


@dataclass
class _Trabajo:
    encuesta: Encuesta
    adjuntos: Tuple[Adjunto, ...]
    futuros: List["asyncio.Future[ResultadoEnvio]"] = field(default_factory=list)


class ColaEnvios:
    """Cola sin límite con un único consumidor que envía de a una encuesta.

    Preserva el orden de llegada. No hay cancelación ni contrapresión: si el
    backend no responde, los trabajos se acumulan detrás del que está en vuelo.
    """

    def __init__(self, cliente: IngestaClient, politica: PoliticaEnvio | str = PoliticaEnvio.ENCOLAR) -> None:
        self.cliente = cliente
        self.politica = PoliticaEnvio(politica)
        self._cola: Optional[asyncio.Queue[Optional[_Trabajo]]] = None
        self._tarea: Optional[asyncio.Task[None]] = None
        self._ultimo_en_espera: Optional[_Trabajo] = None
        self._en_vuelo = False

    @classmethod
    def from_settings(cls, cliente: IngestaClient) -> "ColaEnvios":
        return cls(cliente, get_settings().formulario.politica_envio)

    @property
    def activa(self) -> bool:
        """Hay un consumidor vivo en un loop que sigue abierto."""
        return (
            self._tarea is not None
            and not self._tarea.done()
            and not self._tarea.get_loop().is_closed()
        )

    @property
    def pendientes(self) -> int:
        """Trabajos en espera más el que está en vuelo."""
        en_espera = self._cola.qsize() if self._cola is not None else 0
        return en_espera + (1 if self._en_vuelo else 0)

    def iniciar(self) -> None:
        """Arranca el consumidor en el loop actual (idempotente).

        La cola queda atada al loop del consumidor: si se la usa desde otro
        loop, se descarta lo que hubiera quedado en la anterior y se arranca
        un consumidor nuevo.
        """
        loop = asyncio.get_running_loop()
        if self.activa and self._tarea is not None and self._tarea.get_loop() is loop:
            return
        if self._tarea is not None and not self._tarea.done():
            logger.warning("action=cola_envios_reiniciada motivo=cambio_de_loop descartados=%s", self.pendientes)
        self._cola = asyncio.Queue()
        self._ultimo_en_espera = None
        self._en_vuelo = False
        self._tarea = loop.create_task(self._consumir(), name="cola_envios")
        logger.info("action=cola_envios_iniciada politica=%s", self.politica.value)

    async def detener(self) -> None:
        """Procesa lo ya encolado y termina el consumidor."""
        if not self.activa or self._cola is None or self._tarea is None:
            return
        await self._cola.put(None)
        await self._tarea
        self._tarea = None
        logger.info("action=cola_envios_detenida")

    async def esperar_vacia(self) -> None:
        if self._cola is not None:
            await self._cola.join()

    def enviar(self, encuesta: Encuesta, adjuntos: Iterable[Adjunto] = ()) -> "asyncio.Future[ResultadoEnvio]":
        """Encola una copia de la encuesta y sus fotos; devuelve el futuro del resultado."""
        self.iniciar()
        assert self._cola is not None
        if self.politica is PoliticaEnvio.RECHAZAR and self.pendientes:
            logger.warning("action=envio_rechazado pozo=%s pendientes=%s", encuesta.pozo_numero, self.pendientes)
            raise EnvioEnCurso(f"Hay {self.pendientes} envío(s) pendiente(s)")

        copia = encuesta.snapshot()
        fotos = tuple(adjuntos)
        futuro: asyncio.Future[ResultadoEnvio] = asyncio.get_running_loop().create_future()
        logger.info(
            "action=envio_encolado pozo=%s conexiones=%s fotos=%s",
            copia.pozo_numero,
            len(copia.lista_conexiones),
            len(fotos),
        )
        for i, conexion in enumerate(copia.lista_conexiones):
            logger.debug("action=envio_encolado conexion=%s datos=%s", i, conexion.model_dump())

        espera = self._ultimo_en_espera
        if self.politica is PoliticaEnvio.FUSIONAR and espera is not None:
            espera.encuesta = copia
            espera.adjuntos = fotos
            espera.futuros.append(futuro)
            logger.info("action=envio_fusionado pozo=%s llamadores=%s", copia.pozo_numero, len(espera.futuros))
            return futuro

        trabajo = _Trabajo(copia, fotos, [futuro])
        self._ultimo_en_espera = trabajo
        self._cola.put_nowait(trabajo)
        return futuro

    def enviar_formulario(self, formulario: "FormularioEncuesta") -> "asyncio.Future[ResultadoEnvio]":
        """Atajo: envía el estado actual de un ``FormularioEncuesta``."""
        encuesta, adjuntos = formulario.snapshot()
        return self.enviar(encuesta, adjuntos)

    async def _consumir(self) -> None:
        cola = self._cola
        assert cola is not None
        while True:
            trabajo = await cola.get()
            if trabajo is None:
                cola.task_done()
                break
            if trabajo is self._ultimo_en_espera:
                self._ultimo_en_espera = None
            self._en_vuelo = True
            inicio = time.perf_counter()
            try:
                resultado = await enviar_encuesta(self.cliente, trabajo.encuesta, trabajo.adjuntos)
            except Exception as exc:  # noqa: BLE001 - el consumidor no debe morir
                logger.exception("action=cola_envios error_inesperado pozo=%s", trabajo.encuesta.pozo_numero)
                resultado = ResultadoEnvio(EstadoEnvio.ERROR_TRANSPORTE, detalle=repr(exc))
                metrics.record(resultado.estado.value, time.perf_counter() - inicio)
            finally:
                self._en_vuelo = False
                cola.task_done()
            for futuro in trabajo.futuros:
                if not futuro.done():
                    futuro.set_result(resultado)


__all__ = [
    "CAMPO_DATA",
    "CAMPO_FOTOS",
    "EstadoEnvio",
    "PoliticaEnvio",
    "ResultadoEnvio",
    "ColaEnvios",
    "serializar_encuesta",
    "construir_multipart",
    "enviar_encuesta",
]
