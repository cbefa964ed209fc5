# Nombre de archivo: test_cola_envios.py
# Ubicación de archivo: tests/test_cola_envios.py
# Descripción: Pruebas de la cola de envíos con un único consumidor y sus políticas

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from core.metrics import metrics
from integrations.ingesta import IngestaClient
from modules.encuesta_pozos.envio import ColaEnvios, EstadoEnvio, PoliticaEnvio
from modules.encuesta_pozos.errors import EnvioEnCurso
from modules.encuesta_pozos.estado import FormularioEncuesta
from modules.encuesta_pozos.schemas import Adjunto, Encuesta
from tests.multipart_utils import BACKEND, partes_multipart


class _BackendLento:
    """Transporte que retiene cada POST hasta que la prueba lo libera."""

    def __init__(self) -> None:
        self.recibidos: list[str] = []
        self.en_vuelo = 0
        self.max_en_vuelo = 0
        self.liberar = asyncio.Event()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.en_vuelo += 1
        self.max_en_vuelo = max(self.max_en_vuelo, self.en_vuelo)
        try:
            await self.liberar.wait()
            data = json.loads(partes_multipart(request)[0][2])
            self.recibidos.append(data["pozo_numero"])
            return httpx.Response(200)
        finally:
            self.en_vuelo -= 1

    def cliente(self) -> IngestaClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler), base_url=BACKEND)
        return IngestaClient(base_url=BACKEND, http_client=http_client)


def test_envios_secuenciales_en_orden() -> None:
    async def _run() -> tuple[_BackendLento, list]:
        backend = _BackendLento()
        cola = ColaEnvios(backend.cliente())
        futuros = [cola.enviar(Encuesta(pozo_numero=f"P-{i}")) for i in range(4)]
        await asyncio.sleep(0)
        assert cola.pendientes == 4
        backend.liberar.set()
        resultados = await asyncio.gather(*futuros)
        await cola.detener()
        return backend, resultados

    backend, resultados = asyncio.run(_run())
    assert backend.recibidos == ["P-0", "P-1", "P-2", "P-3"]
    assert backend.max_en_vuelo == 1
    assert all(r.estado is EstadoEnvio.ENVIADA for r in resultados)


def test_snapshot_al_enviar() -> None:
    """Ediciones posteriores al envío no alteran lo que viaja."""

    async def _run() -> _BackendLento:
        backend = _BackendLento()
        cola = ColaEnvios(backend.cliente())
        form = FormularioEncuesta()
        form.set_campo("pozo_numero", "P-102")
        form.reemplazar_adjuntos([Adjunto.crear("a.jpg", b"a")])
        futuro = cola.enviar_formulario(form)
        form.set_campo("pozo_numero", "P-999")
        backend.liberar.set()
        await futuro
        await cola.detener()
        # El formulario no se reinicia tras el envío
        assert form.get_campo("pozo_numero") == "P-999"
        return backend

    backend = asyncio.run(_run())
    assert backend.recibidos == ["P-102"]


def test_politica_rechazar() -> None:
    async def _run() -> None:
        backend = _BackendLento()
        cola = ColaEnvios(backend.cliente(), PoliticaEnvio.RECHAZAR)
        primero = cola.enviar(Encuesta(pozo_numero="P-1"))
        with pytest.raises(EnvioEnCurso):
            cola.enviar(Encuesta(pozo_numero="P-2"))
        backend.liberar.set()
        assert (await primero).ok
        segundo = await cola.enviar(Encuesta(pozo_numero="P-3"))
        assert segundo.ok
        await cola.detener()
        assert backend.recibidos == ["P-1", "P-3"]

    asyncio.run(_run())


def test_politica_fusionar() -> None:
    """Los envíos en espera se reemplazan por el más reciente; el que está en vuelo no."""

    async def _run() -> None:
        backend = _BackendLento()
        cola = ColaEnvios(backend.cliente(), "fusionar")
        en_vuelo = cola.enviar(Encuesta(pozo_numero="P-1"))
        await asyncio.sleep(0.01)
        esperando = [cola.enviar(Encuesta(pozo_numero=f"P-{i}")) for i in (2, 3, 4)]
        assert cola.pendientes == 2
        backend.liberar.set()
        resultados = await asyncio.gather(en_vuelo, *esperando)
        await cola.detener()
        assert backend.recibidos == ["P-1", "P-4"]
        assert resultados[1] is resultados[2] is resultados[3]

    asyncio.run(_run())


def test_politica_desde_entorno(monkeypatch) -> None:
    from core.config import get_settings

    monkeypatch.setenv("ENCUESTA_POLITICA_ENVIO", "rechazar")
    get_settings.cache_clear()
    cola = ColaEnvios.from_settings(IngestaClient(base_url=BACKEND))
    assert cola.politica is PoliticaEnvio.RECHAZAR


def test_consumidor_sobrevive_error_inesperado(monkeypatch) -> None:
    from modules.encuesta_pozos import envio

    llamadas = {"n": 0}
    original = envio.enviar_encuesta

    async def _inestable(cliente, encuesta, adjuntos=()):
        llamadas["n"] += 1
        if llamadas["n"] == 1:
            raise RuntimeError("boom")
        return await original(cliente, encuesta, adjuntos)

    monkeypatch.setattr(envio, "enviar_encuesta", _inestable)

    async def _run() -> list:
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(200)), base_url=BACKEND
        )
        cola = ColaEnvios(IngestaClient(base_url=BACKEND, http_client=http_client))
        resultados = await asyncio.gather(
            cola.enviar(Encuesta(pozo_numero="P-1")),
            cola.enviar(Encuesta(pozo_numero="P-2")),
        )
        await cola.detener()
        return resultados

    primero, segundo = asyncio.run(_run())
    assert primero.estado is EstadoEnvio.ERROR_TRANSPORTE
    assert "boom" in (primero.detalle or "")
    assert segundo.ok
    assert metrics.snapshot()["por_estado"] == {"error_transporte": 1, "enviada": 1}


def test_cola_reutilizada_en_otro_loop() -> None:
    """Un consumidor que quedó en un loop cerrado se reemplaza al volver a enviar."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)), base_url=BACKEND)
    cola = ColaEnvios(IngestaClient(base_url=BACKEND, http_client=http_client))

    async def _arrancar() -> None:
        cola.iniciar()
        await asyncio.sleep(0)

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_arrancar())
    finally:
        loop.close()
    assert not cola.activa

    async def _enviar():
        resultado = await cola.enviar(Encuesta(pozo_numero="P-7"))
        await cola.detener()
        return resultado

    assert asyncio.run(_enviar()).ok


def test_detener_procesa_lo_encolado() -> None:
    async def _run() -> _BackendLento:
        backend = _BackendLento()
        backend.liberar.set()
        cola = ColaEnvios(backend.cliente())
        cola.enviar(Encuesta(pozo_numero="P-1"))
        cola.enviar(Encuesta(pozo_numero="P-2"))
        await cola.detener()
        assert not cola.activa
        return backend

    assert asyncio.run(_run()).recibidos == ["P-1", "P-2"]
