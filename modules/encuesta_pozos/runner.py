# Nombre de archivo: runner.py
# Ubicación de archivo: modules/encuesta_pozos/runner.py
# Descripción: Punto de entrada de línea de comandos para verificar sesión y enviar una encuesta

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from core.config import get_settings
from core.logging import setup_logging
from integrations.ingesta import IngestaClient

from .auth import AuthGate, EstadoAuth
from .envio import ColaEnvios, PoliticaEnvio, ResultadoEnvio
from .schemas import Adjunto, Encuesta

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ENVIO_FALLIDO = 1
EXIT_SIN_SESION = 2
EXIT_ENTRADA_INVALIDA = 3


def cargar_encuesta(path: str | Path) -> Encuesta:
    """Lee una encuesta desde JSON (acepta ``conexiones`` o ``lista_conexiones``)."""
    return Encuesta.model_validate_json(Path(path).read_bytes())


def cargar_adjuntos(paths: Sequence[str | Path]) -> List[Adjunto]:
    return [Adjunto.desde_archivo(p) for p in paths]


async def run(
    encuesta: Encuesta,
    adjuntos: Sequence[Adjunto],
    cliente: IngestaClient,
    politica: PoliticaEnvio | str = PoliticaEnvio.ENCOLAR,
) -> int:
    """Verifica la sesión y, si corresponde, envía la encuesta. Devuelve el código de salida."""
    gate = AuthGate(cliente)
    estado = await gate.verificar()
    if estado is not EstadoAuth.AUTENTICADO:
        print(f"Sesión no válida. Iniciá sesión en: {gate.login_url}")
        return EXIT_SIN_SESION

    cola = ColaEnvios(cliente, politica)
    cola.iniciar()
    try:
        resultado: ResultadoEnvio = await cola.enviar(encuesta, adjuntos)
    finally:
        await cola.detener()

    if resultado.ok:
        print(f"Encuesta enviada (status {resultado.status_code}).")
        return EXIT_OK
    if resultado.requiere_login:
        print(f"El backend rechazó la sesión (401). Iniciá sesión en: {gate.login_url}")
    else:
        print(f"No se pudo enviar la encuesta: {resultado.estado.value} {resultado.detalle or resultado.status_code}")
    return EXIT_ENVIO_FALLIDO


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Enviar una encuesta de inspección de pozo al backend")
    parser.add_argument("encuesta", help="Archivo JSON con la encuesta")
    parser.add_argument("fotos", nargs="*", help="Fotos a adjuntar")
    parser.add_argument("--backend", default=settings.backend.base_url, help="URL base del backend")
    parser.add_argument(
        "--politica",
        choices=[p.value for p in PoliticaEnvio],
        default=settings.formulario.politica_envio,
        help="Política ante envíos simultáneos",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("encuesta_pozos", get_settings().log_level)
    try:
        encuesta = cargar_encuesta(args.encuesta)
        adjuntos = cargar_adjuntos(args.fotos)
    except (OSError, ValidationError) as exc:
        logger.error("action=runner entrada_invalida error=%s", exc)
        print(f"Entrada inválida: {exc}")
        return EXIT_ENTRADA_INVALIDA

    async def _run() -> int:
        async with IngestaClient(base_url=args.backend) as cliente:
            return await run(encuesta, adjuntos, cliente, args.politica)

    return asyncio.run(_run())


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
