# Nombre de archivo: logging.py
# Ubicación de archivo: core/logging.py
# Descripción: Configuración centralizada de logging para el cliente de encuestas (stdout + archivo rotativo opcional)

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s service=%(name)s level=%(levelname)s msg=%(message)s"


def _resolver_nivel(level: str | int | None) -> int:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    nivel = logging.getLevelName(level.upper())
    return nivel if isinstance(nivel, int) else logging.INFO


def setup_logging(
    service: str = "encuesta_pozos",
    level: str | int | None = None,
    enable_file: bool | None = None,
    logs_dir: str | Path | None = None,
    filename: str | None = None,
    max_bytes: int = 2_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Configura el logging estándar del cliente.

    Args:
        service: nombre lógico del proceso (runner, tests, etc.)
        level: nivel (str o int); si es None se toma de LOG_LEVEL (default INFO)
        enable_file: fuerza escritura a archivo; si None se activa si ENV=development
        logs_dir: carpeta destino (default: ./Logs)
        filename: nombre de archivo (default: f"{service}.log")
        max_bytes: tamaño máximo antes de rotar
        backup_count: cantidad de backups
    """
    lvl = _resolver_nivel(level)
    logging.basicConfig(level=lvl, format=_FORMAT)
    # Los módulos loguean con su __name__; el archivo cuelga del root para recibirlos a todos
    raiz = logging.getLogger()
    raiz.setLevel(lvl)
    logger = logging.getLogger(service)
    logger.setLevel(lvl)
    # Evitar handlers duplicados si se llama más de una vez
    if any(isinstance(h, RotatingFileHandler) for h in raiz.handlers):
        return logger
    if enable_file is None:
        enable_file = os.getenv("ENV", "development").lower() == "development"
    if not enable_file:
        return logger
    try:
        base_dir = Path(logs_dir) if logs_dir else (Path.cwd() / "Logs")
        base_dir.mkdir(parents=True, exist_ok=True)
        ruta = base_dir / (filename or f"{service}.log")
        fh = RotatingFileHandler(ruta, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        fh.setFormatter(logging.Formatter(_FORMAT))
        fh.setLevel(lvl)
        raiz.addHandler(fh)
        logger.debug("action=logging file_handler=enabled path=%s", ruta)
    except OSError as exc:
        logger.error("action=logging file_handler=failed error=%s", exc)
    return logger


__all__ = ["setup_logging"]
