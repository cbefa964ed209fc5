# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (PYTHONPATH, entorno, logging y métricas)

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))

from core.config import get_settings  # noqa: E402
from core.metrics import metrics  # noqa: E402


@pytest.fixture(autouse=True)
def _entorno_limpio(monkeypatch):
    """Entorno sin archivo de logs y con configuración/métricas frescas en cada prueba."""
    monkeypatch.setenv("ENV", "test")
    for var in (
        "ENCUESTA_BACKEND_URL",
        "ENCUESTA_HTTP_TIMEOUT",
        "ENCUESTA_POLITICA_ENVIO",
        "ENCUESTA_CATALOGO_ESTRICTO",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    metrics.reset()
    raiz = logging.getLogger()
    nivel_raiz, handlers_raiz = raiz.level, list(raiz.handlers)
    yield
    for handler in [h for h in raiz.handlers if isinstance(h, logging.FileHandler) and h not in handlers_raiz]:
        raiz.removeHandler(handler)
        handler.close()
    raiz.setLevel(nivel_raiz)
    get_settings.cache_clear()
    metrics.reset()
