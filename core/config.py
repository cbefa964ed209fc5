# Nombre de archivo: config.py
# Ubicación de archivo: core/config.py
# Descripción: Configuración centralizada (entorno) del cliente de inspección de pozos

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv

DEFAULT_BACKEND_URL = "http://192.168.128.15:5000"
POLITICAS_ENVIO = ("encolar", "rechazar", "fusionar")


def _bool_env(nombre: str, default: str = "false") -> bool:
    return getenv(nombre, default).lower() in ("true", "1", "yes")


def _timeout_env(nombre: str) -> float | None:
    raw = getenv(nombre, "").strip()
    if not raw:
        return None
    try:
        valor = float(raw)
    except ValueError as exc:
        raise ValueError(f"{nombre} debe ser numérico (segundos), recibido: {raw!r}") from exc
    if valor <= 0:
        raise ValueError(f"{nombre} debe ser mayor a cero, recibido: {raw!r}")
    return valor


@dataclass(slots=True)
class BackendSettings:
    """Ubicación del backend y parámetros HTTP."""

    base_url: str
    timeout: float | None


@dataclass(slots=True)
class FormularioSettings:
    politica_envio: str
    catalogo_estricto: bool


@dataclass(slots=True)
class Settings:
    backend: BackendSettings
    formulario: FormularioSettings
    env: str
    log_level: str

    def __init__(self) -> None:
        self.backend = BackendSettings(
            base_url=getenv("ENCUESTA_BACKEND_URL", DEFAULT_BACKEND_URL).rstrip("/"),
            timeout=_timeout_env("ENCUESTA_HTTP_TIMEOUT"),
        )
        politica = getenv("ENCUESTA_POLITICA_ENVIO", "encolar").strip().lower()
        if politica not in POLITICAS_ENVIO:
            raise ValueError(
                f"ENCUESTA_POLITICA_ENVIO inválida: {politica!r} (opciones: {', '.join(POLITICAS_ENVIO)})"
            )
        self.formulario = FormularioSettings(
            politica_envio=politica,
            catalogo_estricto=_bool_env("ENCUESTA_CATALOGO_ESTRICTO"),
        )
        self.env = getenv("ENV", "development")
        self.log_level = getenv("LOG_LEVEL", "INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
