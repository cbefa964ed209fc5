# Nombre de archivo: errors.py
# Ubicación de archivo: modules/encuesta_pozos/errors.py
# Descripción: Excepciones del formulario y del envío de encuestas de pozos

from __future__ import annotations


class EncuestaError(Exception):
    """Base de los errores del módulo de encuestas."""


class CampoDesconocido(EncuestaError, KeyError):
    """El nombre de campo no existe (o no es escalar) en el registro."""

    def __init__(self, nombre: str) -> None:
        super().__init__(nombre)
        self.nombre = nombre

    def __str__(self) -> str:
        return f"Campo desconocido: {self.nombre!r}"


class ValorFueraDeCatalogo(EncuestaError, ValueError):
    """Valor no incluido en el catálogo del campo (solo en modo estricto)."""

    def __init__(self, campo: str, valor: str) -> None:
        super().__init__(f"Valor {valor!r} fuera del catálogo de {campo!r}")
        self.campo = campo
        self.valor = valor


class ConexionInexistente(EncuestaError, IndexError):
    """Índice de conexión fuera de rango."""

    def __init__(self, indice: int, total: int) -> None:
        super().__init__(f"No existe la conexión {indice} (hay {total})")
        self.indice = indice
        self.total = total


class ErrorSerializacion(EncuestaError):
    """La encuesta no pudo codificarse a JSON; el envío se aborta."""


class EnvioEnCurso(EncuestaError):
    """Se rechazó un envío porque otro está pendiente (política 'rechazar')."""


__all__ = [
    "EncuestaError",
    "CampoDesconocido",
    "ValorFueraDeCatalogo",
    "ConexionInexistente",
    "ErrorSerializacion",
    "EnvioEnCurso",
]
