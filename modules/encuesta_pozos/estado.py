# Nombre de archivo: estado.py
# Ubicación de archivo: modules/encuesta_pozos/estado.py
# Descripción: Estado del formulario en edición (encuesta en curso + fotos adjuntas)

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from core.config import get_settings

from . import catalogos
from .errors import CampoDesconocido, ConexionInexistente, ValorFueraDeCatalogo
from .schemas import CAMPOS_CONEXION, Adjunto, Conexion, Encuesta

logger = logging.getLogger(__name__)

Observador = Callable[["FormularioEncuesta"], None]


class FormularioEncuesta:
    """Único dueño de la encuesta en edición y de sus adjuntos.

    Toda modificación pasa por estos métodos; después de cada una se notifica
    a los observadores suscriptos (la capa que dibuja el formulario).
    """

    def __init__(
        self,
        encuesta: Optional[Encuesta] = None,
        catalogo_estricto: bool = False,
    ) -> None:
        self._encuesta = encuesta if encuesta is not None else Encuesta()
        self._adjuntos: List[Adjunto] = []
        self._observadores: List[Observador] = []
        self.catalogo_estricto = catalogo_estricto

    @classmethod
    def from_settings(cls) -> "FormularioEncuesta":
        return cls(catalogo_estricto=get_settings().formulario.catalogo_estricto)

    # --- lectura ---

    @property
    def encuesta(self) -> Encuesta:
        return self._encuesta

    @property
    def adjuntos(self) -> Tuple[Adjunto, ...]:
        return tuple(self._adjuntos)

    @property
    def conexiones(self) -> Tuple[Conexion, ...]:
        return tuple(self._encuesta.lista_conexiones)

    def get_campo(self, nombre: str) -> str:
        self._validar_campo(nombre)
        return getattr(self._encuesta, nombre)

    def snapshot(self) -> Tuple[Encuesta, Tuple[Adjunto, ...]]:
        """Copia de la encuesta y de los adjuntos al momento del envío."""
        return self._encuesta.snapshot(), tuple(self._adjuntos)

    # --- observadores ---

    def suscribir(self, callback: Observador) -> Callable[[], None]:
        """Registra un observador; devuelve la función para desuscribirlo."""
        self._observadores.append(callback)

        def _desuscribir() -> None:
            if callback in self._observadores:
                self._observadores.remove(callback)

        return _desuscribir

    def _notificar(self) -> None:
        # El cambio ya quedó aplicado: un observador que falla no corta a los demás
        for callback in list(self._observadores):
            try:
                callback(self)
            except Exception:  # noqa: BLE001
                logger.exception("action=notificar_observador error_inesperado observador=%r", callback)

    # --- campos escalares ---

    def _validar_campo(self, nombre: str) -> None:
        if nombre not in Encuesta.campos_escalares():
            raise CampoDesconocido(nombre)

    def set_campo(self, nombre: str, valor: str) -> None:
        """Sobrescribe un campo escalar de la encuesta."""
        self._validar_campo(nombre)
        if not catalogos.pertenece(nombre, valor):
            if self.catalogo_estricto:
                raise ValorFueraDeCatalogo(nombre, valor)
            logger.warning("action=set_campo campo=%s valor_fuera_de_catalogo=%r", nombre, valor)
        setattr(self._encuesta, nombre, valor)
        self._notificar()

    # --- conexiones ---

    def _validar_indice(self, indice: int) -> None:
        total = len(self._encuesta.lista_conexiones)
        # Los índices negativos no se aceptan: borrarían desde el final
        if not 0 <= indice < total:
            raise ConexionInexistente(indice, total)

    def agregar_conexion(self) -> int:
        """Agrega una conexión vacía al final; devuelve su índice."""
        self._encuesta.lista_conexiones.append(Conexion())
        indice = len(self._encuesta.lista_conexiones) - 1
        logger.debug("action=agregar_conexion indice=%s", indice)
        self._notificar()
        return indice

    def eliminar_conexion(self, indice: int) -> Conexion:
        """Quita la conexión en ``indice``. Fuera de rango: ConexionInexistente."""
        self._validar_indice(indice)
        eliminada = self._encuesta.lista_conexiones.pop(indice)
        logger.debug("action=eliminar_conexion indice=%s", indice)
        self._notificar()
        return eliminada

    def set_campo_conexion(self, indice: int, nombre: str, valor: str) -> None:
        self._validar_indice(indice)
        if nombre not in CAMPOS_CONEXION:
            raise CampoDesconocido(nombre)
        setattr(self._encuesta.lista_conexiones[indice], nombre, valor)
        self._notificar()

    # --- adjuntos ---

    def reemplazar_adjuntos(self, adjuntos: Iterable[Adjunto]) -> None:
        """Descarta las fotos previas e instala la nueva selección completa."""
        self._adjuntos = list(adjuntos)
        logger.debug("action=reemplazar_adjuntos total=%s", len(self._adjuntos))
        self._notificar()

    def reiniciar(self) -> None:
        """Vuelve a una encuesta vacía y sin adjuntos. El envío no lo llama."""
        self._encuesta = Encuesta()
        self._adjuntos = []
        self._notificar()


__all__ = ["FormularioEncuesta"]
