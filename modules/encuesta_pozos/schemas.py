# Nombre de archivo: schemas.py
# Ubicación de archivo: modules/encuesta_pozos/schemas.py
# Descripción: Modelos de datos de la encuesta de inspección de pozos (conexiones, encuesta y adjuntos)

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

CAMPOS_CONEXION = ("cota_razante", "cota_clave", "diametro_pulgadas", "material", "conecta_a")


class Conexion(BaseModel):
    """Tubería que entra o sale del pozo. Todos los campos son texto libre."""

    cota_razante: str = ""
    cota_clave: str = ""
    diametro_pulgadas: str = ""
    material: str = ""
    conecta_a: str = ""

    model_config = ConfigDict(validate_assignment=True)


class Encuesta(BaseModel):
    """Reporte completo de inspección de un pozo.

    Los campos de clasificación se guardan como texto plano: el catálogo de
    opciones es orientativo y no se valida aquí (ver ``catalogos``). En JSON la
    lista de conexiones viaja con la clave ``conexiones``.
    """

    # Datos generales
    pozo_numero: str = ""
    tipo_sistema: str = ""
    tipo_pozo: str = ""

    # Tapa
    tapa_existe: str = ""
    tapa_tipo: str = ""
    tapa_estado: str = ""
    tapa_diagnostico: str = ""

    # Cargue
    cargue_existe: str = ""
    cargue_estado: str = ""
    cargue_diagnostico: str = ""

    # Cono
    cono_existe: str = ""
    cono_estado: str = ""
    cono_diagnostico: str = ""

    # Cilindro
    cilindro_material: str = ""
    cilindro_estado: str = ""
    cilindro_diagnostico: str = ""

    # Cañuela
    canuela_estado: str = ""
    canuela_diagnostico: str = ""

    # Escalones
    escalones_existe: str = ""
    escalones_tipo: str = ""
    escalones_estado: str = ""
    escalones_diagnostico: str = ""

    # Evaluación final
    estado_general_pozo: str = ""
    observaciones: str = ""

    lista_conexiones: List[Conexion] = Field(
        default_factory=list,
        validation_alias=AliasChoices("conexiones", "lista_conexiones"),
        serialization_alias="conexiones",
    )

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def campos_escalares(cls) -> list[str]:
        """Nombres de los campos de texto, en orden de declaración."""
        return [nombre for nombre in cls.model_fields if nombre != "lista_conexiones"]

    def snapshot(self) -> "Encuesta":
        """Copia profunda e independiente, para entregar al envío."""
        return self.model_copy(deep=True)


@dataclass(frozen=True, slots=True)
class Adjunto:
    """Foto capturada para la encuesta: nombre original y bytes crudos."""

    nombre: str
    contenido: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def crear(cls, nombre: str, contenido: bytes) -> "Adjunto":
        tipo, _ = mimetypes.guess_type(nombre)
        return cls(nombre=nombre, contenido=contenido, content_type=tipo or "application/octet-stream")

    @classmethod
    def desde_archivo(cls, path: str | Path) -> "Adjunto":
        ruta = Path(path)
        return cls.crear(ruta.name, ruta.read_bytes())

    def __repr__(self) -> str:
        return f"Adjunto(nombre={self.nombre!r}, bytes={len(self.contenido)}, content_type={self.content_type!r})"


__all__ = ["CAMPOS_CONEXION", "Conexion", "Encuesta", "Adjunto"]
