# Nombre de archivo: test_encuesta_schemas.py
# Ubicación de archivo: tests/test_encuesta_schemas.py
# Descripción: Pruebas de los modelos Conexion, Encuesta y Adjunto

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.encuesta_pozos.schemas import CAMPOS_CONEXION, Adjunto, Conexion, Encuesta


def test_encuesta_por_defecto_vacia() -> None:
    """Todos los campos arrancan en cadena vacía y sin conexiones."""
    encuesta = Encuesta()
    for campo in Encuesta.campos_escalares():
        assert getattr(encuesta, campo) == ""
    assert encuesta.lista_conexiones == []


def test_campos_escalares_en_orden() -> None:
    campos = Encuesta.campos_escalares()
    assert campos[:3] == ["pozo_numero", "tipo_sistema", "tipo_pozo"]
    assert campos[-2:] == ["estado_general_pozo", "observaciones"]
    assert "lista_conexiones" not in campos
    assert len(campos) == 24


def test_conexion_campos_texto_libre() -> None:
    conexion = Conexion(cota_razante="", diametro_pulgadas="ocho")
    assert conexion.diametro_pulgadas == "ocho"
    assert tuple(Conexion.model_fields) == CAMPOS_CONEXION


def test_snapshot_es_independiente() -> None:
    """Cambios posteriores al snapshot no afectan la copia."""
    encuesta = Encuesta(pozo_numero="P-1", lista_conexiones=[Conexion(material="PVC")])
    copia = encuesta.snapshot()
    encuesta.pozo_numero = "P-2"
    encuesta.lista_conexiones[0].material = "GRP"
    encuesta.lista_conexiones.append(Conexion())
    assert copia.pozo_numero == "P-1"
    assert copia.lista_conexiones == [Conexion(material="PVC")]


def test_encuesta_acepta_ambas_claves_de_conexiones() -> None:
    desde_backend = Encuesta.model_validate({"conexiones": [{"material": "PVC"}]})
    desde_python = Encuesta(lista_conexiones=[Conexion(material="PVC")])
    assert desde_backend.lista_conexiones == desde_python.lista_conexiones


def test_asignacion_no_texto_rechazada() -> None:
    encuesta = Encuesta()
    with pytest.raises(ValidationError):
        encuesta.tapa_estado = 3  # type: ignore[assignment]


def test_adjunto_desde_archivo(tmp_path) -> None:
    foto = tmp_path / "tapa_norte.jpg"
    foto.write_bytes(b"\xff\xd8\xff\xe0datos")
    adjunto = Adjunto.desde_archivo(foto)
    assert adjunto.nombre == "tapa_norte.jpg"
    assert adjunto.contenido == b"\xff\xd8\xff\xe0datos"
    assert adjunto.content_type == "image/jpeg"
    assert "bytes=9" in repr(adjunto)


def test_adjunto_tipo_desconocido() -> None:
    adjunto = Adjunto.crear("sin_extension", b"x")
    assert adjunto.content_type == "application/octet-stream"
