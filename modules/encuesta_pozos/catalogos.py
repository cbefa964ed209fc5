# Nombre de archivo: catalogos.py
# Ubicación de archivo: modules/encuesta_pozos/catalogos.py
# Descripción: Catálogos de opciones y disposición de secciones del formulario de inspección

"""Catálogos fijos de opciones para cada campo de clasificación.

El catálogo es orientativo: el formulario ofrece estas opciones en los
selectores, pero la encuesta guarda texto plano. El control estricto es
opcional y lo aplica ``FormularioEncuesta`` cuando se lo pide.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

PLACEHOLDER = "-- Seleccione --"

TIPO_SISTEMA: Tuple[str, ...] = ("Aguas Lluvia", "Aguas Residuales", "Combinado")
TIPO_POZO: Tuple[str, ...] = ("Pozo", "Camara", "Alivio")
SI_NO: Tuple[str, ...] = ("Si", "No")
TAPA_TIPO: Tuple[str, ...] = (
    "Ferroconcreto",
    "Concreto",
    "Hierro sin Bisagra",
    "Hierro con bisagra",
    "Tapa Seguridad",
    "Tapa en fibra",
)
ESTADO_BUENO_REGULAR_MALO: Tuple[str, ...] = ("Bueno", "Regular", "Malo")
DIAGNOSTICO_CAMBIAR_REPARAR: Tuple[str, ...] = ("Cambiar", "Reparar", "No Requiere")
# Compartido por cargue y cono
CARGUE_ESTADO: Tuple[str, ...] = ("Bueno", "Regular", "Malo", "Grietas", "Partido", "Hundido")
CILINDRO_MATERIAL: Tuple[str, ...] = ("Mamposteria", "Concreto", "GRP")
CILINDRO_ESTADO: Tuple[str, ...] = (
    "Bueno",
    "Regular",
    "Malo",
    "Grietas",
    "Partido",
    "Huecos",
    "Sin Pañete",
    "Otro",
)
CANUELA_ESTADO: Tuple[str, ...] = ("Bueno", "Regular", "Malo", "Sedimentada", "Desgastada", "Socavacion")
ESCALONES_TIPO: Tuple[str, ...] = ("Escalones", "Ladrillos")
ESCALONES_ESTADO: Tuple[str, ...] = ("Bueno", "Regular", "Malo", "Doblados", "Faltan", "Corroidos")
ESTADO_GENERAL_POZO: Tuple[str, ...] = (
    "Infiltracion",
    "Represado",
    "Con basura",
    "Raices",
    "Fuera de Servicio",
    "Lleno de tierra",
)

# Campos de selección -> catálogo. pozo_numero y observaciones son texto libre.
CATALOGO_POR_CAMPO: Dict[str, Tuple[str, ...]] = {
    "tipo_sistema": TIPO_SISTEMA,
    "tipo_pozo": TIPO_POZO,
    "tapa_existe": SI_NO,
    "tapa_tipo": TAPA_TIPO,
    "tapa_estado": ESTADO_BUENO_REGULAR_MALO,
    "tapa_diagnostico": DIAGNOSTICO_CAMBIAR_REPARAR,
    "cargue_existe": SI_NO,
    "cargue_estado": CARGUE_ESTADO,
    "cargue_diagnostico": DIAGNOSTICO_CAMBIAR_REPARAR,
    "cono_existe": SI_NO,
    "cono_estado": CARGUE_ESTADO,
    "cono_diagnostico": DIAGNOSTICO_CAMBIAR_REPARAR,
    "cilindro_material": CILINDRO_MATERIAL,
    "cilindro_estado": CILINDRO_ESTADO,
    "cilindro_diagnostico": DIAGNOSTICO_CAMBIAR_REPARAR,
    "canuela_estado": CANUELA_ESTADO,
    "canuela_diagnostico": DIAGNOSTICO_CAMBIAR_REPARAR,
    "escalones_existe": SI_NO,
    "escalones_tipo": ESCALONES_TIPO,
    "escalones_estado": ESCALONES_ESTADO,
    "escalones_diagnostico": DIAGNOSTICO_CAMBIAR_REPARAR,
    "estado_general_pozo": ESTADO_GENERAL_POZO,
}

# (título, columnas de la grilla, [(campo, etiqueta)])
SECCIONES: List[Tuple[str, int, List[Tuple[str, str]]]] = [
    (
        "Datos Generales",
        3,
        [
            ("tipo_sistema", "Tipo de Sistema"),
            ("tipo_pozo", "Tipo de Pozo"),
            ("pozo_numero", "Número de Pozo"),
        ],
    ),
    (
        "Tapa",
        4,
        [
            ("tapa_existe", "Existe"),
            ("tapa_tipo", "Tipo"),
            ("tapa_estado", "Estado"),
            ("tapa_diagnostico", "Diagnóstico"),
        ],
    ),
    (
        "Cargue",
        3,
        [
            ("cargue_existe", "Existe"),
            ("cargue_estado", "Estado"),
            ("cargue_diagnostico", "Diagnóstico"),
        ],
    ),
    (
        "Cono",
        3,
        [
            ("cono_existe", "Existe"),
            ("cono_estado", "Estado"),
            ("cono_diagnostico", "Diagnóstico"),
        ],
    ),
    (
        "Cilindro",
        3,
        [
            ("cilindro_material", "Material"),
            ("cilindro_estado", "Estado"),
            ("cilindro_diagnostico", "Diagnóstico"),
        ],
    ),
    (
        "Cañuela",
        2,
        [
            ("canuela_estado", "Estado"),
            ("canuela_diagnostico", "Diagnóstico"),
        ],
    ),
    (
        "Escalones",
        4,
        [
            ("escalones_existe", "Existen"),
            ("escalones_tipo", "Tipo"),
            ("escalones_estado", "Estado"),
            ("escalones_diagnostico", "Diagnóstico"),
        ],
    ),
    (
        "Evaluación Final",
        1,
        [
            ("estado_general_pozo", "Estado General del Pozo"),
            ("observaciones", "Observaciones"),
        ],
    ),
]

ETIQUETAS_CONEXION: List[Tuple[str, str]] = [
    ("cota_razante", "Cota Razante"),
    ("cota_clave", "Cota Clave"),
    ("diametro_pulgadas", "Diámetro (pulg)"),
    ("material", "Material"),
    ("conecta_a", "Conecta A"),
]


def catalogo_de(campo: str) -> Optional[Tuple[str, ...]]:
    """Catálogo asociado al campo, o None si es texto libre."""
    return CATALOGO_POR_CAMPO.get(campo)


def opciones_para(campo: str) -> List[Tuple[str, str, bool]]:
    """Opciones del selector como (valor, etiqueta, seleccionable).

    La primera entrada es el placeholder: valor "" y no seleccionable.
    Los campos de texto libre devuelven lista vacía.
    """
    catalogo = catalogo_de(campo)
    if catalogo is None:
        return []
    return [("", PLACEHOLDER, False)] + [(valor, valor, True) for valor in catalogo]


def pertenece(campo: str, valor: str) -> bool:
    """True si el valor es aceptable para el campo.

    El vacío (sin seleccionar) siempre se acepta; los campos sin catálogo
    aceptan cualquier texto.
    """
    if valor == "":
        return True
    catalogo = catalogo_de(campo)
    return catalogo is None or valor in catalogo


__all__ = [
    "PLACEHOLDER",
    "TIPO_SISTEMA",
    "TIPO_POZO",
    "SI_NO",
    "TAPA_TIPO",
    "ESTADO_BUENO_REGULAR_MALO",
    "DIAGNOSTICO_CAMBIAR_REPARAR",
    "CARGUE_ESTADO",
    "CILINDRO_MATERIAL",
    "CILINDRO_ESTADO",
    "CANUELA_ESTADO",
    "ESCALONES_TIPO",
    "ESCALONES_ESTADO",
    "ESTADO_GENERAL_POZO",
    "CATALOGO_POR_CAMPO",
    "SECCIONES",
    "ETIQUETAS_CONEXION",
    "catalogo_de",
    "opciones_para",
    "pertenece",
]
