# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/encuesta_pozos/__init__.py
# Descripción: Inicializa el paquete de encuestas de inspección de pozos

from .auth import AuthGate, EstadoAuth
from .envio import (
    ColaEnvios,
    EstadoEnvio,
    PoliticaEnvio,
    ResultadoEnvio,
    construir_multipart,
    enviar_encuesta,
    serializar_encuesta,
)
from .errors import (
    CampoDesconocido,
    ConexionInexistente,
    EncuestaError,
    EnvioEnCurso,
    ErrorSerializacion,
    ValorFueraDeCatalogo,
)
from .estado import FormularioEncuesta
from .schemas import Adjunto, Conexion, Encuesta

__all__ = [
    "Adjunto",
    "AuthGate",
    "CampoDesconocido",
    "ColaEnvios",
    "Conexion",
    "ConexionInexistente",
    "Encuesta",
    "EncuestaError",
    "EnvioEnCurso",
    "ErrorSerializacion",
    "EstadoAuth",
    "EstadoEnvio",
    "FormularioEncuesta",
    "PoliticaEnvio",
    "ResultadoEnvio",
    "ValorFueraDeCatalogo",
    "construir_multipart",
    "enviar_encuesta",
    "serializar_encuesta",
]
