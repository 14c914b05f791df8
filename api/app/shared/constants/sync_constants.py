"""
Constantes relacionadas con la ingesta de traducciones.
Define estados del webhook, headers esperados y valores por defecto.
"""
from enum import Enum


class IngestionState(str, Enum):
    """Estados posibles del procesamiento de una notificación de webhook."""
    RECEIVED = "received"
    AUTHENTICATING = "authenticating"
    REJECTED = "rejected"
    FETCHING = "fetching"
    DECODING = "decoding"
    WRITING = "writing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Estados terminales de la máquina de estados
TERMINAL_STATES = frozenset({
    IngestionState.REJECTED,
    IngestionState.SUCCEEDED,
    IngestionState.FAILED,
})


# Headers del webhook de Transifex
SIGNATURE_HEADER = "X-TX-Signature-V2"
URL_HEADER = "X-TX-Url"
DATE_HEADER = "Date"

# Tipos de resource de Transifex cuyo contenido es YAML
YAML_I18N_TYPES = ("YML", "YAML")

# Iterador de tablas
DEFAULT_BATCH_SIZE = 50
DEFAULT_ORDERING_COLUMN = "id"

# Tablas de traducciones (convención Globalize)
TRANSLATIONS_TABLE_SUFFIX = "_translations"
DEFAULT_LOCALE_COLUMN = "locale"
DEFAULT_CREATED_AT_COLUMN = "created_at"
DEFAULT_UPDATED_AT_COLUMN = "updated_at"

# Ventana de tolerancia para el header Date (replay protection)
DEFAULT_MAX_CLOCK_SKEW_SECONDS = 300
