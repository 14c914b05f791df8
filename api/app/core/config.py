"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.

El catalogo de databases/tablas/proyectos vive en un archivo YAML aparte
(TXDB_CONFIG_PATH); aqui solo se configuran el servidor, logging, la politica
de autenticacion del webhook y el cliente de Transifex.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno (y .env) con valores por defecto.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignorar campos extra del .env
    )

    # Servicio
    APP_NAME: str = Field(default="Locale Content Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Catalogo de databases (YAML)
    TXDB_CONFIG_PATH: str = Field(default="txdb.yml")

    # Pool de conexiones (solo aplica a PostgreSQL)
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # Webhook: ventana de tolerancia del header Date, en segundos
    WEBHOOK_MAX_CLOCK_SKEW_SECONDS: int = Field(default=300, ge=0)

    # Transifex
    TRANSIFEX_API_URL: str = Field(default="https://www.transifex.com/api/2")
    TRANSIFEX_TIMEOUT_S: int = Field(default=30)
    TRANSIFEX_MAX_RETRIES: int = Field(default=4)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")


# Instancia global de configuracion
settings = Settings()
