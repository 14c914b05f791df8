"""
Gestión de engines de base de datos.

Cada database del catálogo tiene su propio engine (y pool). El esquema de las
tablas destino no es nuestro: se descubre por reflexión (ver TableHandle).
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _create_engine_args(database_url: str) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL usa pool de conexiones; SQLite en memoria necesita una
    unica conexion compartida entre threads.
    """
    args = {
        "echo": settings.DEBUG,
        "future": True,
    }

    # Configuracion de pool solo para PostgreSQL
    if database_url.startswith("postgresql"):
        args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
        })
    elif database_url.startswith("sqlite") and ":memory:" in database_url:
        args.update({
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        })

    return args


def build_engine(database_url: str) -> Engine:
    """
    Crea un engine síncrono para un database del catálogo.

    Args:
        database_url: URL SQLAlchemy (p.ej. postgresql+psycopg://...)

    Returns:
        Engine: Engine con pool propio
    """
    return create_engine(database_url, **_create_engine_args(database_url))


def dispose_engine(engine: Engine) -> None:
    """Cierra las conexiones del pool de un engine."""
    engine.dispose()
