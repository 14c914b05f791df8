"""
Casos de uso de la aplicacion.
"""
from .ingestion_use_cases import IngestionHandler
from .backfill_use_cases import BackfillUseCases

__all__ = ["IngestionHandler", "BackfillUseCases"]
