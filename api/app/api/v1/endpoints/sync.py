"""
Endpoints para sincronizacion manual de traducciones.
Permite lanzar un backfill de una tabla desde la UI o un job.
"""
import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from loguru import logger

from app.api.v1.dependencies.use_case_deps import get_backfill_use_cases
from app.application.dto.ingestion_dto import BackfillResponseDTO
from app.application.use_cases.backfill_use_cases import BackfillUseCases


router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "/{database}/{table}/backfill",
    response_model=BackfillResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Descargar y aplicar todas las traducciones de una tabla"
)
async def backfill_table(
    database: str,
    table: str,
    locales: Optional[List[str]] = Query(
        default=None,
        description="Locales a aplicar. Si se omite, se usan los configurados para el database."
    ),
    use_cases: BackfillUseCases = Depends(get_backfill_use_cases),
) -> BackfillResponseDTO:
    """
    Ejecuta un backfill de la tabla.

    - Un locale que falla se reporta en `errors` y no detiene a los demas
    - Database o tabla desconocidos responden 400/404
    """
    logger.info(f"Iniciando backfill {database}.{table} desde API (locales={locales or 'config'})")

    # Ejecutar en thread separado para no bloquear el event loop
    return await asyncio.to_thread(use_cases.backfill_table, database, table, locales)
