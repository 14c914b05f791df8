"""
Endpoints de webhooks entrantes.
Transifex notifica aqui cuando un resource cambia para un locale.
"""
import asyncio

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.v1.dependencies.use_case_deps import get_ingestion_handler
from app.application.use_cases.ingestion_use_cases import IngestionHandler
from app.domain.entities.sync import WebhookNotification
from app.shared.constants.sync_constants import DATE_HEADER, SIGNATURE_HEADER, URL_HEADER


router = APIRouter(prefix="/hooks", tags=["Hooks"])


@router.post(
    "/transifex",
    summary="Recibir notificacion de traducciones de Transifex"
)
async def transifex_hook(
    request: Request,
    handler: IngestionHandler = Depends(get_ingestion_handler),
) -> JSONResponse:
    """
    Aplica las traducciones notificadas por Transifex.

    Respuestas:
    - 200 `{}`: contenido descargado y escrito
    - 401 `[{"error": "Unauthorized"}]`: firma ausente, invalida o vencida
    - 500 `[{"error": "Internal server error: <mensaje>"}]`: fallo al descargar,
      decodificar o escribir
    """
    # La firma se calcula sobre el body crudo: no usar Form()
    body = await request.body()
    notification = WebhookNotification.from_headers(
        http_verb=request.method,
        headers=request.headers,
        body=body,
        signature_header=SIGNATURE_HEADER,
        url_header=URL_HEADER,
        date_header=DATE_HEADER,
    )

    # El handler es bloqueante (HTTP + DB): thread separado para no bloquear el event loop
    result = await asyncio.to_thread(handler.handle, notification)

    return JSONResponse(status_code=result.status_code, content=result.body)
