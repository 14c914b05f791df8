"""
Cliente mínimo de la API REST v2 de Transifex (sin SDKs externos).

Requisitos cubiertos:
- requests
- rate-limit/backoff (429, 5xx)
- metadatos de resource, descarga de traducciones y subida de contenido fuente
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional

import requests
from loguru import logger

from app.domain.repositories.content_source import IContentSource
from app.shared.exceptions.domain import FetchFailure


@dataclass(frozen=True)
class TransifexCredentials:
    project_slug: str
    api_token: str
    organization: Optional[str] = None


class TransifexApiError(FetchFailure):
    """Error de integración con Transifex."""


class TransifexClient(IContentSource):
    """
    Cliente HTTP de Transifex para un proyecto.

    Importante:
    - No interpreta el contenido: devuelve el YAML tal cual lo entrega la API.
    - Los timeouts se aplican por request (timeout_s).
    """

    def __init__(
        self,
        credentials: TransifexCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://www.transifex.com/api/2",
        timeout_s: int = 30,
        max_retries: int = 4,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
    ) -> None:
        self._creds = credentials
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._session = session or requests.Session()

    @property
    def project_slug(self) -> str:
        return self._creds.project_slug

    def get_resource(self, resource_slug: str) -> dict[str, Any]:
        url = f"{self._resource_url(resource_slug)}/"
        return self._request_json("GET", url)

    def download(self, resource_slug: str, language: str) -> str:
        url = f"{self._resource_url(resource_slug)}/translation/{language}/"
        payload = self._request_json("GET", url)
        if "content" not in payload:
            raise TransifexApiError(
                f"Transifex no devolvió 'content' para {resource_slug} ({language})"
            )
        return payload["content"] or ""

    def upload_source(self, resource_slug: str, content: str) -> dict[str, Any]:
        url = f"{self._resource_url(resource_slug)}/content/"
        return self._request_json("PUT", url, json_body={"content": content})

    def close(self) -> None:
        self._session.close()

    def _resource_url(self, resource_slug: str) -> str:
        return f"{self._base_url}/project/{self._creds.project_slug}/resource/{resource_slug}"

    def _request_json(
        self, method: str, url: str, *, json_body: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/auth mal).
        """
        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.request(
                    method=method,
                    url=url,
                    json=json_body,
                    auth=("api", self._creds.api_token),
                    timeout=self._timeout_s,
                )
            except requests.RequestException as e:
                raise TransifexApiError(f"Transifex no respondió ({method} {url}): {e}") from e

            if 200 <= resp.status_code < 300:
                return resp.json()

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    raise TransifexApiError(
                        f"Transifex error {resp.status_code} tras {attempt} reintentos: {resp.text}"
                    )

                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        sleep_s = float(retry_after)
                    except ValueError:
                        sleep_s = self._min_backoff_s
                else:
                    # Exponencial simple + jitter proporcional
                    base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
                    sleep_s = base + (0.15 * base)

                logger.warning(
                    f"Transifex {resp.status_code} en {method} {url}; reintento {attempt + 1} en {sleep_s:.1f}s"
                )
                time.sleep(sleep_s)
                continue

            # Errores no recuperables
            raise TransifexApiError(
                f"Transifex request falló {resp.status_code}: {resp.text}"
            )

        raise TransifexApiError(f"Transifex request sin respuesta: {method} {url}")
