"""
Autenticación de webhooks de Transifex (firma "X-TX-Signature-V2").

La firma es:

    base64(HMAC-SHA256(secret, "\\n".join([verbo, url, date, md5_hex(body)])))

Además del match de firma se exige que el header Date esté dentro de una
ventana de tolerancia respecto del reloj local (replay protection).

IMPORTANTE:
- Este servicio solo valida; no tiene efectos secundarios.
- La comparación es en tiempo constante (hmac.compare_digest).
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime
from typing import Callable, Optional, Union

from loguru import logger

from app.domain.entities.sync import WebhookNotification
from app.shared.constants.sync_constants import DEFAULT_MAX_CLOCK_SKEW_SECONDS
from app.shared.exceptions.auth import UnauthorizedException
from app.shared.utils.datetime_utils import DateTimeUtils


def compute_signature(
    *,
    http_verb: str,
    url: str,
    date_str: str,
    content: Union[bytes, str],
    secret: str,
) -> str:
    """
    Calcula la firma esperada de una notificación.

    Args:
        http_verb: Verbo HTTP (p.ej. "POST")
        url: URL destino declarada por el emisor (header X-TX-Url)
        date_str: Valor crudo del header Date
        content: Body crudo del request
        secret: Secreto compartido del proyecto

    Returns:
        str: Firma en base64
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    content_md5 = hashlib.md5(content).hexdigest()
    data = "\n".join([http_verb, url, date_str, content_md5])
    digest = hmac.new(secret.encode("utf-8"), data.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


class WebhookAuthenticator:
    """
    Valida la autenticidad de una notificación contra el secreto del proyecto.

    max_clock_skew_seconds:
        diferencia máxima (en ambos sentidos) entre el header Date y `clock()`.
        None desactiva el chequeo.
    """

    def __init__(
        self,
        max_clock_skew_seconds: Optional[int] = DEFAULT_MAX_CLOCK_SKEW_SECONDS,
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ) -> None:
        if max_clock_skew_seconds is not None and max_clock_skew_seconds < 0:
            raise ValueError("max_clock_skew_seconds no puede ser negativo")
        self._max_skew = max_clock_skew_seconds
        self._clock = clock

    def authenticate(self, notification: WebhookNotification, secret: str) -> None:
        """
        Raises:
            UnauthorizedException: firma ausente/inválida, Date ilegible o
            fuera de ventana, o proyecto sin secreto
        """
        if not secret:
            raise UnauthorizedException("webhook secret no configurado")
        if not notification.signature:
            raise UnauthorizedException("falta el header de firma")
        if not notification.url:
            raise UnauthorizedException("falta el header con la URL destino")

        sent_at = DateTimeUtils.parse_http_date(notification.date_str)
        if sent_at is None:
            raise UnauthorizedException(f"header Date ilegible: {notification.date_str!r}")

        if self._max_skew is not None:
            skew = abs((self._clock() - sent_at).total_seconds())
            if skew > self._max_skew:
                raise UnauthorizedException(
                    f"header Date fuera de ventana ({skew:.0f}s > {self._max_skew}s)"
                )

        expected = compute_signature(
            http_verb=notification.http_verb,
            url=notification.url,
            date_str=notification.date_str,
            content=notification.body,
            secret=secret,
        )
        # compare_digest con str solo acepta ASCII: comparamos bytes
        provided = notification.signature.strip().encode("utf-8")
        if not hmac.compare_digest(provided, expected.encode("ascii")):
            raise UnauthorizedException("firma inválida")

    def is_authentic(self, notification: WebhookNotification, secret: str) -> bool:
        try:
            self.authenticate(notification, secret)
        except UnauthorizedException as e:
            logger.warning(f"Webhook rechazado: {e.reason}")
            return False
        return True
