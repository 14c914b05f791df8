"""
Utilidades para manejo de fechas y horas.
"""
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Optional


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def now_utc() -> datetime:
        """
        Obtiene la fecha y hora actual en UTC.

        Returns:
            datetime: Fecha y hora actual en UTC
        """
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """
        Normaliza un datetime a UTC (aware).

        Los datetimes naive se asumen en UTC.

        Args:
            dt: Objeto datetime

        Returns:
            datetime: El mismo instante con tzinfo=UTC
        """
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def parse_http_date(value: Optional[str]) -> Optional[datetime]:
        """
        Parsea un header `Date` HTTP (RFC 7231 / RFC 1123).

        Ejemplo: "Tue, 15 Nov 1994 08:12:31 GMT"

        Args:
            value: Valor del header

        Returns:
            Optional[datetime]: datetime en UTC o None si no se puede parsear
        """
        if not value:
            return None
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            return None
        if parsed is None:
            return None
        return DateTimeUtils.ensure_utc(parsed)

    @staticmethod
    def format_http_date(dt: datetime) -> str:
        """
        Serializa un datetime al formato del header `Date` HTTP.

        Args:
            dt: Objeto datetime

        Returns:
            str: Fecha en formato RFC 1123 (GMT)
        """
        return format_datetime(DateTimeUtils.ensure_utc(dt), usegmt=True)
