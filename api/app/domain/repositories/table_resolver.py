"""
Interfaz de resolución proyecto/resource -> tabla destino.
Se inyecta en IngestionHandler en lugar de consultar un registro global.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from app.domain.repositories.content_source import IContentSource

if TYPE_CHECKING:
    from app.infrastructure.database.table_handle import TableHandle


class ITableResolver(ABC):
    """
    Resuelve los colaboradores de un proyecto.
    Todas las operaciones levantan ProjectNotFoundException si el proyecto
    no está configurado.
    """

    @abstractmethod
    def webhook_secret_for(self, project_slug: str) -> str:
        """Secreto compartido con el que se firma el webhook del proyecto."""
        pass

    @abstractmethod
    def content_source_for(self, project_slug: str) -> IContentSource:
        """Content source que entrega el contenido remoto del proyecto."""
        pass

    @abstractmethod
    def table_for_resource(self, project_slug: str, resource_slug: str) -> "TableHandle":
        """
        Tabla asociada a un resource.

        Raises:
            TableNotFoundException: si ningún resource del proyecto coincide
        """
        pass

    @abstractmethod
    def table_named(self, project_slug: str, table_name: str) -> "TableHandle":
        """
        Tabla del mismo database por nombre.

        Raises:
            TableNotFoundException: si el database no tiene esa tabla
        """
        pass
