"""
Interfaz del content source (origen remoto de traducciones).
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class IContentSource(ABC):
    """
    Origen remoto de contenido por proyecto.
    Entrega el contenido serializado pendiente de un resource/locale.
    """

    @abstractmethod
    def get_resource(self, resource_slug: str) -> Dict[str, Any]:
        """
        Obtiene los metadatos de un resource.

        Args:
            resource_slug: Slug del resource

        Returns:
            Dict[str, Any]: Metadatos (slug, nombre, locale fuente, ...)
        """
        pass

    @abstractmethod
    def download(self, resource_slug: str, language: str) -> str:
        """
        Descarga el contenido traducido de un resource.

        Args:
            resource_slug: Slug del resource
            language: Locale a descargar

        Returns:
            str: Contenido serializado (YAML)
        """
        pass

    @abstractmethod
    def upload_source(self, resource_slug: str, content: str) -> Dict[str, Any]:
        """
        Sube el contenido fuente (locale original) de un resource.

        Args:
            resource_slug: Slug del resource
            content: Contenido serializado (YAML)

        Returns:
            Dict[str, Any]: Resumen devuelto por el origen remoto
        """
        pass
