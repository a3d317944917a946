"""
Interface port pour la reconnaissance assistee de chemins.
"""

from abc import ABC, abstractmethod
from typing import Optional

from media_scraper.core.entities import PathRecognition


class IPathRecognizer(ABC):
    """
    Identifie un media a partir de son chemin via un service externe (IA).

    Le resultat n'est qu'un indice supplementaire pour le matcher.
    """

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """True si le service est configure."""
        ...

    @abstractmethod
    async def recognize(self, path: str) -> Optional[PathRecognition]:
        """
        Reconnait un chemin.

        Returns:
            PathRecognition, ou None si le service n'a rien pu extraire
        """
        ...
