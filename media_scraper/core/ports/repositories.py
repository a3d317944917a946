"""
Interface port pour le stockage des taches.
"""

from abc import ABC, abstractmethod
from typing import Optional

from media_scraper.core.entities import Task


class ITaskRepository(ABC):
    """
    Stockage des instantanes de taches, indexes par identifiant.

    save remplace l'instantane precedent de la meme tache.
    """

    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]:
        ...

    @abstractmethod
    def save(self, task: Task) -> Task:
        ...

    @abstractmethod
    def delete(self, task_id: str) -> None:
        ...

    @abstractmethod
    def list_all(self) -> list[Task]:
        """Toutes les taches, dans l'ordre de creation."""
        ...
