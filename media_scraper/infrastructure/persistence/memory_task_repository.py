"""
Implementation en memoire du repository de taches.
"""

import threading
from typing import Optional

from media_scraper.core.entities import Task
from media_scraper.core.ports.repositories import ITaskRepository


class InMemoryTaskRepository(ITaskRepository):
    """
    Repository de taches stockees dans un dictionnaire.

    Chaque ecriture remplace l'instantane complet de la tache ; le verrou ne
    protege que le dictionnaire, jamais un champ isole.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def get(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def save(self, task: Task) -> Task:
        with self._lock:
            self._tasks[task.id] = task
        return task

    def delete(self, task_id: str) -> None:
        with self._lock:
            self._tasks.pop(task_id, None)

    def list_all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())
