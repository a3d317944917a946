"""
Service de gestion des taches.

Suit les operations longues ou par lot sous forme de machine a etats :

    pending -> running -> success | failed
    pending -> cancelled

Les erreurs d'usage (identifiant inconnu, annulation d'une tache deja
demarree) retournent None au lieu de lever une exception.
"""

import itertools
import math
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from loguru import logger

from media_scraper.core.entities import (
    BatchProgress,
    Task,
    TaskStats,
    TaskStatus,
    TaskType,
)
from media_scraper.core.ports.repositories import ITaskRepository

CANCEL_MESSAGE = "Task cancelled by user"

# Champs geres par les transitions, interdits dans update()
_PROTECTED_FIELDS = frozenset({"id", "type", "created_at", "logs"})


def round_percent(current: int, total: int) -> int:
    """Pourcentage arrondi a l'entier le plus proche (demi vers le haut), 0 si total est nul."""
    if total <= 0:
        return 0
    return math.floor(current / total * 100 + 0.5)


def calculate_batch_progress(done: int, failed: int, total: int) -> BatchProgress:
    """Progression agregee d'un lot : les echecs comptent comme traites."""
    return BatchProgress(
        total=total,
        done=done,
        failed=failed,
        percent=round_percent(done + failed, total),
    )


class TaskService:
    """
    Registre des taches en cours et terminees.

    Chaque transition construit un nouvel instantane (dataclasses.replace)
    et le sauvegarde en entier dans le repository.

    Example:
        service = TaskService(InMemoryTaskRepository())
        task = service.create(TaskType.PROCESS, "3 fichiers")
        service.start(task.id)
        service.complete(task.id, success=True, message="Termine")
    """

    def __init__(
        self,
        repository: ITaskRepository,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            repository: Stockage des taches
            clock: Source de temps en secondes (injectable pour les tests)
        """
        self._repository = repository
        self._clock = clock
        self._counter = itertools.count(1)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _generate_id(self) -> str:
        return f"task_{self._now_ms()}_{next(self._counter)}"

    def create(self, task_type: TaskType, target: str) -> Task:
        """Cree une tache en attente, progression 0."""
        task = Task(
            id=self._generate_id(),
            type=task_type,
            target=target,
            created_at=self._now_ms(),
        )
        logger.debug(f"Tache creee: {task.id} ({task_type.value}) {target}")
        return self._repository.save(task)

    def get(self, task_id: str) -> Optional[Task]:
        return self._repository.get(task_id)

    def update(self, task_id: str, **patch: Any) -> Optional[Task]:
        """
        Applique un patch de champs (progress, message...) a une tache.

        Raises:
            ValueError: Si le patch touche un champ gere par les transitions
        """
        forbidden = _PROTECTED_FIELDS.intersection(patch)
        if forbidden:
            raise ValueError(f"Champs non modifiables: {', '.join(sorted(forbidden))}")
        task = self._repository.get(task_id)
        if task is None:
            return None
        return self._repository.save(replace(task, **patch))

    def add_log(self, task_id: str, message: str) -> Optional[Task]:
        """Ajoute une ligne horodatee [HH:MM:SS] au journal de la tache."""
        task = self._repository.get(task_id)
        if task is None:
            return None
        stamp = datetime.fromtimestamp(self._clock(), tz=timezone.utc).strftime("%H:%M:%S")
        return self._repository.save(replace(task, logs=task.logs + (f"[{stamp}] {message}",)))

    def start(self, task_id: str) -> Optional[Task]:
        """Passe une tache en attente en cours d'execution (None sinon)."""
        task = self._repository.get(task_id)
        if task is None or task.status != TaskStatus.PENDING:
            return None
        return self._repository.save(
            replace(task, status=TaskStatus.RUNNING, started_at=self._now_ms())
        )

    def complete(
        self, task_id: str, success: bool, message: Optional[str] = None
    ) -> Optional[Task]:
        """
        Termine une tache en cours.

        En cas de succes la progression est forcee a 100 ; en cas d'echec
        elle est conservee et le message est copie dans error. Une tache
        qui n'est pas en cours reste inchangee et None est retourne.
        """
        task = self._repository.get(task_id)
        if task is None or task.status != TaskStatus.RUNNING:
            return None
        done = replace(
            task,
            status=TaskStatus.SUCCESS if success else TaskStatus.FAILED,
            progress=100 if success else task.progress,
            finished_at=self._now_ms(),
            message=message,
            error=None if success else message,
        )
        logger.info(f"Tache {task_id} terminee: {done.status.value} {message or ''}".rstrip())
        return self._repository.save(done)

    def cancel(self, task_id: str) -> Optional[Task]:
        """Annule une tache, uniquement si elle est encore en attente."""
        task = self._repository.get(task_id)
        if task is None or task.status != TaskStatus.PENDING:
            return None
        return self._repository.save(
            replace(
                task,
                status=TaskStatus.CANCELLED,
                finished_at=self._now_ms(),
                message=CANCEL_MESSAGE,
            )
        )

    def list_tasks(
        self, status: Optional[TaskStatus] = None, limit: Optional[int] = None
    ) -> list[Task]:
        """Taches de la plus recente a la plus ancienne, filtrees par statut."""
        tasks = sorted(
            reversed(self._repository.list_all()),
            key=lambda t: t.created_at,
            reverse=True,
        )
        if status is not None:
            tasks = [t for t in tasks if t.status == status]
        return tasks[:limit] if limit is not None else tasks

    def list_active(self) -> list[Task]:
        """Taches en attente ou en cours."""
        return [t for t in self.list_tasks() if not t.status.is_terminal]

    def stats(self) -> TaskStats:
        """Compte les taches par statut, recalcule a chaque appel."""
        stats = TaskStats()
        for task in self._repository.list_all():
            setattr(stats, task.status.value, getattr(stats, task.status.value) + 1)
            stats.total += 1
        return stats

    def cleanup(self, keep_recent: int = 50) -> int:
        """
        Ne conserve que les keep_recent taches terminees les plus recentes.

        Returns:
            Nombre de taches supprimees
        """
        terminal = [t for t in self.list_tasks() if t.status.is_terminal]
        removed = terminal[keep_recent:]
        for task in removed:
            self._repository.delete(task.id)
        if removed:
            logger.debug(f"{len(removed)} tache(s) terminee(s) supprimee(s)")
        return len(removed)
