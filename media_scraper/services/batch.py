"""
Traitement par lot et operations supervisees.

Chaque operation longue est enveloppee dans une tache (TaskService) et, pour
les lots, publie sa progression sur le ProgressBus. L'echec d'un element
n'interrompt jamais les elements suivants.
"""

import asyncio
from pathlib import Path
from typing import Optional

from loguru import logger

from media_scraper.config import MediaPaths
from media_scraper.core.entities import (
    BatchItemResult,
    BatchResult,
    OperationResult,
    ProcessItem,
    Task,
    TaskType,
)
from media_scraper.core.value_objects import MediaKind
from media_scraper.logging_config import task_context
from media_scraper.services.progress import ProgressBus, ProgressEventType
from media_scraper.services.reconciliation import ReconciliationService
from media_scraper.services.tasks import TaskService, calculate_batch_progress

NO_CATALOG_ID = "No catalog id provided"


class BatchProcessor:
    """
    Orchestration des lots et des operations de maintenance.

    Coordonne:
    - Le pipeline de reconciliation pour chaque element
    - Le registre des taches pour l'etat et le journal
    - Le bus de progression pour les abonnes (CLI, pont SSE)
    """

    def __init__(
        self,
        reconciliation: ReconciliationService,
        tasks: TaskService,
        progress: ProgressBus,
        paths: MediaPaths,
        delay_seconds: float = 0.3,
        task_retention: int = 50,
    ) -> None:
        """
        Args:
            reconciliation: Pipeline de reconciliation
            tasks: Registre des taches
            progress: Bus de progression
            paths: Racines de la mediatheque
            delay_seconds: Pause entre deux elements d'un lot
            task_retention: Nombre de taches terminees conservees
        """
        self._reconciliation = reconciliation
        self._tasks = tasks
        self._progress = progress
        self._paths = paths
        self._delay = delay_seconds
        self._retention = task_retention

    async def run_batch(self, items: list[ProcessItem]) -> BatchResult:
        """
        Traite un lot d'elements sous une tache "process".

        Evenements publies : start, puis progress avant et apres chaque
        element, error sur une exception inattendue, et toujours complete.
        La tache echoue seulement si tous les elements ont echoue.
        """
        task = self._tasks.create(TaskType.PROCESS, f"Batch processing {len(items)} items")
        self._tasks.start(task.id)
        with task_context(task.id):
            return await self._process_batch(task, items)

    async def _process_batch(self, task: Task, items: list[ProcessItem]) -> BatchResult:
        total = len(items)
        self._tasks.add_log(task.id, f"Debut du lot ({total} elements)")
        self._progress.emit_progress(
            task.id, ProgressEventType.START, 0, total, message=f"Debut du traitement de {total} element(s)"
        )

        result = BatchResult(task_id=task.id)
        for index, item in enumerate(items):
            label = str(item.source_path)
            try:
                self._tasks.add_log(task.id, f"Traitement: {label}")
                self._progress.emit_progress(
                    task.id, ProgressEventType.PROGRESS, index, total, label, f"En cours: {label}"
                )

                if item.catalog_id is None:
                    self._tasks.add_log(task.id, f"Pas d'ID catalogue pour {label}, ignore")
                    outcome = OperationResult(success=False, message=NO_CATALOG_ID)
                else:
                    outcome = await self._reconciliation.run_item(item)

                result.results.append(BatchItemResult(item, outcome.success, outcome.message))
                if outcome.success:
                    result.processed += 1
                else:
                    result.failed += 1
                    self._tasks.add_log(task.id, f"Echec {label}: {outcome.message}")

                progress = calculate_batch_progress(result.processed, result.failed, total)
                self._tasks.update(task.id, progress=progress.percent)
                self._progress.emit_progress(
                    task.id, ProgressEventType.PROGRESS, index + 1, total, label, f"Termine: {label}"
                )
            except Exception as e:
                logger.exception(f"Erreur inattendue sur {label}")
                self._tasks.add_log(task.id, f"Erreur {label}: {e}")
                result.failed += 1
                result.results.append(BatchItemResult(item, False, str(e)))
                self._progress.emit_progress(
                    task.id, ProgressEventType.ERROR, index + 1, total, label, f"Erreur: {e}"
                )

            if self._delay and index < total - 1:
                await asyncio.sleep(self._delay)

        summary = f"Completed: {result.processed}, Failed: {result.failed}"
        self._tasks.complete(task.id, total == 0 or result.failed < total, summary)
        self._progress.emit_progress(
            task.id,
            ProgressEventType.COMPLETE,
            total,
            total,
            message=f"Termine: {result.processed} reussi(s), {result.failed} echec(s)",
        )
        self._tasks.cleanup(self._retention)
        return result

    async def _supervise(self, task_type: TaskType, target: str, operation) -> OperationResult:
        task = self._tasks.create(task_type, target)
        self._tasks.start(task.id)
        try:
            with task_context(task.id):
                outcome = await operation
        except Exception as e:
            self._tasks.complete(task.id, False, str(e))
            raise
        self._tasks.complete(task.id, outcome.success, outcome.message)
        self._tasks.cleanup(self._retention)
        outcome.task_id = task.id
        return outcome

    def resolve_show_path(self, show_path: Path) -> Path:
        """Un chemin relatif est pris sous la racine des series."""
        return show_path if show_path.is_absolute() else self._paths.tv / show_path

    async def run_supplement(self, show_path: Path) -> OperationResult:
        """Complement d'une serie sous une tache "supplement"."""
        full_path = self.resolve_show_path(show_path)
        if not self._paths.is_under_tv(full_path):
            return OperationResult(success=False, message=f"Chemin invalide: {show_path}")
        return await self._supervise(
            TaskType.SUPPLEMENT, str(show_path), self._reconciliation.supplement(full_path)
        )

    async def run_fix_assets(self, kind: MediaKind, path: Path, catalog_id: int) -> OperationResult:
        """Reparation des elements manquants sous une tache "fix-assets"."""
        if not self._paths.is_in_library(path):
            return OperationResult(success=False, message=f"Chemin invalide: {path}")
        return await self._supervise(
            TaskType.FIX_ASSETS,
            str(path),
            self._reconciliation.fix_missing_assets(kind, path, catalog_id),
        )

    async def run_refresh(
        self,
        kind: MediaKind,
        path: Path,
        catalog_id: int,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> OperationResult:
        """Rafraichissement des metadonnees sous une tache "refresh"."""
        if not self._paths.is_in_library(path):
            return OperationResult(success=False, message=f"Chemin invalide: {path}")
        return await self._supervise(
            TaskType.REFRESH,
            str(path),
            self._reconciliation.refresh_metadata(kind, path, catalog_id, season, episode),
        )
