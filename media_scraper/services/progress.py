"""
Bus de progression des traitements par lot.

Canal publication/abonnement sans tampon : un abonne qui n'ecoute pas au
moment d'un evenement le manque. stream() fournit une vue asynchrone pour
un abonne unique (pont SSE, affichage CLI).
"""

import asyncio
from dataclasses import asdict, dataclass
from enum import Enum
from typing import AsyncIterator, Callable, Optional

from loguru import logger

from media_scraper.services.tasks import round_percent


class ProgressEventType(str, Enum):
    START = "start"
    PROGRESS = "progress"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class ProgressEvent:
    """
    Evenement de progression d'un lot.

    Attributs:
        type: start, progress, complete ou error
        task_id: Tache concernee
        current: Nombre d'elements traites
        total: Nombre total d'elements
        percent: round(current / total * 100), 0 si total est nul
        item: Element en cours
        message: Detail libre
    """

    type: ProgressEventType
    task_id: str
    current: int
    total: int
    percent: int
    item: Optional[str] = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data


ProgressListener = Callable[[ProgressEvent], None]


class ProgressBus:
    """Diffuse les evenements de progression a tous les abonnes."""

    def __init__(self) -> None:
        self._listeners: list[ProgressListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """
        Abonne un listener.

        Returns:
            Fonction de desabonnement (idempotente)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: ProgressEvent) -> None:
        """Diffuse un evenement ; un listener en echec n'empeche pas les autres."""
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener de progression en echec ({event.type.value})")

    def emit_progress(
        self,
        task_id: str,
        event_type: ProgressEventType,
        current: int,
        total: int,
        item: Optional[str] = None,
        message: Optional[str] = None,
    ) -> ProgressEvent:
        """Construit et diffuse un evenement, pourcentage calcule."""
        event = ProgressEvent(
            type=event_type,
            task_id=task_id,
            current=current,
            total=total,
            percent=round_percent(current, total),
            item=item,
            message=message,
        )
        self.emit(event)
        return event

    async def stream(self, task_id: Optional[str] = None) -> AsyncIterator[ProgressEvent]:
        """
        Itere sur les evenements recus apres l'abonnement.

        Filtre sur task_id si fourni ; s'arrete apres l'evenement complete
        de cette tache. Sans task_id, l'iteration ne s'arrete qu'a
        l'annulation du consommateur.
        """
        queue: asyncio.Queue[ProgressEvent] = asyncio.Queue()

        def enqueue(event: ProgressEvent) -> None:
            if task_id is None or event.task_id == task_id:
                queue.put_nowait(event)

        unsubscribe = self.subscribe(enqueue)
        try:
            while True:
                event = await queue.get()
                yield event
                if task_id is not None and event.type == ProgressEventType.COMPLETE:
                    return
        finally:
            unsubscribe()
