"""
Utilitaires partages pour les commandes CLI.

Ce module fournit :
- console : instance Rich Console partagee
- container : container DI du processus
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- async_command : decorateur transformant une fonction async en commande sync
- load_items : lecture d'un fichier JSON d'elements de lot
- affichage des plans et des resultats d'operation
"""

import asyncio
import inspect
import json
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Optional

import typer
from loguru import logger as loguru_logger
from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from media_scraper.container import Container
from media_scraper.core.entities import EpisodeSource, OperationResult, ProcessItem
from media_scraper.core.value_objects import MediaKind, ReconciliationPlan

console = Console()
container = Container()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("media_scraper")
    try:
        yield
    finally:
        loguru_logger.enable("media_scraper")


def async_command(func):
    """
    Transforme une fonction async en commande sync via asyncio.run().

    Preserve les annotations Typer pour que les options/arguments soient
    correctement interpretes.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    wrapper.__signature__ = inspect.signature(func)
    wrapper.__annotations__ = func.__annotations__
    return wrapper


def parse_kind(value: Optional[str]) -> Optional[MediaKind]:
    """Convertit "tv"/"movie" en MediaKind ; None ou "all" donne None."""
    if value is None or value == "all":
        return None
    try:
        kind = MediaKind(value)
    except ValueError:
        raise typer.BadParameter(f"type inconnu: {value} (tv, movie)")
    if kind == MediaKind.UNKNOWN:
        raise typer.BadParameter("type inconnu: unknown (tv, movie)")
    return kind


# Fichiers de lot

class EpisodeModel(BaseModel):
    source: Path
    episode: int = Field(ge=0)
    episode_end: Optional[int] = None


class ItemModel(BaseModel):
    """Element de lot tel qu'ecrit dans le fichier JSON."""

    kind: MediaKind
    source_path: Path
    catalog_id: Optional[int] = None
    show_name: Optional[str] = None
    season: Optional[int] = None
    episodes: list[EpisodeModel] = Field(default_factory=list)

    def to_item(self) -> ProcessItem:
        return ProcessItem(
            kind=self.kind,
            source_path=self.source_path,
            catalog_id=self.catalog_id,
            show_name=self.show_name,
            season=self.season,
            episodes=[EpisodeSource(e.source, e.episode, e.episode_end) for e in self.episodes],
        )


_ITEMS = TypeAdapter(list[ItemModel])


def load_items(path: Path) -> list[ProcessItem]:
    """
    Lit une liste d'elements de lot depuis un fichier JSON.

    Raises:
        typer.BadParameter: Si le fichier est illisible ou invalide
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return [model.to_item() for model in _ITEMS.validate_python(data)]
    except (OSError, ValueError, ValidationError) as e:
        raise typer.BadParameter(f"fichier d'elements invalide {path}: {e}")


# Affichage

_ACTION_STYLES = {
    "create-dir": "cyan",
    "move": "yellow",
    "create-nfo": "green",
    "download-poster": "magenta",
}


def display_plan(plan: ReconciliationPlan, title: str = "Plan") -> None:
    """Affiche les actions d'un plan et son resume d'impact."""
    table = Table(title=title)
    table.add_column("Action", style="bold")
    table.add_column("Source")
    table.add_column("Destination")
    table.add_column("Ecrase", justify="center")
    for action in plan.actions:
        style = _ACTION_STYLES.get(action.type.value, "white")
        table.add_row(
            f"[{style}]{action.type.value}[/{style}]",
            str(action.source) if action.source else "",
            str(action.destination),
            "oui" if action.will_overwrite else "",
        )
    console.print(table)

    summary = plan.impact_summary
    console.print(
        f"[bold]Impact:[/bold] {summary.files_moving} deplacement(s), "
        f"{summary.nfo_creating} NFO cree(s), {summary.nfo_overwriting} NFO ecrase(s), "
        f"{summary.posters_downloading} image(s), "
        f"{len(summary.directories_creating)} repertoire(s)"
    )


def display_result(result: OperationResult) -> None:
    """Affiche le resultat d'une operation ; code de sortie 1 en cas d'echec."""
    if result.task_id:
        console.print(f"[dim]Tache {result.task_id}[/dim]")
    if result.success:
        console.print(f"[green]OK[/green] {result.message or ''}")
    else:
        console.print(f"[red]Echec[/red] {result.message or ''}")
    for cleanup in result.cleanup:
        console.print(f"[dim]Nettoyage {cleanup.path}: {cleanup.reason.value}[/dim]")
    if not result.success:
        raise typer.Exit(1)
