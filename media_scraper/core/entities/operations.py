"""
Operation entities.

Inputs and outputs of the reconciliation pipeline. Every public pipeline
operation returns an OperationResult instead of raising for expected
failures (network error, missing file, unknown catalog id).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from media_scraper.core.value_objects import MediaKind, ReconciliationPlan


@dataclass(frozen=True)
class EpisodeSource:
    """One episode file to place into a season directory."""

    source: Path
    episode: int
    episode_end: Optional[int] = None


@dataclass
class ProcessItem:
    """
    One item of a preview or batch request.

    Attributes:
        kind: TV or MOVIE
        source_path: File to organize (inbox) or library path to refresh
        catalog_id: TMDB id of the show or movie
        show_name: Show directory name (TV)
        season: Season number (TV)
        episodes: Episode files to place (TV)
    """

    kind: MediaKind
    source_path: Path
    catalog_id: Optional[int] = None
    show_name: Optional[str] = None
    season: Optional[int] = None
    episodes: list[EpisodeSource] = field(default_factory=list)


@dataclass
class OperationResult:
    """
    Result of a pipeline operation.

    Attributes:
        success: True if the operation completed
        message: Summary or failure reason
        task_id: Supervising task, when the operation ran as a task
        plan: Plan that was executed
        cleanup: Cleanup decisions for source directories
    """

    success: bool
    message: Optional[str] = None
    task_id: Optional[str] = None
    plan: Optional[ReconciliationPlan] = None
    cleanup: list = field(default_factory=list)


@dataclass
class BatchItemResult:
    """Outcome of one batch item."""

    item: ProcessItem
    success: bool
    message: Optional[str] = None


@dataclass
class BatchResult:
    """Outcome of a whole batch."""

    task_id: str
    processed: int = 0
    failed: int = 0
    results: list[BatchItemResult] = field(default_factory=list)
