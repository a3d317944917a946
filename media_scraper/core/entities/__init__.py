"""
Business entities representing core domain concepts.

Exports:
- MediaFile, AssetFlags, SeasonInfo, ShowInfo, MovieInfo: scanned library views
- DirectoryGroup, DirectorySummary: inbox grouped by directory
- GroupStatus, LibraryStats: show scrape status and library counters
- Task, TaskStatus, TaskType, TaskStats, BatchProgress: task tracking
- MatchCandidate, MatchResult, PathRecognition: catalog matching
- EpisodeSource, ProcessItem, OperationResult, BatchItemResult, BatchResult: pipeline I/O
"""

from media_scraper.core.entities.match import MatchCandidate, MatchResult, PathRecognition
from media_scraper.core.entities.media import (
    AssetFlags,
    DirectoryGroup,
    DirectorySummary,
    GroupStatus,
    LibraryStats,
    MediaFile,
    MovieInfo,
    SeasonInfo,
    ShowInfo,
)
from media_scraper.core.entities.operations import (
    BatchItemResult,
    BatchResult,
    EpisodeSource,
    OperationResult,
    ProcessItem,
)
from media_scraper.core.entities.task import (
    BatchProgress,
    Task,
    TaskStats,
    TaskStatus,
    TaskType,
)

__all__ = [
    "MediaFile",
    "AssetFlags",
    "SeasonInfo",
    "ShowInfo",
    "MovieInfo",
    "DirectoryGroup",
    "DirectorySummary",
    "GroupStatus",
    "LibraryStats",
    "Task",
    "TaskStatus",
    "TaskType",
    "TaskStats",
    "BatchProgress",
    "MatchCandidate",
    "MatchResult",
    "PathRecognition",
    "EpisodeSource",
    "ProcessItem",
    "OperationResult",
    "BatchItemResult",
    "BatchResult",
]
