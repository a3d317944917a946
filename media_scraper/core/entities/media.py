"""
Library view entities.

Entities describing what the scanner observes on disk: media files,
shows with their seasons, movies and inbox directory groups. They are
rebuilt on every scan and never cached, so they always reflect the
current directory contents.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from media_scraper.core.value_objects import MediaKind, ParsedInfo


class GroupStatus(str, Enum):
    """
    Scrape status of a show directory.

    SCRAPED: processed and no pending episode
    UNSCRAPED: no signed tvshow.nfo
    SUPPLEMENT: processed but new episodes lack an NFO
    """

    SCRAPED = "scraped"
    UNSCRAPED = "unscraped"
    SUPPLEMENT = "supplement"


@dataclass
class MediaFile:
    """
    A video file found during a scan.

    Attributes:
        path: Absolute path of the file
        name: File name with extension
        relative_path: Path relative to the scan root
        size: Size in bytes
        kind: TV if season/episode were parsed, MOVIE otherwise
        parsed: Information parsed from the relative path
        has_nfo: True if an adjacent <stem>.nfo exists
        is_processed: True if that NFO carries the generator signature
    """

    path: Path
    name: str
    relative_path: str
    size: int
    kind: MediaKind
    parsed: ParsedInfo
    has_nfo: bool = False
    is_processed: bool = False


@dataclass
class AssetFlags:
    """Presence of the well-known asset files in a directory."""

    has_poster: bool = False
    has_nfo: bool = False
    has_fanart: bool = False


@dataclass
class SeasonInfo:
    """One season of a show, with its episodes sorted by number."""

    season: int
    episodes: list[MediaFile] = field(default_factory=list)
    has_nfo: Optional[bool] = None
    assets: Optional[AssetFlags] = None


@dataclass
class ShowInfo:
    """
    A show directory under the TV root.

    Asset-related fields (assets, tmdb_id, group_status, supplement_count,
    overview, status, vote_average) are only filled by asset-aware scans.
    """

    path: Path
    name: str
    seasons: list[SeasonInfo] = field(default_factory=list)
    has_nfo: bool = False
    is_processed: bool = False
    year: Optional[int] = None
    poster_path: Optional[Path] = None
    overview: Optional[str] = None
    status: Optional[str] = None
    vote_average: Optional[float] = None
    assets: Optional[AssetFlags] = None
    tmdb_id: Optional[int] = None
    group_status: Optional[GroupStatus] = None
    supplement_count: Optional[int] = None

    @property
    def episode_count(self) -> int:
        """Total number of episodes across seasons."""
        return sum(len(s.episodes) for s in self.seasons)


@dataclass
class MovieInfo:
    """
    A movie directory under the movies root.

    The year comes from a "(YYYY)" suffix of the directory name and can be
    completed by the NFO.
    """

    path: Path
    name: str
    file: MediaFile
    has_nfo: bool = False
    is_processed: bool = False
    year: Optional[int] = None
    poster_path: Optional[Path] = None
    overview: Optional[str] = None
    tagline: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    assets: Optional[AssetFlags] = None
    tmdb_id: Optional[int] = None


@dataclass
class DirectorySummary:
    """Per-kind counts of an inbox directory group."""

    total: int = 0
    tv: int = 0
    movie: int = 0
    unknown: int = 0

    def count(self, media_file: MediaFile) -> None:
        """Account for one more file."""
        self.total += 1
        if media_file.kind == MediaKind.TV:
            self.tv += 1
        elif media_file.kind == MediaKind.MOVIE:
            self.movie += 1
        else:
            self.unknown += 1


@dataclass
class DirectoryGroup:
    """Inbox files grouped by their top-level subdirectory."""

    path: Path
    name: str
    files: list[MediaFile] = field(default_factory=list)
    summary: DirectorySummary = field(default_factory=DirectorySummary)


@dataclass
class LibraryStats:
    """Library-wide counters."""

    tv_shows: int = 0
    tv_episodes: int = 0
    tv_processed: int = 0
    movies: int = 0
    movies_processed: int = 0
    inbox: int = 0
