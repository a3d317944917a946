"""
Fixtures pytest partagees pour les tests MediaScraper.

Ce module contient les fixtures communes utilisees dans les tests:
- Systeme de fichiers en memoire et racines de mediatheque
- Faux catalogue (AsyncMock de ICatalogClient) avec une serie et un film
- Services assembles sur ces faux (scanner, garde, pipeline, taches)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from media_scraper.adapters.parsing import TokenFilenameParser
from media_scraper.config import MediaPaths, Settings
from media_scraper.core.ports.api_clients import (
    EpisodeDetails,
    ICatalogClient,
    MovieDetails,
    SeasonDetails,
    ShowDetails,
)
from media_scraper.infrastructure.persistence.memory_task_repository import InMemoryTaskRepository
from media_scraper.services.cleanup import CleanupGuard
from media_scraper.services.nfo import NfoCodec
from media_scraper.services.progress import ProgressBus
from media_scraper.services.reconciliation import ReconciliationService
from media_scraper.services.scanner import LibraryScanner
from media_scraper.services.tasks import TaskService
from tests.fixtures.memory_fs import MemoryFileSystem

GENERATOR = "media-scraper-web"


class FakeClock:
    """Horloge manuelle en secondes."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


@pytest.fixture
def media_paths() -> MediaPaths:
    return MediaPaths(inbox=Path("/media/Inbox"), tv=Path("/media/TV"), movies=Path("/media/Movies"))


@pytest.fixture
def memory_fs(media_paths: MediaPaths) -> MemoryFileSystem:
    """Systeme de fichiers en memoire avec les trois racines creees."""
    fs = MemoryFileSystem()
    for root in (media_paths.inbox, media_paths.tv, media_paths.movies):
        fs.add_dir(root)
    return fs


@pytest.fixture
def parser() -> TokenFilenameParser:
    return TokenFilenameParser()


@pytest.fixture
def nfo_codec() -> NfoCodec:
    return NfoCodec(GENERATOR)


@pytest.fixture
def show_details() -> ShowDetails:
    return ShowDetails(
        id=1396,
        name="Show",
        original_name="Show Original",
        overview="A chemistry teacher.",
        first_air_date="2008-01-20",
        status="Ended",
        vote_average=8.9,
        genres=("Drama",),
        poster_path="/show.jpg",
        backdrop_path="/show_backdrop.jpg",
        imdb_id="tt0903747",
    )


@pytest.fixture
def season_details() -> SeasonDetails:
    return SeasonDetails(
        season_number=1,
        name="Season 1",
        air_date="2008-01-20",
        poster_path="/season1.jpg",
        episodes=[
            EpisodeDetails(episode_number=1, name="Pilot", air_date="2008-01-20", runtime=58),
            EpisodeDetails(episode_number=2, name="Cat's in the Bag", air_date="2008-01-27"),
        ],
    )


@pytest.fixture
def movie_details() -> MovieDetails:
    return MovieDetails(
        id=438631,
        title="Dune",
        original_title="Dune",
        overview="Paul Atreides.",
        tagline="Beyond fear, destiny awaits.",
        release_date="2021-09-15",
        runtime=155,
        vote_average=7.8,
        poster_path="/dune.jpg",
        backdrop_path="/dune_backdrop.jpg",
        imdb_id="tt1160419",
    )


@pytest.fixture
def fake_catalog(
    show_details: ShowDetails, season_details: SeasonDetails, movie_details: MovieDetails
) -> AsyncMock:
    """
    Faux ICatalogClient.

    Les details de saison reprennent le numero demande ; image_url suit le
    format du CDN TMDB ; download_image retourne des octets fixes.
    """
    catalog = AsyncMock(spec=ICatalogClient)
    catalog.get_show_details.return_value = show_details
    catalog.get_movie_details.return_value = movie_details

    async def season(show_id: int, number: int) -> SeasonDetails:
        if number == season_details.season_number:
            return season_details
        return SeasonDetails(season_number=number, name=f"Season {number}")

    catalog.get_season_details.side_effect = season
    catalog.download_image.return_value = b"\x89PNG image"
    catalog.search_shows.return_value = []
    catalog.search_movies.return_value = []
    catalog.search_multi.return_value = []
    catalog.resolve_by_external_id.return_value = None
    catalog.image_url = MagicMock(
        side_effect=lambda path, size="w500": f"https://image.tmdb.org/t/p/{size}{path}" if path else None
    )
    return catalog


@pytest.fixture
def scanner(memory_fs: MemoryFileSystem, parser: TokenFilenameParser, nfo_codec: NfoCodec) -> LibraryScanner:
    return LibraryScanner(memory_fs, parser, nfo_codec)


@pytest.fixture
def cleanup_guard(memory_fs: MemoryFileSystem, media_paths: MediaPaths) -> CleanupGuard:
    return CleanupGuard(memory_fs, media_paths)


@pytest.fixture
def reconciliation(
    memory_fs: MemoryFileSystem,
    fake_catalog: AsyncMock,
    nfo_codec: NfoCodec,
    scanner: LibraryScanner,
    cleanup_guard: CleanupGuard,
    media_paths: MediaPaths,
) -> ReconciliationService:
    return ReconciliationService(memory_fs, fake_catalog, nfo_codec, scanner, cleanup_guard, media_paths)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def task_service(clock: FakeClock) -> TaskService:
    return TaskService(InMemoryTaskRepository(), clock=clock)


@pytest.fixture
def progress_bus() -> ProgressBus:
    return ProgressBus()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour creer une mediatheque isolee pour
    chaque test.
    """
    inbox_dir = tmp_path / "Inbox"
    tv_dir = tmp_path / "TV"
    movies_dir = tmp_path / "Movies"
    for directory in (inbox_dir, tv_dir, movies_dir):
        directory.mkdir(parents=True)

    return Settings(
        _env_file=None,
        inbox_dir=inbox_dir,
        tv_dir=tv_dir,
        movies_dir=movies_dir,
        tmdb_api_key="test_api_key",
        batch_delay_seconds=0,
        log_level="WARNING",
        log_file=tmp_path / "logs" / "test.log",
    )
