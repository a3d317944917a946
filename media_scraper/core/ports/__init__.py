"""
Ports (interfaces abstraites) de l'application.
"""

from media_scraper.core.ports.api_clients import (
    CatalogCandidate,
    CatalogError,
    EpisodeDetails,
    ICatalogClient,
    MovieDetails,
    SeasonDetails,
    ShowDetails,
)
from media_scraper.core.ports.file_system import IFileSystem
from media_scraper.core.ports.parser import IFilenameParser
from media_scraper.core.ports.recognizer import IPathRecognizer
from media_scraper.core.ports.repositories import ITaskRepository

__all__ = [
    "CatalogCandidate",
    "CatalogError",
    "EpisodeDetails",
    "ICatalogClient",
    "MovieDetails",
    "SeasonDetails",
    "ShowDetails",
    "IFileSystem",
    "IFilenameParser",
    "IPathRecognizer",
    "ITaskRepository",
]
