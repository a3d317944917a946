"""
Interfaces ports pour le catalogue externe.

Le catalogue (TMDB) fournit la recherche, les details des series, films et
saisons, ainsi que le telechargement des images. Les structures ci-dessous
sont la vue normalisee qu'en a le reste de l'application.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


class CatalogError(Exception):
    """Erreur d'acces au catalogue (reseau, statut HTTP, reponse invalide)."""


@dataclass
class CatalogCandidate:
    """
    Resultat de recherche depuis le catalogue.

    Attributs:
        id: ID catalogue
        name: Titre localise
        original_name: Titre en langue originale
        date: Date de sortie ou de premiere diffusion (YYYY-MM-DD)
        poster_path: Chemin de l'affiche sur le CDN
        overview: Resume
        vote_average: Note moyenne (0-10)
        media_type: "tv" ou "movie" (recherche multi uniquement)
    """

    id: int
    name: str
    original_name: Optional[str] = None
    date: Optional[str] = None
    poster_path: Optional[str] = None
    overview: Optional[str] = None
    vote_average: float = 0.0
    media_type: Optional[str] = None

    @property
    def year(self) -> Optional[int]:
        """Annee extraite de la date, si disponible."""
        if self.date and len(self.date) >= 4 and self.date[:4].isdigit():
            return int(self.date[:4])
        return None


@dataclass
class EpisodeDetails:
    """Details d'un episode dans une saison."""

    episode_number: int
    name: str = ""
    overview: str = ""
    air_date: Optional[str] = None
    vote_average: float = 0.0
    runtime: Optional[int] = None
    still_path: Optional[str] = None


@dataclass
class SeasonDetails:
    """Details d'une saison et de ses episodes."""

    season_number: int
    name: str = ""
    overview: str = ""
    air_date: Optional[str] = None
    poster_path: Optional[str] = None
    episodes: list[EpisodeDetails] = field(default_factory=list)

    def episode(self, number: int) -> Optional[EpisodeDetails]:
        """Retourne l'episode portant ce numero, s'il existe."""
        for ep in self.episodes:
            if ep.episode_number == number:
                return ep
        return None


@dataclass
class ShowDetails:
    """Details d'une serie."""

    id: int
    name: str
    original_name: Optional[str] = None
    overview: str = ""
    first_air_date: Optional[str] = None
    status: Optional[str] = None
    vote_average: float = 0.0
    genres: tuple[str, ...] = ()
    studios: tuple[str, ...] = ()
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    imdb_id: Optional[str] = None

    @property
    def year(self) -> Optional[int]:
        if self.first_air_date and self.first_air_date[:4].isdigit():
            return int(self.first_air_date[:4])
        return None


@dataclass
class MovieDetails:
    """Details d'un film."""

    id: int
    title: str
    original_title: Optional[str] = None
    overview: str = ""
    tagline: str = ""
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: float = 0.0
    genres: tuple[str, ...] = ()
    studios: tuple[str, ...] = ()
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    imdb_id: Optional[str] = None

    @property
    def year(self) -> Optional[int]:
        if self.release_date and self.release_date[:4].isdigit():
            return int(self.release_date[:4])
        return None


class ICatalogClient(ABC):
    """
    Interface du catalogue externe de metadonnees.

    Toutes les methodes reseau levent CatalogError en cas d'echec.
    """

    @abstractmethod
    async def search_shows(
        self, query: str, year: Optional[int] = None
    ) -> list[CatalogCandidate]:
        """Recherche des series par titre, filtrees par annee de premiere diffusion."""
        ...

    @abstractmethod
    async def search_movies(
        self, query: str, year: Optional[int] = None
    ) -> list[CatalogCandidate]:
        """Recherche des films par titre, filtres par annee de sortie."""
        ...

    @abstractmethod
    async def search_multi(self, query: str) -> list[CatalogCandidate]:
        """
        Recherche mixte series et films.

        Retourne uniquement les resultats de type "tv" ou "movie", avec
        media_type renseigne.
        """
        ...

    @abstractmethod
    async def get_show_details(self, show_id: int) -> ShowDetails:
        """Recupere les details d'une serie."""
        ...

    @abstractmethod
    async def get_movie_details(self, movie_id: int) -> MovieDetails:
        """Recupere les details d'un film."""
        ...

    @abstractmethod
    async def get_season_details(self, show_id: int, season: int) -> SeasonDetails:
        """Recupere les details d'une saison et de ses episodes."""
        ...

    @abstractmethod
    async def resolve_by_external_id(
        self, external_id: str, media_type: Optional[str] = None
    ) -> Optional[CatalogCandidate]:
        """
        Resout un identifiant IMDb en entree du catalogue.

        media_type ("tv" ou "movie") indique le type a privilegier quand
        l'identifiant correspond aux deux. Retourne None si aucune serie ni
        aucun film ne correspond.
        """
        ...

    @abstractmethod
    def image_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        """Construit l'URL complete d'une image, ou None si path est vide."""
        ...

    @abstractmethod
    async def download_image(self, url: str) -> bytes:
        """Telecharge une image et retourne son contenu."""
        ...
