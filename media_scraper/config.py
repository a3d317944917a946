"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
MEDIA_SCRAPER_, et peut optionnellement être fournie via un fichier .env.

Les répertoires racines (inbox, séries, films) sont exposés via MediaPaths,
une structure explicite passée aux services à leur construction plutôt que
relue dans l'environnement à chaque appel.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de media_scraper/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def _normalize(path: Path | str) -> str:
    """Retire les slashs finaux pour une comparaison fiable des chemins."""
    text = str(path)
    stripped = text.rstrip("/")
    return stripped or text


@dataclass(frozen=True)
class MediaPaths:
    """
    Répertoires racines de la médiathèque.

    Attributs:
        inbox: Boîte de réception des fichiers non triés
        tv: Racine des séries organisées
        movies: Racine des films organisés
    """

    inbox: Path
    tv: Path
    movies: Path

    def protected_dirs(self) -> tuple[str, ...]:
        """Chemins normalisés des racines qui ne doivent jamais être supprimées."""
        return tuple(_normalize(p) for p in (self.inbox, self.tv, self.movies))

    def is_protected(self, path: Path | str) -> bool:
        """Vérifie si un chemin est l'une des racines protégées."""
        return _normalize(path) in self.protected_dirs()

    def is_under_tv(self, path: Path | str) -> bool:
        """Vérifie si un chemin est situé sous la racine des séries."""
        return _is_under(path, self.tv)

    def is_under_movies(self, path: Path | str) -> bool:
        """Vérifie si un chemin est situé sous la racine des films."""
        return _is_under(path, self.movies)

    def is_in_library(self, path: Path | str) -> bool:
        """Vérifie si un chemin appartient à la médiathèque (séries ou films)."""
        return self.is_under_tv(path) or self.is_under_movies(path)


def _is_under(path: Path | str, root: Path) -> bool:
    try:
        Path(path).relative_to(root)
        return True
    except ValueError:
        return False


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIA_SCRAPER_.
    Exemple : MEDIA_SCRAPER_TV_DIR=/srv/media/TV

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIA_SCRAPER_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Répertoires racines (avec expansion ~)
    inbox_dir: Path = Field(default=Path("/mnt/media/Inbox"))
    tv_dir: Path = Field(default=Path("/mnt/media/TV"))
    movies_dir: Path = Field(default=Path("/mnt/media/Movies"))

    # Catalogue TMDB (OPTIONNEL - recherche désactivée si non définie)
    tmdb_api_key: Optional[str] = Field(default=None)
    language: str = Field(default="zh-CN")

    # Reconnaissance de chemins par IA via Dify (OPTIONNEL)
    dify_api_key: Optional[str] = Field(default=None)
    dify_url: str = Field(default="https://api.dify.ai/v1/chat-messages")

    # Signature des NFO générés par l'application
    nfo_generator: str = Field(default="media-scraper-web")

    # Traitement par lot
    batch_delay_seconds: float = Field(default=0.3, ge=0)
    task_retention: int = Field(default=50, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/media-scraper.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("inbox_dir", "tv_dir", "movies_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def media_paths(self) -> MediaPaths:
        """Structure explicite des racines de la médiathèque."""
        return MediaPaths(inbox=self.inbox_dir, tv=self.tv_dir, movies=self.movies_dir)

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def dify_enabled(self) -> bool:
        """Vérifie si la reconnaissance de chemins Dify est configurée."""
        return bool(self.dify_api_key)
