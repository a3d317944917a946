"""
Objets valeur pour les informations de parsing de noms de fichiers.

Objets valeur immutables representant les informations extraites du parsing
de noms de fichiers video et la classification du type de media.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaKind(str, Enum):
    """Type de media deduit du nom de fichier.

    Valeurs:
        TV: Episode de serie (saison ou episode detecte)
        MOVIE: Film
        UNKNOWN: Type non determine
    """

    TV = "tv"
    MOVIE = "movie"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedInfo:
    """
    Informations extraites du parsing d'un nom de fichier video.

    Jamais persiste : recalcule a chaque scan. Les champs absents
    restent a None, le parsing ne leve jamais d'exception.

    Attributs:
        title: Titre extrait (chaine vide si aucun token de titre)
        year: Annee de sortie (1900-2099)
        season: Numero de saison
        episode: Numero d'episode
        episode_end: Dernier episode pour les fichiers multi-episodes (S01E01E02)
        resolution: Resolution (ex: "1080p")
        source: Source du fichier (ex: "web-dl")
        codec: Codec video (ex: "x265")
    """

    title: str
    year: Optional[int] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_end: Optional[int] = None
    resolution: Optional[str] = None
    source: Optional[str] = None
    codec: Optional[str] = None

    @property
    def kind(self) -> MediaKind:
        """Serie si saison ou episode presents, film sinon."""
        if self.season or self.episode:
            return MediaKind.TV
        return MediaKind.MOVIE
