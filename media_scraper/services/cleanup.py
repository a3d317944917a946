"""
Garde de nettoyage des repertoires sources.

Apres un deplacement, decide si le repertoire d'origine peut etre supprime.
Regles, dans l'ordre :
1. racine protegee (inbox, series, films) : jamais touchee, aucun acces disque
2. presence d'une video restante : repertoire conserve
3. repertoire vide : suppression (non recursive)
4. autres residus (sous-titres, NFO, images) : repertoire conserve

Toute erreur d'entree/sortie donne la raison "error" et n'est jamais propagee.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

from media_scraper.config import MediaPaths
from media_scraper.core.ports.file_system import IFileSystem
from media_scraper.utils.constants import VIDEO_EXTENSIONS


class CleanupReason(str, Enum):
    """Raison de la decision du garde."""

    PROTECTED = "protected"
    HAS_VIDEO = "has-video"
    DELETED = "deleted"
    NOT_EMPTY = "not-empty"
    ERROR = "error"


@dataclass(frozen=True)
class CleanupResult:
    """Decision prise pour un repertoire."""

    path: Path
    deleted: bool
    reason: CleanupReason


class CleanupGuard:
    """Politique de suppression des repertoires sources devenus vides."""

    def __init__(self, file_system: IFileSystem, paths: MediaPaths) -> None:
        self._fs = file_system
        self._paths = paths

    def cleanup_source_dir(self, path: Path) -> CleanupResult:
        """
        Supprime path s'il est vide et non protege.

        Args:
            path: Repertoire d'origine d'un fichier deplace

        Returns:
            CleanupResult avec deleted et la raison
        """
        if self._paths.is_protected(path):
            logger.debug(f"Nettoyage ignore (racine protegee): {path}")
            return CleanupResult(path, False, CleanupReason.PROTECTED)

        try:
            entries = self._fs.list_dir(path)
            if any(entry.suffix.lower() in VIDEO_EXTENSIONS for entry in entries):
                result = CleanupResult(path, False, CleanupReason.HAS_VIDEO)
            elif not entries:
                self._fs.remove_dir(path)
                result = CleanupResult(path, True, CleanupReason.DELETED)
            else:
                result = CleanupResult(path, False, CleanupReason.NOT_EMPTY)
        except OSError as e:
            logger.debug(f"Nettoyage impossible pour {path}: {e}")
            return CleanupResult(path, False, CleanupReason.ERROR)

        logger.debug(f"Nettoyage {path}: {result.reason.value}")
        return result
