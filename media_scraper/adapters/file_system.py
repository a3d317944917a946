"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem sur le disque local. Les erreurs
d'entree/sortie sont propagees (OSError) : c'est aux services de decider
si elles interrompent l'operation ou sont seulement journalisees.
"""

import os
import shutil
import uuid
from pathlib import Path

from media_scraper.core.ports.file_system import IFileSystem


class FileSystemAdapter(IFileSystem):
    """Implementation de IFileSystem pour le systeme de fichiers reel."""

    def list_dir(self, path: Path) -> list[Path]:
        """Liste les entrees d'un repertoire, triees par nom."""
        return sorted(path.iterdir(), key=lambda p: p.name)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def get_size(self, path: Path) -> int:
        return path.stat().st_size

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def write_bytes(self, path: Path, content: bytes) -> None:
        path.write_bytes(content)

    def make_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def move(self, source: Path, destination: Path) -> None:
        """
        Deplace un fichier.

        Utilise os.replace sur le meme filesystem. Pour un deplacement
        cross-filesystem, copie vers un fichier temporaire dans le repertoire
        cible puis renomme, afin que la destination n'existe jamais a moitie
        ecrite.

        Raises:
            OSError: Si la source est absente ou la copie echoue
        """
        try:
            os.replace(source, destination)
            return
        except OSError:
            if not source.exists():
                raise

        temp = destination.with_name(f".tmp_{uuid.uuid4().hex}_{destination.name}")
        try:
            shutil.copy2(source, temp)
            os.replace(temp, destination)
        except OSError:
            if temp.exists():
                temp.unlink()
            raise
        source.unlink()

    def remove_dir(self, path: Path) -> None:
        """Supprime un repertoire vide (non recursif)."""
        path.rmdir()

    def delete(self, path: Path) -> None:
        path.unlink()
