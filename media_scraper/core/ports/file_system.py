"""
Interfaces ports pour le systeme de fichiers.

Toutes les lectures et mutations du pipeline passent par IFileSystem, ce qui
permet de substituer un systeme de fichiers en memoire dans les tests.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """
    Interface des operations fichiers utilisees par le scanner et le pipeline.

    Les erreurs d'entree/sortie sont propagees sous forme d'OSError.
    """

    @abstractmethod
    def list_dir(self, path: Path) -> list[Path]:
        """
        Liste les entrees directes d'un repertoire, triees par nom.

        Raises:
            OSError: Si le repertoire est illisible ou absent
        """
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Verifie si le chemin est un repertoire."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Verifie si le chemin est un fichier."""
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """Retourne la taille d'un fichier en octets."""
        ...

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Lit un fichier texte en UTF-8."""
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Ecrit (ou remplace) un fichier texte en UTF-8."""
        ...

    @abstractmethod
    def write_bytes(self, path: Path, content: bytes) -> None:
        """Ecrit (ou remplace) un fichier binaire."""
        ...

    @abstractmethod
    def make_dir(self, path: Path) -> None:
        """Cree un repertoire et ses parents (sans erreur s'il existe)."""
        ...

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """
        Deplace un fichier.

        Les repertoires parents de la destination doivent exister.
        """
        ...

    @abstractmethod
    def remove_dir(self, path: Path) -> None:
        """
        Supprime un repertoire vide.

        Raises:
            OSError: Si le repertoire n'est pas vide
        """
        ...

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Supprime un fichier."""
        ...
