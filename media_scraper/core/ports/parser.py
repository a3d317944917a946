"""
Interface port pour l'analyse des noms de fichiers.
"""

from abc import ABC, abstractmethod

from media_scraper.core.value_objects import ParsedInfo


class IFilenameParser(ABC):
    """
    Extrait titre, annee, saison, episode et tags d'un nom de fichier.

    Les implementations sont pures : pas d'acces disque ni reseau.
    """

    @abstractmethod
    def parse_filename(self, filename: str) -> ParsedInfo:
        """Analyse un nom de fichier seul (extension incluse ou non)."""
        ...

    @abstractmethod
    def parse_from_path(self, relative_path: str) -> ParsedInfo:
        """
        Analyse un chemin relatif en utilisant aussi les repertoires parents.

        Le titre est emprunte au premier repertoire quand le nom de fichier
        n'en contient pas, la saison a un repertoire "Season N".
        """
        ...
