"""
Systeme de fichiers projete pour la previsualisation d'un lot.

Un lot execute ses elements l'un apres l'autre : le deuxieme element voit les
repertoires, fichiers et NFO laisses par le premier. Pour que la
previsualisation predise exactement ce traitement, chaque element est
planifie sur une vue qui superpose au disque reel l'effet des plans
precedents. Rien n'est jamais ecrit sur le systeme de base.
"""

from pathlib import Path

from media_scraper.core.ports.file_system import IFileSystem
from media_scraper.core.value_objects import PlanActionType, ReconciliationPlan


class PlannedFileSystem(IFileSystem):
    """
    Vue d'un IFileSystem apres application de plans acceptes.

    Les lectures consultent d'abord la surcouche, puis le systeme de base
    (en ignorant ce qui a ete deplace ou supprime). Les mutations ne
    modifient que la surcouche.

    Example:
        view = PlannedFileSystem(file_system)
        view.apply(first_plan)
        view.exists(Path("/media/TV/Show/tvshow.nfo"))  # True
    """

    def __init__(self, base: IFileSystem) -> None:
        self._base = base
        self._files: dict[Path, bytes] = {}
        # destination -> chemin d'origine sur le systeme de base
        self._moved: dict[Path, Path] = {}
        self._dirs: set[Path] = set()
        self._removed: set[Path] = set()

    def apply(self, plan: ReconciliationPlan) -> None:
        """Enregistre l'effet d'un plan ; une image telechargee devient un fichier vide."""
        for action in plan.actions:
            if action.type == PlanActionType.CREATE_DIR:
                self.make_dir(action.destination)
            elif action.type == PlanActionType.MOVE:
                self.move(action.source, action.destination)
            elif action.type == PlanActionType.CREATE_NFO:
                self.write_text(action.destination, action.content or "")
            elif action.type == PlanActionType.DOWNLOAD_POSTER:
                self.write_bytes(action.destination, b"")

    def _in_base(self, path: Path) -> bool:
        return path not in self._removed

    def _put(self, path: Path, content: bytes) -> None:
        self._moved.pop(path, None)
        self._files[path] = content
        self._removed.discard(path)

    # IFileSystem

    def list_dir(self, path: Path) -> list[Path]:
        if not self.is_dir(path):
            raise FileNotFoundError(str(path))
        entries: set[Path] = set()
        if self._in_base(path) and self._base.is_dir(path):
            entries.update(e for e in self._base.list_dir(path) if e not in self._removed)
        for entry in [*self._dirs, *self._files, *self._moved]:
            if entry != path and entry.parent == path:
                entries.add(entry)
        return sorted(entries, key=lambda p: p.name)

    def exists(self, path: Path) -> bool:
        return self.is_file(path) or self.is_dir(path)

    def is_dir(self, path: Path) -> bool:
        return path in self._dirs or (self._in_base(path) and self._base.is_dir(path))

    def is_file(self, path: Path) -> bool:
        if path in self._files or path in self._moved:
            return True
        return self._in_base(path) and self._base.is_file(path)

    def get_size(self, path: Path) -> int:
        if path in self._files:
            return len(self._files[path])
        if path in self._moved:
            return self._base.get_size(self._moved[path])
        if not self._in_base(path):
            raise FileNotFoundError(str(path))
        return self._base.get_size(path)

    def read_text(self, path: Path) -> str:
        if path in self._files:
            return self._files[path].decode("utf-8")
        if path in self._moved:
            return self._base.read_text(self._moved[path])
        if not self._in_base(path):
            raise FileNotFoundError(str(path))
        return self._base.read_text(path)

    def write_text(self, path: Path, content: str) -> None:
        self._put(path, content.encode("utf-8"))

    def write_bytes(self, path: Path, content: bytes) -> None:
        self._put(path, content)

    def make_dir(self, path: Path) -> None:
        for directory in [path, *path.parents]:
            if self.is_dir(directory):
                break
            self._dirs.add(directory)
            self._removed.discard(directory)

    def move(self, source: Path, destination: Path) -> None:
        if not self.is_file(source):
            raise FileNotFoundError(str(source))
        if source in self._files:
            self._put(destination, self._files.pop(source))
        else:
            origin = self._moved.pop(source, source)
            self._files.pop(destination, None)
            self._moved[destination] = origin
            self._removed.discard(destination)
        self._removed.add(source)

    def remove_dir(self, path: Path) -> None:
        if self.list_dir(path):
            raise OSError(f"Directory not empty: {path}")
        self._dirs.discard(path)
        self._removed.add(path)

    def delete(self, path: Path) -> None:
        if not self.is_file(path):
            raise FileNotFoundError(str(path))
        self._files.pop(path, None)
        self._moved.pop(path, None)
        self._removed.add(path)
