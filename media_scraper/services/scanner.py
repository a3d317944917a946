"""
Service de scan de la mediatheque.

Construit des vues typees a partir du contenu actuel des repertoires :
series (arbre serie / saison / episodes), films, inbox (a plat ou groupee
par repertoire). Rien n'est mis en cache : chaque scan relit le disque.

Un repertoire illisible est journalise et donne un resultat vide pour ce
sous-arbre ; le reste du scan continue.
"""

import re
from dataclasses import replace
from pathlib import Path
from typing import Optional

from loguru import logger

from media_scraper.config import MediaPaths
from media_scraper.core.entities import (
    AssetFlags,
    DirectoryGroup,
    GroupStatus,
    LibraryStats,
    MediaFile,
    MovieInfo,
    SeasonInfo,
    ShowInfo,
)
from media_scraper.core.ports.file_system import IFileSystem
from media_scraper.core.ports.parser import IFilenameParser
from media_scraper.core.value_objects import MediaKind
from media_scraper.services.nfo import NfoCodec, NfoDetails
from media_scraper.utils.constants import (
    FANART_FILE,
    POSTER_NAMES,
    ROOT_GROUP_NAME,
    SEASON_NFO,
    TVSHOW_NFO,
    VIDEO_EXTENSIONS,
)

_SEASON_DIR = re.compile(r"Season\s*(\d+)", re.IGNORECASE)
_YEAR_SUFFIX = re.compile(r"\((\d{4})\)")
_YEAR_SUFFIX_END = re.compile(r"\s*\(\d{4}\)\s*$")


def season_dir_name(season: int) -> str:
    """Nom du repertoire d'une saison : "Season 01"."""
    return f"Season {season:02d}"


def is_video(path: Path) -> bool:
    return path.suffix.lower() in VIDEO_EXTENSIONS


def _sort_key(name: str) -> str:
    return name.casefold()


class LibraryScanner:
    """
    Scanner de la mediatheque.

    Coordonne:
    - Le systeme de fichiers (IFileSystem) pour parcourir les repertoires
    - Le parser de noms (IFilenameParser) pour extraire les informations
    - Le codec NFO pour la signature et les champs des NFO existants
    """

    def __init__(
        self,
        file_system: IFileSystem,
        filename_parser: IFilenameParser,
        nfo_codec: NfoCodec,
    ) -> None:
        self._fs = file_system
        self._parser = filename_parser
        self._nfo = nfo_codec

    def with_file_system(self, file_system: IFileSystem) -> "LibraryScanner":
        """Meme scanner, lisant un autre systeme de fichiers."""
        return LibraryScanner(file_system, self._parser, self._nfo)

    # Primitives

    def _list(self, directory: Path) -> list[Path]:
        """Liste un repertoire ; une erreur est journalisee et donne une liste vide."""
        try:
            return self._fs.list_dir(directory)
        except OSError as e:
            logger.warning(f"Scan impossible de {directory}: {e}")
            return []

    def _read(self, path: Path) -> Optional[str]:
        try:
            if not self._fs.is_file(path):
                return None
            return self._fs.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Lecture impossible de {path}: {e}")
            return None

    def nfo_status(self, nfo_path: Path) -> tuple[bool, bool]:
        """
        Etat d'un NFO.

        Returns:
            (existe, signe par l'application)
        """
        if not self._fs.exists(nfo_path):
            return False, False
        content = self._read(nfo_path)
        return True, content is not None and self._nfo.is_signed(content)

    def nfo_details(self, nfo_path: Path) -> Optional[NfoDetails]:
        content = self._read(nfo_path)
        return self._nfo.read_details(content) if content is not None else None

    def extract_catalog_id(self, nfo_path: Path) -> Optional[int]:
        """ID TMDB d'un NFO, ou None s'il est absent ou illisible."""
        content = self._read(nfo_path)
        return self._nfo.extract_catalog_id(content) if content is not None else None

    def find_poster(self, directory: Path) -> Optional[Path]:
        """Premiere affiche trouvee, par ordre de priorite."""
        for name in POSTER_NAMES:
            candidate = directory / name
            if self._fs.exists(candidate):
                return candidate
        return None

    def asset_flags(self, directory: Path, nfo_name: Optional[str] = TVSHOW_NFO) -> AssetFlags:
        """Presence de l'affiche, du NFO (si nfo_name) et du fanart."""
        return AssetFlags(
            has_poster=self.find_poster(directory) is not None,
            has_nfo=bool(nfo_name) and self._fs.exists(directory / nfo_name),
            has_fanart=self._fs.exists(directory / FANART_FILE),
        )

    def _media_file(self, path: Path, base: Path) -> Optional[MediaFile]:
        relative_path = path.relative_to(base).as_posix()
        parsed = self._parser.parse_from_path(relative_path)
        try:
            size = self._fs.get_size(path)
        except OSError as e:
            logger.warning(f"Fichier ignore {path}: {e}")
            return None
        has_nfo, processed = self.nfo_status(path.with_suffix(".nfo"))
        return MediaFile(
            path=path,
            name=path.name,
            relative_path=relative_path,
            size=size,
            kind=parsed.kind,
            parsed=parsed,
            has_nfo=has_nfo,
            is_processed=processed,
        )

    # Scans

    def scan_directory(self, directory: Path, base: Optional[Path] = None) -> list[MediaFile]:
        """
        Parcourt recursivement un repertoire (profondeur d'abord).

        Args:
            directory: Repertoire a parcourir
            base: Racine des chemins relatifs (defaut: directory)

        Returns:
            Fichiers video trouves, dans l'ordre du parcours
        """
        base = base or directory
        files: list[MediaFile] = []
        for entry in self._list(directory):
            if self._fs.is_dir(entry):
                files.extend(self.scan_directory(entry, base))
            elif is_video(entry) and self._fs.is_file(entry):
                media_file = self._media_file(entry, base)
                if media_file is not None:
                    files.append(media_file)
        return files

    def scan_shows(self, root: Path, include_assets: bool = False) -> list[ShowInfo]:
        """
        Scanne la racine des series.

        Un repertoire de serie sans episode reconnu est ignore.

        Args:
            root: Racine des series
            include_assets: Ajoute affiches, NFO de saison, ID TMDB, champs
                du NFO et statut de groupe (scraped/unscraped/supplement)
        """
        shows = []
        for entry in self._list(root):
            if not self._fs.is_dir(entry):
                continue
            show = self._build_show(entry, include_assets)
            if show is not None:
                shows.append(show)
        return sorted(shows, key=lambda s: _sort_key(s.name))

    def _build_show(self, show_path: Path, include_assets: bool) -> Optional[ShowInfo]:
        episodes = [f for f in self.scan_directory(show_path) if f.kind == MediaKind.TV]
        if not episodes:
            return None

        by_season: dict[int, list[MediaFile]] = {}
        for episode in episodes:
            by_season.setdefault(episode.parsed.season or 1, []).append(episode)

        seasons = []
        for number in sorted(by_season):
            season = SeasonInfo(
                season=number,
                episodes=sorted(by_season[number], key=lambda f: f.parsed.episode or 0),
            )
            if include_assets:
                season_path = show_path / season_dir_name(number)
                season.assets = self.asset_flags(season_path, SEASON_NFO)
                season.has_nfo = season.assets.has_nfo
            seasons.append(season)

        nfo_path = show_path / TVSHOW_NFO
        has_nfo, processed = self.nfo_status(nfo_path)
        show = ShowInfo(
            path=show_path,
            name=show_path.name,
            seasons=seasons,
            has_nfo=has_nfo,
            is_processed=processed,
            poster_path=self.find_poster(show_path),
        )
        if not include_assets:
            return show

        show.assets = self.asset_flags(show_path)
        show.supplement_count = len(self.detect_supplement_files(show_path))
        if processed:
            show.group_status = (
                GroupStatus.SUPPLEMENT if show.supplement_count else GroupStatus.SCRAPED
            )
        else:
            show.group_status = GroupStatus.UNSCRAPED

        details = self.nfo_details(nfo_path) if has_nfo else None
        if details is not None:
            show.tmdb_id = details.tmdb_id
            show.overview = details.overview
            show.status = details.status
            show.vote_average = details.vote_average
            show.year = show.year or details.year
        return show

    def scan_movies(self, root: Path, include_assets: bool = False) -> list[MovieInfo]:
        """
        Scanne la racine des films.

        Le fichier principal est le premier fichier non episode du
        repertoire ; son NFO est <stem>.nfo. L'annee vient du suffixe
        "(YYYY)" du repertoire, completee par le NFO.
        """
        movies = []
        for entry in self._list(root):
            if not self._fs.is_dir(entry):
                continue
            movie = self._build_movie(entry, include_assets)
            if movie is not None:
                movies.append(movie)
        return sorted(movies, key=lambda m: _sort_key(m.name))

    def _build_movie(self, movie_path: Path, include_assets: bool) -> Optional[MovieInfo]:
        movie_file = next(
            (f for f in self.scan_directory(movie_path) if f.kind != MediaKind.TV),
            None,
        )
        if movie_file is None:
            return None

        year_match = _YEAR_SUFFIX.search(movie_path.name)
        movie = MovieInfo(
            path=movie_path,
            name=movie_path.name,
            file=movie_file,
            has_nfo=movie_file.has_nfo,
            is_processed=movie_file.is_processed,
            year=int(year_match.group(1)) if year_match else None,
            poster_path=self.find_poster(movie_path),
        )
        if not include_assets:
            return movie

        movie.name = _YEAR_SUFFIX_END.sub("", movie_path.name).strip()
        movie.assets = self.asset_flags(movie_path, nfo_name=None)
        movie.assets.has_nfo = movie_file.has_nfo

        details = self.nfo_details(movie_file.path.with_suffix(".nfo")) if movie_file.has_nfo else None
        if details is not None:
            movie.tmdb_id = details.tmdb_id
            movie.overview = details.overview
            movie.tagline = details.tagline
            movie.runtime = details.runtime
            movie.vote_average = details.vote_average
            movie.year = movie.year or details.year
        return movie

    def scan_inbox(self, root: Path) -> list[MediaFile]:
        """Tous les fichiers video de l'inbox, tries par chemin relatif."""
        return sorted(self.scan_directory(root, root), key=lambda f: f.relative_path)

    def scan_inbox_grouped(self, root: Path) -> list[DirectoryGroup]:
        """
        Fichiers de l'inbox groupes par sous-repertoire de premier niveau.

        Les fichiers places directement dans l'inbox forment un groupe
        synthetique ROOT_GROUP_NAME ; les groupes vides sont omis.
        """
        groups: list[DirectoryGroup] = []
        root_group = DirectoryGroup(path=root, name=ROOT_GROUP_NAME)

        for entry in self._list(root):
            if self._fs.is_dir(entry):
                files = self.scan_directory(entry, root)
                if files:
                    group = DirectoryGroup(path=entry, name=entry.name, files=files)
                    for media_file in files:
                        group.summary.count(media_file)
                    groups.append(group)
            elif is_video(entry) and self._fs.is_file(entry):
                media_file = self._media_file(entry, root)
                if media_file is not None:
                    root_group.files.append(media_file)
                    root_group.summary.count(media_file)

        if root_group.files:
            groups.append(root_group)
        return sorted(groups, key=lambda g: _sort_key(g.name))

    def detect_supplement_files(self, show_path: Path) -> list[MediaFile]:
        """
        Episodes sans NFO dans les repertoires "Season*" d'une serie.

        La saison vient du nom du repertoire (1 a defaut).
        """
        pending: list[MediaFile] = []
        for season_dir in self._list(show_path):
            if not season_dir.name.startswith("Season") or not self._fs.is_dir(season_dir):
                continue
            match = _SEASON_DIR.search(season_dir.name)
            season = int(match.group(1)) if match else 1

            for entry in self._list(season_dir):
                if not is_video(entry) or not self._fs.is_file(entry):
                    continue
                if self._fs.exists(entry.with_suffix(".nfo")):
                    continue
                media_file = self._media_file(entry, show_path)
                if media_file is None:
                    continue
                media_file.parsed = replace(media_file.parsed, season=season)
                media_file.kind = MediaKind.TV
                pending.append(media_file)
        return pending

    def library_stats(self, paths: MediaPaths) -> LibraryStats:
        """Compteurs globaux de la mediatheque."""
        shows = self.scan_shows(paths.tv)
        movies = self.scan_movies(paths.movies)
        episodes = [e for show in shows for season in show.seasons for e in season.episodes]
        return LibraryStats(
            tv_shows=len(shows),
            tv_episodes=len(episodes),
            tv_processed=sum(1 for e in episodes if e.is_processed),
            movies=len(movies),
            movies_processed=sum(1 for m in movies if m.is_processed),
            inbox=len(self.scan_inbox(paths.inbox)),
        )
