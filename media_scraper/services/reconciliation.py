"""
Pipeline de reconciliation.

Transforme une correspondance confirmee (ID catalogue) en organisation
canonique de la mediatheque :

    <tv>/<Serie>/tvshow.nfo, poster.jpg
    <tv>/<Serie>/Season 01/season.nfo, poster.jpg
    <tv>/<Serie>/Season 01/<Serie> - S01E01.mkv, .nfo
    <movies>/<Titre (Annee)>/<Titre (Annee)>.mkv, .nfo, poster.jpg, fanart.jpg

Chaque operation calcule d'abord un ReconciliationPlan (donnee pure) puis,
hors previsualisation, l'execute. L'executeur est le seul code qui modifie
le systeme de fichiers, ce qui garantit que la previsualisation decrit
exactement ce que le traitement ferait.

Regles d'idempotence :
- les repertoires ne sont crees que s'ils manquent
- les images ne sont telechargees que si elles sont absentes
- un NFO est ecrit s'il est absent, ou s'il existe et porte la signature ;
  un NFO etranger n'est jamais remplace
"""

import re
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from media_scraper.config import MediaPaths
from media_scraper.core.entities import (
    EpisodeSource,
    MediaFile,
    OperationResult,
    ProcessItem,
)
from media_scraper.core.ports.api_clients import (
    CatalogError,
    ICatalogClient,
    SeasonDetails,
)
from media_scraper.core.ports.file_system import IFileSystem
from media_scraper.core.value_objects import (
    MediaKind,
    PlanAction,
    PlanActionType,
    ReconciliationPlan,
)
from media_scraper.services.cleanup import CleanupGuard, CleanupResult
from media_scraper.services.nfo import NfoCodec
from media_scraper.services.planned_fs import PlannedFileSystem
from media_scraper.services.scanner import LibraryScanner, season_dir_name
from media_scraper.utils.constants import (
    FANART_FILE,
    POSTER_FILE,
    POSTER_NAMES,
    SEASON_NFO,
    SUBTITLE_EXTENSIONS,
    TVSHOW_NFO,
)

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w1280"

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|]')
_SEASON_DIR = re.compile(r"^Season\s*(\d+)", re.IGNORECASE)


class ReconciliationError(Exception):
    """Echec attendu d'une operation (source absente, NFO sans ID...)."""


def safe_name(name: str) -> str:
    """Nom de fichier ou de repertoire sans caracteres interdits."""
    return " ".join(_UNSAFE_CHARS.sub(" ", name).split())


def episode_stem(show_name: str, season: int, episode: int, episode_end: Optional[int] = None) -> str:
    """Nom canonique d'un episode : "Serie - S01E01" ou "Serie - S01E01-E02"."""
    stem = f"{safe_name(show_name)} - S{season:02d}E{episode:02d}"
    if episode_end is not None and episode_end > episode:
        stem += f"-E{episode_end:02d}"
    return stem


def movie_folder_name(title: str, year: Optional[int]) -> str:
    """Nom canonique d'un film : "Titre (2019)"."""
    title = safe_name(title)
    return f"{title} ({year})" if year else title


def _episode_range(episode: int, episode_end: Optional[int]) -> list[int]:
    if episode_end is None or episode_end <= episode:
        return [episode]
    return list(range(episode, episode_end + 1))


class PlanBuilder:
    """
    Accumule les actions du plan d'une operation.

    Les verifications d'existence combinent la vue du systeme de fichiers
    et les actions deja planifiees, pour qu'une operation ne prevoie pas
    deux fois le meme repertoire ou le meme NFO.

    Attributes:
        fs: Systeme de fichiers lu pendant la planification
        scanner: Scanner lisant ce meme systeme de fichiers
        plan: Plan en cours de construction
    """

    def __init__(self, file_system: IFileSystem, scanner: LibraryScanner, nfo_codec: NfoCodec) -> None:
        self.fs = file_system
        self.scanner = scanner
        self._nfo = nfo_codec
        self.plan = ReconciliationPlan()
        self._dirs: set[Path] = set()
        self._files: set[Path] = set()

    def ensure_dir(self, path: Path) -> None:
        if path in self._dirs or self.fs.is_dir(path):
            return
        self._dirs.add(path)
        self.plan.add(PlanAction(type=PlanActionType.CREATE_DIR, destination=path))

    def move(self, source: Path, destination: Path) -> None:
        self._files.add(destination)
        self.plan.add(
            PlanAction(
                type=PlanActionType.MOVE,
                source=source,
                destination=destination,
                will_overwrite=self.fs.exists(destination),
            )
        )

    def _is_signed(self, path: Path) -> bool:
        """Un NFO illisible en UTF-8 (GBK, Big5...) est considere etranger."""
        try:
            return self._nfo.is_signed(self.fs.read_text(path))
        except UnicodeDecodeError:
            logger.warning(f"NFO non UTF-8: {path}")
            return False

    def write_nfo(self, path: Path, content: str, only_if_absent: bool = False) -> bool:
        """
        Prevoit l'ecriture d'un NFO.

        Returns:
            True si l'ecriture est planifiee
        """
        if path in self._files:
            return False
        exists = self.fs.exists(path)
        if exists:
            if only_if_absent:
                return False
            if not self._is_signed(path):
                logger.info(f"NFO etranger conserve: {path}")
                return False
        self._files.add(path)
        self.plan.add(
            PlanAction(
                type=PlanActionType.CREATE_NFO,
                destination=path,
                will_overwrite=exists,
                content=content,
            )
        )
        return True

    def download(self, path: Path, url: Optional[str], aliases: Iterable[Path] = ()) -> bool:
        """
        Prevoit le telechargement d'une image absente.

        Args:
            path: Destination
            url: URL de l'image (rien n'est prevu si None)
            aliases: Autres fichiers dont la presence rend l'image inutile
        """
        if not url:
            return False
        candidates = [path, *aliases]
        if any(p in self._files or self.fs.exists(p) for p in candidates):
            return False
        self._files.add(path)
        self.plan.add(PlanAction(type=PlanActionType.DOWNLOAD_POSTER, destination=path, url=url))
        return True


def _poster_aliases(directory: Path) -> list[Path]:
    return [directory / name for name in POSTER_NAMES]


class _SeasonCache:
    """Details de saisons deja recuperes pendant une operation."""

    def __init__(self, catalog: ICatalogClient, show_id: int) -> None:
        self._catalog = catalog
        self._show_id = show_id
        self._seasons: dict[int, SeasonDetails] = {}

    async def get(self, season: int) -> SeasonDetails:
        if season not in self._seasons:
            self._seasons[season] = await self._catalog.get_season_details(self._show_id, season)
        return self._seasons[season]


class ReconciliationService:
    """
    Planification et execution des operations de la mediatheque.

    Coordonne:
    - Le catalogue (ICatalogClient) pour les details et les images
    - Le systeme de fichiers (IFileSystem), modifie uniquement par _execute
    - Le scanner pour l'etat courant des repertoires
    - Le garde de nettoyage pour les repertoires sources videes
    """

    def __init__(
        self,
        file_system: IFileSystem,
        catalog: ICatalogClient,
        nfo_codec: NfoCodec,
        scanner: LibraryScanner,
        cleanup_guard: CleanupGuard,
        paths: MediaPaths,
    ) -> None:
        self._fs = file_system
        self._catalog = catalog
        self._nfo = nfo_codec
        self._scanner = scanner
        self._guard = cleanup_guard
        self._paths = paths

    # Planification : traitement (deplacement + metadonnees)

    async def plan_tv(
        self,
        builder: PlanBuilder,
        show_name: str,
        catalog_id: int,
        season: int,
        episodes: list[EpisodeSource],
    ) -> None:
        """Planifie le rangement d'episodes dans une serie et une saison."""
        if not show_name:
            raise ReconciliationError("Nom de serie manquant")
        if not episodes:
            raise ReconciliationError("Aucun episode a traiter")
        for source in episodes:
            if not builder.fs.is_file(source.source):
                raise ReconciliationError(f"Fichier source introuvable: {source.source}")

        show = await self._catalog.get_show_details(catalog_id)
        season_details = await self._catalog.get_season_details(catalog_id, season)

        show_dir = self._paths.tv / safe_name(show_name)
        season_dir = show_dir / season_dir_name(season)
        builder.ensure_dir(show_dir)
        builder.ensure_dir(season_dir)

        episode_nfos: list[tuple[Path, str]] = []
        for source in episodes:
            stem = episode_stem(show_name, season, source.episode, source.episode_end)
            self._plan_media_move(builder, source.source, season_dir, stem)
            numbers = _episode_range(source.episode, source.episode_end)
            episode_nfos.append(
                (season_dir / f"{stem}.nfo", self._nfo.episode(show, season_details, numbers))
            )

        builder.write_nfo(show_dir / TVSHOW_NFO, self._nfo.tvshow(show))
        builder.write_nfo(season_dir / SEASON_NFO, self._nfo.season(show, season_details))
        for path, content in episode_nfos:
            builder.write_nfo(path, content)

        show_poster = self._catalog.image_url(show.poster_path, POSTER_SIZE)
        season_poster = self._catalog.image_url(season_details.poster_path, POSTER_SIZE) or show_poster
        builder.download(show_dir / POSTER_FILE, show_poster, _poster_aliases(show_dir))
        builder.download(season_dir / POSTER_FILE, season_poster, _poster_aliases(season_dir))

    async def plan_movie(self, builder: PlanBuilder, source: Path, catalog_id: int) -> None:
        """Planifie le rangement d'un film dans son repertoire "Titre (Annee)"."""
        if not builder.fs.is_file(source):
            raise ReconciliationError(f"Fichier source introuvable: {source}")

        movie = await self._catalog.get_movie_details(catalog_id)
        folder = movie_folder_name(movie.title, movie.year)
        movie_dir = self._paths.movies / folder
        builder.ensure_dir(movie_dir)

        self._plan_media_move(builder, source, movie_dir, folder)
        builder.write_nfo(movie_dir / f"{folder}.nfo", self._nfo.movie(movie))
        builder.download(
            movie_dir / POSTER_FILE,
            self._catalog.image_url(movie.poster_path, POSTER_SIZE),
            _poster_aliases(movie_dir),
        )
        builder.download(
            movie_dir / FANART_FILE,
            self._catalog.image_url(movie.backdrop_path, BACKDROP_SIZE),
        )

    def _plan_media_move(self, builder: PlanBuilder, source: Path, target_dir: Path, stem: str) -> None:
        """Deplacement du fichier video et des sous-titres de meme nom."""
        builder.move(source, target_dir / f"{stem}{source.suffix.lower()}")
        for extension in SUBTITLE_EXTENSIONS:
            subtitle = source.with_suffix(extension)
            if builder.fs.is_file(subtitle):
                builder.move(subtitle, target_dir / f"{stem}{extension}")

    # Planification : metadonnees seules

    def resolve_show_dir(self, builder: PlanBuilder, path: Path) -> Path:
        """
        Repertoire de serie contenant path.

        Sous la racine des series, c'est le premier niveau du chemin relatif ;
        ailleurs, un fichier remonte a son repertoire (et a la serie si ce
        repertoire est une saison).
        """
        try:
            relative = path.relative_to(self._paths.tv)
        except ValueError:
            relative = None
        if relative is not None and relative.parts:
            return self._paths.tv / relative.parts[0]
        if builder.fs.is_dir(path):
            return path
        parent = path.parent
        return parent.parent if _SEASON_DIR.match(parent.name) else parent

    def resolve_movie_dir(self, builder: PlanBuilder, path: Path) -> Path:
        """Repertoire de film : path lui-meme, ou le parent d'un fichier."""
        return path if builder.fs.is_dir(path) else path.parent

    def _season_dirs(self, builder: PlanBuilder, show_dir: Path) -> list[tuple[int, Path]]:
        seasons = []
        for entry in builder.fs.list_dir(show_dir):
            match = _SEASON_DIR.match(entry.name)
            if match and builder.fs.is_dir(entry):
                seasons.append((int(match.group(1)), entry))
        return sorted(seasons)

    def _episode_files(self, builder: PlanBuilder, season_dir: Path, show_dir: Path) -> list[MediaFile]:
        return [
            f
            for f in builder.scanner.scan_directory(season_dir, show_dir)
            if f.parsed.episode is not None
        ]

    async def plan_refresh_tv(
        self,
        builder: PlanBuilder,
        library_path: Path,
        catalog_id: int,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> None:
        """Planifie la regeneration des NFO d'une serie, restreinte a une saison ou un episode."""
        show_dir = self.resolve_show_dir(builder, library_path)
        if not builder.fs.is_dir(show_dir):
            raise ReconciliationError(f"Repertoire de serie introuvable: {show_dir}")

        show = await self._catalog.get_show_details(catalog_id)
        seasons = _SeasonCache(self._catalog, catalog_id)
        builder.write_nfo(show_dir / TVSHOW_NFO, self._nfo.tvshow(show))

        for number, season_dir in self._season_dirs(builder, show_dir):
            if season is not None and number != season:
                continue
            details = await seasons.get(number)
            builder.write_nfo(season_dir / SEASON_NFO, self._nfo.season(show, details))
            for media_file in self._episode_files(builder, season_dir, show_dir):
                first = media_file.parsed.episode
                if episode is not None and first != episode:
                    continue
                numbers = _episode_range(first, media_file.parsed.episode_end)
                builder.write_nfo(
                    media_file.path.with_suffix(".nfo"),
                    self._nfo.episode(show, self._with_season(details, number), numbers),
                )

    @staticmethod
    def _with_season(details: SeasonDetails, number: int) -> SeasonDetails:
        if details.season_number == number:
            return details
        return SeasonDetails(
            season_number=number,
            name=details.name,
            overview=details.overview,
            air_date=details.air_date,
            poster_path=details.poster_path,
            episodes=details.episodes,
        )

    def _movie_file(self, builder: PlanBuilder, movie_dir: Path) -> MediaFile:
        movie_file = next(
            (f for f in builder.scanner.scan_directory(movie_dir) if f.kind != MediaKind.TV),
            None,
        )
        if movie_file is None:
            raise ReconciliationError(f"Aucun fichier video dans {movie_dir}")
        return movie_file

    async def plan_refresh_movie(self, builder: PlanBuilder, library_path: Path, catalog_id: int) -> None:
        """Planifie la regeneration du NFO d'un film."""
        movie_dir = self.resolve_movie_dir(builder, library_path)
        movie_file = self._movie_file(builder, movie_dir)
        movie = await self._catalog.get_movie_details(catalog_id)
        builder.write_nfo(movie_file.path.with_suffix(".nfo"), self._nfo.movie(movie))

    async def plan_supplement(self, builder: PlanBuilder, show_dir: Path) -> int:
        """
        Planifie les NFO des episodes qui n'en ont pas encore.

        Returns:
            Nombre d'episodes en attente trouves
        """
        catalog_id = builder.scanner.extract_catalog_id(show_dir / TVSHOW_NFO)
        if catalog_id is None:
            raise ReconciliationError(f"ID TMDB introuvable dans {show_dir / TVSHOW_NFO}")

        pending = builder.scanner.detect_supplement_files(show_dir)
        if not pending:
            return 0

        show = await self._catalog.get_show_details(catalog_id)
        seasons = _SeasonCache(self._catalog, catalog_id)
        for media_file in pending:
            first = media_file.parsed.episode
            if first is None:
                logger.warning(f"Numero d'episode introuvable: {media_file.path}")
                continue
            number = media_file.parsed.season or 1
            details = self._with_season(await seasons.get(number), number)
            builder.write_nfo(
                media_file.path.with_suffix(".nfo"),
                self._nfo.episode(show, details, _episode_range(first, media_file.parsed.episode_end)),
                only_if_absent=True,
            )
        return len(pending)

    async def plan_fix_assets(
        self, builder: PlanBuilder, kind: MediaKind, path: Path, catalog_id: int
    ) -> None:
        """Planifie uniquement les NFO et affiches absents."""
        if kind == MediaKind.TV:
            show_dir = self.resolve_show_dir(builder, path)
            if not builder.fs.is_dir(show_dir):
                raise ReconciliationError(f"Repertoire de serie introuvable: {show_dir}")
            show = await self._catalog.get_show_details(catalog_id)
            show_poster = self._catalog.image_url(show.poster_path, POSTER_SIZE)
            builder.write_nfo(show_dir / TVSHOW_NFO, self._nfo.tvshow(show), only_if_absent=True)
            builder.download(show_dir / POSTER_FILE, show_poster, _poster_aliases(show_dir))

            seasons = _SeasonCache(self._catalog, catalog_id)
            for number, season_dir in self._season_dirs(builder, show_dir):
                needs_nfo = not builder.fs.exists(season_dir / SEASON_NFO)
                needs_poster = builder.scanner.find_poster(season_dir) is None
                if not (needs_nfo or needs_poster):
                    continue
                details = await seasons.get(number)
                builder.write_nfo(
                    season_dir / SEASON_NFO, self._nfo.season(show, details), only_if_absent=True
                )
                builder.download(
                    season_dir / POSTER_FILE,
                    self._catalog.image_url(details.poster_path, POSTER_SIZE) or show_poster,
                    _poster_aliases(season_dir),
                )
        else:
            movie_dir = self.resolve_movie_dir(builder, path)
            movie_file = self._movie_file(builder, movie_dir)
            movie = await self._catalog.get_movie_details(catalog_id)
            builder.write_nfo(
                movie_file.path.with_suffix(".nfo"), self._nfo.movie(movie), only_if_absent=True
            )
            builder.download(
                movie_dir / POSTER_FILE,
                self._catalog.image_url(movie.poster_path, POSTER_SIZE),
                _poster_aliases(movie_dir),
            )

    async def plan_item(self, builder: PlanBuilder, item: ProcessItem) -> None:
        """
        Planifie un element de lot.

        Un element deja range dans la mediatheque est rafraichi (metadonnees
        seules) ; sinon il est traite (deplacement + metadonnees).
        """
        if item.catalog_id is None:
            raise ReconciliationError("No catalog id provided")

        if item.kind == MediaKind.TV:
            if self._paths.is_under_tv(item.source_path):
                await self.plan_refresh_tv(builder, item.source_path, item.catalog_id)
            else:
                episodes = item.episodes or []
                await self.plan_tv(builder, item.show_name or "", item.catalog_id, item.season or 1, episodes)
        elif item.kind == MediaKind.MOVIE:
            if self._paths.is_under_movies(item.source_path):
                await self.plan_refresh_movie(builder, item.source_path, item.catalog_id)
            else:
                await self.plan_movie(builder, item.source_path, item.catalog_id)
        else:
            raise ReconciliationError(f"Type de media non pris en charge: {item.kind.value}")

    # Execution

    def new_builder(self, file_system: Optional[IFileSystem] = None) -> PlanBuilder:
        """Builder sur le disque reel, ou sur une vue projetee (previsualisation)."""
        if file_system is None:
            return PlanBuilder(self._fs, self._scanner, self._nfo)
        return PlanBuilder(file_system, self._scanner.with_file_system(file_system), self._nfo)

    async def _execute(self, plan: ReconciliationPlan, moved_from: set[Path]) -> None:
        """
        Applique un plan, action par action, dans l'ordre.

        moved_from recoit les repertoires sources des deplacements effectues,
        meme si une action ulterieure echoue.
        """
        for action in plan.actions:
            if action.type == PlanActionType.CREATE_DIR:
                self._fs.make_dir(action.destination)
            elif action.type == PlanActionType.MOVE:
                self._fs.move(action.source, action.destination)
                moved_from.add(action.source.parent)
                logger.info(f"Deplace: {action.source} -> {action.destination}")
            elif action.type == PlanActionType.CREATE_NFO:
                self._fs.write_text(action.destination, action.content or "")
                logger.debug(f"NFO ecrit: {action.destination}")
            elif action.type == PlanActionType.DOWNLOAD_POSTER:
                self._fs.write_bytes(action.destination, await self._catalog.download_image(action.url))
                logger.debug(f"Image telechargee: {action.destination}")

    def _cleanup(self, directories: set[Path]) -> list[CleanupResult]:
        return [self._guard.cleanup_source_dir(d) for d in sorted(directories)]

    async def _run(self, description: str, planner, *args) -> OperationResult:
        """
        Planifie puis execute une operation.

        Toute erreur attendue (catalogue, entree/sortie, validation) donne
        un resultat en echec ; les repertoires sources deja vides sont
        nettoyes dans tous les cas.
        """
        builder = self.new_builder()
        moved_from: set[Path] = set()
        try:
            extra = await planner(builder, *args)
            await self._execute(builder.plan, moved_from)
        except (ReconciliationError, CatalogError, OSError) as e:
            logger.error(f"{description} en echec: {e}")
            return OperationResult(
                success=False,
                message=str(e),
                plan=builder.plan,
                cleanup=self._cleanup(moved_from),
            )

        summary = builder.plan.impact_summary
        message = (
            f"{description}: {summary.files_moving} fichier(s) deplace(s), "
            f"{summary.nfo_creating + summary.nfo_overwriting} NFO, "
            f"{summary.posters_downloading} image(s)"
        )
        if isinstance(extra, int):
            message += f", {extra} episode(s) en attente"
        logger.info(message)
        return OperationResult(
            success=True,
            message=message,
            plan=builder.plan,
            cleanup=self._cleanup(moved_from),
        )

    # Operations publiques

    async def process_tv(
        self,
        source: Path,
        show_name: str,
        catalog_id: int,
        season: int,
        episodes: Optional[list[EpisodeSource]] = None,
    ) -> OperationResult:
        """
        Range des episodes dans la serie et genere NFO et affiches.

        Args:
            source: Fichier principal (utilise si episodes est vide, episode 1)
            show_name: Nom du repertoire de serie
            catalog_id: ID TMDB de la serie
            season: Numero de saison
            episodes: Fichiers a ranger avec leur numero d'episode
        """
        episodes = episodes or [EpisodeSource(source=source, episode=1)]
        return await self._run("Traitement serie", self.plan_tv, show_name, catalog_id, season, episodes)

    async def process_movie(self, source: Path, catalog_id: int) -> OperationResult:
        """Range un film et genere NFO, affiche et fanart."""
        return await self._run("Traitement film", self.plan_movie, source, catalog_id)

    async def refresh_metadata(
        self,
        kind: MediaKind,
        library_path: Path,
        catalog_id: int,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> OperationResult:
        """
        Regenere les NFO d'un element deja range, sans deplacer de fichier
        ni telecharger d'image.
        """
        if kind == MediaKind.TV:
            return await self._run(
                "Rafraichissement serie", self.plan_refresh_tv, library_path, catalog_id, season, episode
            )
        return await self._run("Rafraichissement film", self.plan_refresh_movie, library_path, catalog_id)

    async def supplement(self, show_path: Path) -> OperationResult:
        """Genere les NFO des seuls episodes qui n'en ont pas."""
        return await self._run("Complement", self.plan_supplement, show_path)

    async def fix_missing_assets(self, kind: MediaKind, path: Path, catalog_id: int) -> OperationResult:
        """Cree les NFO et affiches manquants, sans toucher aux existants."""
        return await self._run("Reparation", self.plan_fix_assets, kind, path, catalog_id)

    async def run_item(self, item: ProcessItem) -> OperationResult:
        """Traite ou rafraichit un element de lot selon son emplacement."""
        return await self._run(f"Element {item.source_path.name}", self.plan_item, item)

    async def generate_preview_plan(self, items: list[ProcessItem]) -> ReconciliationPlan:
        """
        Calcule le plan combine d'un lot sans rien modifier.

        Chaque element est planifie dans l'etat que les elements precedents
        laisseront, comme run_item appele en sequence : un NFO signe ecrit
        par un element est annonce en remplacement pour le suivant. Un
        element qui ne peut pas etre planifie est journalise et n'apporte
        aucune action.
        """
        view = PlannedFileSystem(self._fs)
        combined = ReconciliationPlan()
        for item in items:
            builder = self.new_builder(view)
            try:
                await self.plan_item(builder, item)
            except (ReconciliationError, CatalogError, OSError) as e:
                logger.warning(f"Previsualisation impossible pour {item.source_path}: {e}")
                continue
            view.apply(builder.plan)
            for action in builder.plan.actions:
                combined.add(action)
        return combined

    async def move_to_inbox(self, source: Path) -> OperationResult:
        """
        Renvoie un fichier de la mediatheque dans l'inbox.

        Les sous-titres de meme nom suivent ; le NFO (contenu genere) est
        supprime.
        """
        if not self._paths.is_in_library(source):
            return OperationResult(success=False, message=f"Fichier hors mediatheque: {source}")
        try:
            destination = self._paths.inbox / source.name
            self._fs.move(source, destination)
            for extension in SUBTITLE_EXTENSIONS:
                subtitle = source.with_suffix(extension)
                if self._fs.is_file(subtitle):
                    self._fs.move(subtitle, self._paths.inbox / subtitle.name)
            nfo = source.with_suffix(".nfo")
            if self._fs.is_file(nfo):
                self._fs.delete(nfo)
        except OSError as e:
            logger.error(f"Retour vers l'inbox impossible pour {source}: {e}")
            return OperationResult(success=False, message=str(e))

        logger.info(f"Renvoye dans l'inbox: {source.name}")
        return OperationResult(success=True, message=f"Renvoye dans l'inbox: {source.name}")
