"""
Service de matching contre le catalogue.

Formule de scoring (bornee a 1.0):
- Titre: +0.5 si egal (insensible a la casse), sinon +0.3 si l'un contient l'autre
- Annee: +0.3 si egale, sinon +0.15 a un an pres
- Popularite: + min(note / 50, 0.2)

Un resultat est ambigu (jamais accepte automatiquement) si le meilleur
score est inferieur a 0.5, ou si l'ecart avec le second est inferieur a 0.1.
"""

from pathlib import PurePosixPath
from typing import Optional

from loguru import logger

from media_scraper.core.entities import MatchCandidate, MatchResult, PathRecognition
from media_scraper.core.ports.api_clients import CatalogCandidate, CatalogError, ICatalogClient
from media_scraper.core.ports.parser import IFilenameParser
from media_scraper.core.ports.recognizer import IPathRecognizer
from media_scraper.core.value_objects import MediaKind

MIN_CONFIDENT_SCORE = 0.5
MIN_SCORE_GAP = 0.1
MAX_CANDIDATES = 5


def calculate_score(query: str, year: Optional[int], candidate: CatalogCandidate) -> float:
    """
    Score de correspondance d'un candidat, entre 0 et 1.

    Args:
        query: Titre recherche
        year: Annee attendue (optionnelle)
        candidate: Resultat du catalogue

    Returns:
        Score croissant avec la note du candidat, jamais superieur a 1.0
    """
    score = 0.0

    title = candidate.name.lower()
    wanted = query.lower()
    if title and title == wanted:
        score += 0.5
    elif title and wanted and (wanted in title or title in wanted):
        score += 0.3

    if year is not None and candidate.year is not None:
        if candidate.year == year:
            score += 0.3
        elif abs(candidate.year - year) <= 1:
            score += 0.15

    score += min(max(candidate.vote_average, 0.0) / 50, 0.2)
    return min(score, 1.0)


def is_ambiguous(scores: list[float]) -> bool:
    """Regle d'ambiguite sur des scores tries par ordre decroissant."""
    if not scores or scores[0] < MIN_CONFIDENT_SCORE:
        return True
    return len(scores) >= 2 and (scores[0] - scores[1]) < MIN_SCORE_GAP


def _to_match_candidate(candidate: CatalogCandidate, score: float) -> MatchCandidate:
    return MatchCandidate(
        id=candidate.id,
        name=candidate.name,
        original_name=candidate.original_name,
        date=candidate.date,
        poster_path=candidate.poster_path,
        overview=(candidate.overview or "")[:150] or None,
        media_type=candidate.media_type,
        score=round(score, 4),
    )


class MatcherService:
    """
    Recherche et selection de candidats dans le catalogue.

    Coordonne le client catalogue (ICatalogClient), le parser de noms et,
    optionnellement, la reconnaissance de chemins par IA.
    """

    def __init__(
        self,
        catalog: ICatalogClient,
        filename_parser: IFilenameParser,
        recognizer: Optional[IPathRecognizer] = None,
    ) -> None:
        self._catalog = catalog
        self._parser = filename_parser
        self._recognizer = recognizer

    async def search(
        self,
        kind: Optional[MediaKind],
        query: str,
        year: Optional[int] = None,
    ) -> list[CatalogCandidate]:
        """
        Recherche dans le catalogue.

        Sans kind, la recherche couvre series et films et ne garde que les
        resultats dates a un an pres de year (les resultats sans date sont
        conserves).

        Raises:
            CatalogError: Si le catalogue est injoignable
        """
        if kind == MediaKind.TV:
            return await self._catalog.search_shows(query, year)
        if kind == MediaKind.MOVIE:
            return await self._catalog.search_movies(query, year)

        results = await self._catalog.search_multi(query)
        if year is None:
            return results
        return [r for r in results if r.year is None or abs(r.year - year) <= 1]

    async def auto_match(
        self,
        path: str,
        kind: Optional[MediaKind] = None,
        title: Optional[str] = None,
        year: Optional[int] = None,
    ) -> MatchResult:
        """
        Recherche le meilleur candidat pour un fichier.

        Le titre et l'annee non fournis sont deduits du nom de fichier.

        Args:
            path: Chemin (ou nom) du fichier
            kind: TV, MOVIE, ou None pour une recherche mixte
            title: Titre impose
            year: Annee imposee

        Returns:
            MatchResult ; matched est False si aucun candidat ou si ambigu

        Raises:
            ValueError: Si aucun titre n'est fourni ni extractible
            CatalogError: Si le catalogue est injoignable
        """
        parsed = self._parser.parse_filename(PurePosixPath(path).name)
        search_title = title or parsed.title
        search_year = year if year is not None else parsed.year
        if not search_title:
            raise ValueError(f"Titre introuvable pour {path}")

        results = await self.search(kind, search_title, search_year)
        if not results:
            logger.info(f"Aucun resultat pour '{search_title}' ({search_year})")
            return MatchResult(matched=False, title=search_title, year=search_year)

        scored = sorted(
            ((calculate_score(search_title, search_year, r), r) for r in results),
            key=lambda pair: pair[0],
            reverse=True,
        )
        ambiguous = is_ambiguous([score for score, _ in scored])
        best_score, best = scored[0]
        logger.debug(
            f"Meilleur candidat pour '{search_title}': {best.name} ({best_score:.2f})"
            f"{' ambigu' if ambiguous else ''}"
        )

        return MatchResult(
            matched=not ambiguous,
            title=search_title,
            year=search_year,
            result=_to_match_candidate(best, best_score),
            candidates=[_to_match_candidate(r, s) for s, r in scored[:MAX_CANDIDATES]],
            ambiguous=ambiguous,
        )

    async def recognize(self, path: str) -> Optional[PathRecognition]:
        """
        Identification assistee d'un chemin.

        Si la reconnaissance fournit un ID IMDb, l'ID et le nom TMDB sont
        resolus via le catalogue. Retourne None si le service est absent,
        desactive ou en echec.
        """
        if self._recognizer is None or not self._recognizer.enabled:
            return None

        recognition = await self._recognizer.recognize(path)
        if recognition is None or not recognition.imdb_id:
            return recognition

        try:
            resolved = await self._catalog.resolve_by_external_id(
                recognition.imdb_id, recognition.media_type
            )
        except CatalogError as e:
            logger.warning(f"Resolution IMDb {recognition.imdb_id} impossible: {e}")
            return recognition

        if resolved is not None:
            recognition.tmdb_id = resolved.id
            recognition.tmdb_name = resolved.name or recognition.tmdb_name
        return recognition
