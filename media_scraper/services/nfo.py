"""
Generation et lecture des fichiers NFO.

Les NFO sont des fichiers XML au format Kodi (tvshow, season,
episodedetails, movie). Chaque NFO genere porte la signature
<generator>, qui distingue les fichiers produits par l'application des NFO
etrangers : seuls les NFO signes sont regeneres.

Un fichier multi-episodes contient plusieurs blocs <episodedetails>
concatenes, comme l'attend Kodi.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from lxml import etree as ET

from media_scraper.core.ports.api_clients import (
    EpisodeDetails,
    MovieDetails,
    SeasonDetails,
    ShowDetails,
)

_TMDB_ID = re.compile(r"<tmdbid>\s*(\d+)\s*</tmdbid>", re.IGNORECASE)
_YEAR_PREFIX = re.compile(r"^(\d{4})")


@dataclass
class NfoDetails:
    """Champs lus depuis un NFO existant (tous optionnels)."""

    title: Optional[str] = None
    overview: Optional[str] = None
    tagline: Optional[str] = None
    status: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    year: Optional[int] = None
    tmdb_id: Optional[int] = None


def _year(date: Optional[str]) -> Optional[str]:
    if date:
        match = _YEAR_PREFIX.match(date)
        if match:
            return match.group(1)
    return None


def _add(parent: ET._Element, tag: str, value: object) -> None:
    """Ajoute un sous-element si la valeur est renseignee."""
    if value is None or value == "":
        return
    ET.SubElement(parent, tag).text = str(value)


def _rating(value: float) -> Optional[str]:
    return f"{value:.1f}" if value else None


class NfoCodec:
    """
    Codec des NFO signes par generator.

    Example:
        codec = NfoCodec("media-scraper-web")
        content = codec.tvshow(show_details)
        codec.is_signed(content)  # True
    """

    def __init__(self, generator: str) -> None:
        self._generator = generator
        self._signature = f"<generator>{generator}</generator>"

    @property
    def generator(self) -> str:
        return self._generator

    def _serialize(self, root: ET._Element, declaration: bool = True) -> str:
        _add(root, "generator", self._generator)
        return ET.tostring(
            root,
            pretty_print=True,
            xml_declaration=declaration,
            encoding="utf-8",
            standalone=True if declaration else None,
        ).decode("utf-8")

    @staticmethod
    def _add_ids(root: ET._Element, tmdb_id: int, imdb_id: Optional[str]) -> None:
        _add(root, "tmdbid", tmdb_id)
        uniqueid = ET.SubElement(root, "uniqueid", type="tmdb", default="true")
        uniqueid.text = str(tmdb_id)
        if imdb_id:
            ET.SubElement(root, "uniqueid", type="imdb").text = imdb_id

    def tvshow(self, show: ShowDetails) -> str:
        """NFO de serie (tvshow.nfo)."""
        root = ET.Element("tvshow")
        _add(root, "title", show.name)
        _add(root, "originaltitle", show.original_name)
        _add(root, "plot", show.overview)
        _add(root, "premiered", show.first_air_date)
        _add(root, "year", _year(show.first_air_date))
        _add(root, "rating", _rating(show.vote_average))
        _add(root, "status", show.status)
        for genre in show.genres:
            _add(root, "genre", genre)
        for studio in show.studios:
            _add(root, "studio", studio)
        self._add_ids(root, show.id, show.imdb_id)
        return self._serialize(root)

    def season(self, show: ShowDetails, season: SeasonDetails) -> str:
        """NFO de saison (season.nfo)."""
        root = ET.Element("season")
        _add(root, "title", season.name or f"Season {season.season_number}")
        _add(root, "showtitle", show.name)
        _add(root, "seasonnumber", season.season_number)
        _add(root, "plot", season.overview)
        _add(root, "premiered", season.air_date)
        _add(root, "year", _year(season.air_date))
        _add(root, "tmdbid", show.id)
        return self._serialize(root)

    def episode(
        self,
        show: ShowDetails,
        season: SeasonDetails,
        episodes: Iterable[int],
    ) -> str:
        """
        NFO d'episode ; un bloc <episodedetails> par numero d'episode.

        Un episode absent des details de saison produit un bloc minimal
        (titre "Episode N").
        """
        blocks = []
        for index, number in enumerate(episodes):
            details = season.episode(number) or EpisodeDetails(
                episode_number=number, name=f"Episode {number}"
            )
            root = ET.Element("episodedetails")
            _add(root, "title", details.name or f"Episode {number}")
            _add(root, "showtitle", show.name)
            _add(root, "season", season.season_number)
            _add(root, "episode", number)
            _add(root, "plot", details.overview)
            _add(root, "aired", details.air_date)
            _add(root, "year", _year(details.air_date))
            _add(root, "rating", _rating(details.vote_average))
            _add(root, "runtime", details.runtime)
            _add(root, "tmdbid", show.id)
            blocks.append(self._serialize(root, declaration=index == 0))
        return "".join(blocks)

    def movie(self, movie: MovieDetails) -> str:
        """NFO de film (<Titre (Annee)>.nfo)."""
        root = ET.Element("movie")
        _add(root, "title", movie.title)
        _add(root, "originaltitle", movie.original_title)
        _add(root, "plot", movie.overview)
        _add(root, "tagline", movie.tagline)
        _add(root, "premiered", movie.release_date)
        _add(root, "year", _year(movie.release_date))
        _add(root, "runtime", movie.runtime)
        _add(root, "rating", _rating(movie.vote_average))
        for genre in movie.genres:
            _add(root, "genre", genre)
        for studio in movie.studios:
            _add(root, "studio", studio)
        self._add_ids(root, movie.id, movie.imdb_id)
        return self._serialize(root)

    def is_signed(self, content: str) -> bool:
        """True si le contenu porte la signature de l'application."""
        return self._signature in content

    @staticmethod
    def extract_catalog_id(content: str) -> Optional[int]:
        """ID TMDB du champ <tmdbid>, ou None."""
        match = _TMDB_ID.search(content)
        return int(match.group(1)) if match else None

    @staticmethod
    def read_details(content: str) -> NfoDetails:
        """
        Lit les champs connus d'un NFO.

        Tolerant : XML invalide, balises inconnues ou absentes et valeurs non
        numeriques donnent des champs None.
        """
        details = NfoDetails(tmdb_id=NfoCodec.extract_catalog_id(content))
        parser = ET.XMLParser(recover=True, remove_blank_text=True)
        try:
            root = ET.fromstring(content.encode("utf-8"), parser)
        except ET.XMLSyntaxError:
            root = None
        if root is None:
            return details

        def text(tag: str) -> Optional[str]:
            value = root.findtext(tag)
            return value.strip() if value and value.strip() else None

        if details.tmdb_id is None:
            uniqueid = root.find("uniqueid[@type='tmdb']")
            if uniqueid is not None and (uniqueid.text or "").strip().isdigit():
                details.tmdb_id = int(uniqueid.text.strip())

        details.title = text("title")
        details.overview = text("plot")
        details.tagline = text("tagline")
        details.status = text("status")

        runtime = text("runtime")
        if runtime and runtime.isdigit():
            details.runtime = int(runtime)

        rating = text("rating")
        if rating:
            try:
                details.vote_average = float(rating)
            except ValueError:
                pass

        year = text("year")
        if year and year.isdigit():
            details.year = int(year)
        elif _year(text("premiered")):
            details.year = int(_year(text("premiered")))
        return details
