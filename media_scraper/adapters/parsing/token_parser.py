"""
Implementation du parser de noms de fichiers par tokens.

Ce module fournit TokenFilenameParser qui implemente IFilenameParser avec
une heuristique deterministe : recherche d'un marqueur d'episode dans le nom
brut, puis parcours des tokens de gauche a droite pour construire le titre.
"""

import re
from dataclasses import replace
from pathlib import PurePosixPath
from typing import Optional

from media_scraper.core.ports.parser import IFilenameParser
from media_scraper.core.value_objects.parsed_info import ParsedInfo
from media_scraper.utils.constants import (
    AUDIO_TAGS,
    CODEC_TAGS,
    RESOLUTION_TAGS,
    SOURCE_TAGS,
    SUBTITLE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)

# Extensions retirees avant le decoupage en tokens
_KNOWN_EXTENSIONS = VIDEO_EXTENSIONS | frozenset(SUBTITLE_EXTENSIONS) | {
    ".nfo",
    ".ts",
    ".rmvb",
    ".wmv",
    ".flv",
}

_SEPARATORS = re.compile(r"[.\-_\[\](){}]")

# Marqueurs d'episode, par ordre de priorite (le premier qui correspond gagne)
_SXXEYY = re.compile(r"[Ss](\d{1,2})[Ee](\d{1,3})(?:[Ee](\d{1,3}))?", re.ASCII)
_NXNN = re.compile(r"(\d{1,2})x(\d{1,3})", re.ASCII | re.IGNORECASE)
_EPNN = re.compile(r"(?:\bEP|\bE)(\d{1,3})", re.ASCII | re.IGNORECASE)
_CHINESE_EP = re.compile(r"第\s*(\d{1,3})\s*[集话話]")

# Tokens qui arretent la construction du titre
_STOP_TOKENS = (
    re.compile(r"^[Ss]\d{1,2}[Ee]\d{1,3}", re.ASCII),
    re.compile(r"^\d{1,2}x\d{1,3}$", re.ASCII),
    re.compile(r"^(?:EP|E)\d{1,3}$", re.ASCII | re.IGNORECASE),
    re.compile(r"^第\s*\d{1,3}\s*[集话話]"),
)

_YEAR_TOKEN = re.compile(r"^\d{4}$", re.ASCII)

# Noms de fichier sans titre dans un repertoire de saison (12.mkv, E12.mkv, EP12.mkv)
_BARE_NUMBER = re.compile(r"^(\d{1,3})$", re.ASCII)
_BARE_EPISODE = re.compile(r"^[Ee][Pp]?(\d{1,3})$", re.ASCII)
_SEASON_DIR = re.compile(r"^Season\s*(\d+)$", re.IGNORECASE)


# Tags ecrits avec un separateur (WEB-DL, Blu-ray, DDP5.1), coupes en deux tokens
_COMPOUND_TAGS = frozenset(
    tag
    for tag in RESOLUTION_TAGS | SOURCE_TAGS | CODEC_TAGS | AUDIO_TAGS
    if "-" in tag or "." in tag
)


def _strip_extension(filename: str) -> str:
    suffix = PurePosixPath(filename).suffix
    if suffix and suffix.lower() in _KNOWN_EXTENSIONS:
        return filename[: -len(suffix)]
    return filename


def _compound_tag(tokens: list[str], index: int) -> Optional[str]:
    """Tag forme par tokens[index] et le token suivant, ou None."""
    if index + 1 >= len(tokens):
        return None
    first, second = tokens[index].lower(), tokens[index + 1].lower()
    for joined in (f"{first}-{second}", f"{first}.{second}"):
        if joined in _COMPOUND_TAGS:
            return joined
    return None


class TokenFilenameParser(IFilenameParser):
    """
    Parser heuristique de noms de fichiers video.

    Ne leve jamais d'exception : les informations non trouvees restent a None
    et le titre vaut une chaine vide si aucun token de titre n'est present.
    """

    def parse_filename(self, filename: str) -> ParsedInfo:
        """
        Parse un nom de fichier video.

        Args:
            filename: Nom du fichier, avec ou sans extension

        Returns:
            ParsedInfo avec titre, annee, saison/episode et tags techniques.
        """
        name = _strip_extension(filename)
        season, episode, episode_end = self._match_episode(name)

        year: Optional[int] = None
        resolution: Optional[str] = None
        source: Optional[str] = None
        codec: Optional[str] = None
        title_tokens: list[str] = []

        tokens = _SEPARATORS.sub(" ", name).split()
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1

            if any(pattern.match(token) for pattern in _STOP_TOKENS):
                break

            lower = _compound_tag(tokens, index - 1)
            if lower is not None:
                index += 1
            else:
                lower = token.lower()

            if lower in RESOLUTION_TAGS:
                resolution = lower
                break

            if lower in SOURCE_TAGS:
                source = lower
                continue
            if lower in CODEC_TAGS:
                codec = lower
                continue
            if lower in AUDIO_TAGS:
                continue

            if _YEAR_TOKEN.match(token) and 1900 <= int(token) <= 2099:
                year = int(token)
                continue

            title_tokens.append(token)

        return ParsedInfo(
            title=" ".join(title_tokens).strip(),
            year=year,
            season=season,
            episode=episode,
            episode_end=episode_end,
            resolution=resolution,
            source=source,
            codec=codec,
        )

    def parse_from_path(self, relative_path: str) -> ParsedInfo:
        """
        Parse un chemin relatif a une racine de scan.

        Complete le parsing du nom de fichier avec :
        - un numero d'episode pour un nom purement numerique (12.mkv) ou
          E12/EP12, la saison venant d'un repertoire "Season N" ou valant 1
        - le titre du premier repertoire (hors "Season N") quand le nom de
          fichier n'en fournit pas

        Args:
            relative_path: Chemin relatif (separateur /)

        Returns:
            ParsedInfo enrichi par les repertoires parents.
        """
        parts = [part for part in relative_path.replace("\\", "/").split("/") if part]
        if not parts:
            return ParsedInfo(title="")

        filename = parts[-1]
        directories = parts[:-1]
        parsed = self.parse_filename(filename)

        if parsed.episode is None:
            base_name = _strip_extension(filename)
            match = _BARE_NUMBER.match(base_name) or _BARE_EPISODE.match(base_name)
            if match:
                parsed = replace(
                    parsed,
                    title="",
                    episode=int(match.group(1)),
                    season=parsed.season or self._season_from_dirs(directories) or 1,
                )

        if not parsed.title:
            for directory in directories:
                if _SEASON_DIR.match(directory):
                    continue
                dir_title = self.parse_filename(directory).title
                if dir_title:
                    parsed = replace(parsed, title=dir_title)
                    break

        return parsed

    def _match_episode(
        self, name: str
    ) -> tuple[Optional[int], Optional[int], Optional[int]]:
        """Retourne (saison, episode, dernier episode) du premier marqueur trouve."""
        match = _SXXEYY.search(name)
        if match:
            end = int(match.group(3)) if match.group(3) else None
            return int(match.group(1)), int(match.group(2)), end

        match = _NXNN.search(name)
        if match:
            return int(match.group(1)), int(match.group(2)), None

        for pattern in (_EPNN, _CHINESE_EP):
            match = pattern.search(name)
            if match:
                return 1, int(match.group(1)), None

        return None, None, None

    @staticmethod
    def _season_from_dirs(directories: list[str]) -> Optional[int]:
        for directory in reversed(directories):
            match = _SEASON_DIR.match(directory)
            if match:
                return int(match.group(1))
        return None
