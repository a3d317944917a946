"""
Utilitaires et constantes pour MediaScraper.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from media_scraper.utils.constants import (
    AUDIO_TAGS,
    CODEC_TAGS,
    POSTER_NAMES,
    RESOLUTION_TAGS,
    SOURCE_TAGS,
    SUBTITLE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)

__all__ = [
    "VIDEO_EXTENSIONS",
    "SUBTITLE_EXTENSIONS",
    "RESOLUTION_TAGS",
    "SOURCE_TAGS",
    "CODEC_TAGS",
    "AUDIO_TAGS",
    "POSTER_NAMES",
]
