"""
Constantes globales pour MediaScraper.

Ce module contient toutes les constantes utilisees dans l'application:
- Extensions video et sous-titres reconnues
- Vocabulaires des tags techniques (resolution, source, codec, audio)
- Noms de fichiers des NFO et des images de la mediatheque
"""

# Extensions video reconnues (comparaison insensible a la casse)
VIDEO_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".m4v",
    ".avi",
    ".mov",
})

# Sous-titres deplaces avec le fichier video de meme nom
SUBTITLE_EXTENSIONS = (".srt", ".ass", ".ssa", ".sub")

# Tags techniques reconnus dans les noms de fichiers (en minuscules)
RESOLUTION_TAGS = frozenset({"2160p", "1080p", "720p", "480p", "4k", "8k"})
SOURCE_TAGS = frozenset({
    "bluray",
    "blu-ray",
    "bdrip",
    "remux",
    "web-dl",
    "webrip",
    "hdtv",
    "dvdrip",
    "atvp",
    "dsnp",
    "nf",
})
CODEC_TAGS = frozenset({"x265", "h265", "hevc", "x264", "h264", "avc"})
AUDIO_TAGS = frozenset({
    "ddp",
    "ddp5.1",
    "ddp7.1",
    "dts",
    "truehd",
    "atmos",
    "aac",
    "flac",
    "ac3",
})

# Fichiers de la mediatheque
TVSHOW_NFO = "tvshow.nfo"
SEASON_NFO = "season.nfo"
POSTER_FILE = "poster.jpg"
FANART_FILE = "fanart.jpg"

# Affiches reconnues, par ordre de priorite
POSTER_NAMES = ("poster.jpg", "poster.png", "folder.jpg")

# Nom affiche du groupe synthetique des fichiers a la racine de l'inbox
ROOT_GROUP_NAME = "根目录"
