"""Sous-package CLI commands - re-exporte les commandes publiques."""

from media_scraper.adapters.cli.commands.library_commands import (
    scan_app,
    scan_inbox,
    scan_movies,
    scan_shows,
    stats,
)
from media_scraper.adapters.cli.commands.match_commands import (
    match,
    recognize,
    search,
)
from media_scraper.adapters.cli.commands.process_commands import (
    batch,
    fix_assets,
    move_to_inbox,
    preview,
    process_app,
    process_movie,
    process_tv,
    refresh,
    supplement,
)

__all__ = [
    # library
    "scan_app",
    "scan_shows",
    "scan_movies",
    "scan_inbox",
    "stats",
    # match
    "search",
    "match",
    "recognize",
    # process
    "process_app",
    "process_tv",
    "process_movie",
    "preview",
    "batch",
    "refresh",
    "supplement",
    "fix_assets",
    "move_to_inbox",
]
