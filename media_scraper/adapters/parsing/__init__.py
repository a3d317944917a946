"""
Adaptateurs de parsing des noms de fichiers.
"""

from media_scraper.adapters.parsing.token_parser import TokenFilenameParser

__all__ = ["TokenFilenameParser"]
