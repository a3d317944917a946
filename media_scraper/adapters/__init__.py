"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer)
- api/ : Clients API externes (TMDB, Dify)
- persistence/ : Stockage en memoire des taches
- parsing/ : Parsing de noms de fichiers

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""

from media_scraper.adapters.file_system import FileSystemAdapter
from media_scraper.adapters.parsing.token_parser import TokenFilenameParser

__all__ = [
    "FileSystemAdapter",
    "TokenFilenameParser",
]
