"""
Clients API externes (TMDB, Dify).
"""

from media_scraper.adapters.api.dify_client import DifyPathRecognizer
from media_scraper.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from media_scraper.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "DifyPathRecognizer",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
