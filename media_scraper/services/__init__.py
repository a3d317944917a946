"""
Services metier de la mediatheque.

Exports :
- LibraryScanner : inventaire des repertoires (series, films, inbox)
- MatcherService : recherche et correspondance automatique au catalogue
- NfoCodec : generation et lecture des NFO signes
- CleanupGuard : suppression protegee des repertoires sources
- ReconciliationService : planification et execution des operations
- TaskService, ProgressBus : supervision des operations longues
- BatchProcessor : traitement par lot
"""

from media_scraper.services.batch import BatchProcessor
from media_scraper.services.cleanup import CleanupGuard, CleanupReason, CleanupResult
from media_scraper.services.matcher import MatcherService
from media_scraper.services.nfo import NfoCodec, NfoDetails
from media_scraper.services.progress import ProgressBus, ProgressEvent, ProgressEventType
from media_scraper.services.reconciliation import ReconciliationError, ReconciliationService
from media_scraper.services.scanner import LibraryScanner
from media_scraper.services.tasks import TaskService

__all__ = [
    "BatchProcessor",
    "CleanupGuard",
    "CleanupReason",
    "CleanupResult",
    "LibraryScanner",
    "MatcherService",
    "NfoCodec",
    "NfoDetails",
    "ProgressBus",
    "ProgressEvent",
    "ProgressEventType",
    "ReconciliationError",
    "ReconciliationService",
    "TaskService",
]
