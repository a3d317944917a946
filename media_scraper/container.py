"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI. Le registre des
taches et le bus de progression sont des singletons partages par toutes les
operations d'un meme processus.
"""

from dependency_injector import containers, providers

from .adapters.api.dify_client import DifyPathRecognizer
from .adapters.api.tmdb_client import TMDBClient
from .adapters.file_system import FileSystemAdapter
from .adapters.parsing.token_parser import TokenFilenameParser
from .config import Settings
from .infrastructure.persistence.memory_task_repository import InMemoryTaskRepository
from .services.batch import BatchProcessor
from .services.cleanup import CleanupGuard
from .services.matcher import MatcherService
from .services.nfo import NfoCodec
from .services.progress import ProgressBus
from .services.reconciliation import ReconciliationService
from .services.scanner import LibraryScanner
from .services.tasks import TaskService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        scanner = container.scanner_service()
        batch = container.batch_processor()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)
    media_paths = providers.Singleton(lambda settings: settings.media_paths, config)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    filename_parser = providers.Singleton(TokenFilenameParser)

    # Clients API - Singleton avec api_key depuis config
    # Sans cle, le client est cree mais chaque appel leve CatalogError
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        language=config.provided.language,
    )
    path_recognizer = providers.Singleton(
        DifyPathRecognizer,
        api_key=config.provided.dify_api_key,
        url=config.provided.dify_url,
    )

    # Services stateless
    nfo_codec = providers.Singleton(NfoCodec, generator=config.provided.nfo_generator)
    scanner_service = providers.Singleton(
        LibraryScanner,
        file_system=file_system,
        filename_parser=filename_parser,
        nfo_codec=nfo_codec,
    )
    matcher_service = providers.Singleton(
        MatcherService,
        catalog=tmdb_client,
        filename_parser=filename_parser,
        recognizer=path_recognizer,
    )
    cleanup_guard = providers.Singleton(CleanupGuard, file_system=file_system, paths=media_paths)
    reconciliation_service = providers.Singleton(
        ReconciliationService,
        file_system=file_system,
        catalog=tmdb_client,
        nfo_codec=nfo_codec,
        scanner=scanner_service,
        cleanup_guard=cleanup_guard,
        paths=media_paths,
    )

    # Supervision - registre et bus partages
    task_repository = providers.Singleton(InMemoryTaskRepository)
    task_service = providers.Singleton(TaskService, repository=task_repository)
    progress_bus = providers.Singleton(ProgressBus)
    batch_processor = providers.Singleton(
        BatchProcessor,
        reconciliation=reconciliation_service,
        tasks=task_service,
        progress=progress_bus,
        paths=media_paths,
        delay_seconds=config.provided.batch_delay_seconds,
        task_retention=config.provided.task_retention,
    )
