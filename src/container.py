"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI.
"""

from dependency_injector import containers, providers

from .adapters.ai.factory import create_ai_client
from .adapters.file_system import FileSystemAdapter
from .adapters.worker_pool import AsyncioWorkerPool
from .config import Settings
from .services.discovery import FileDiscoveryService
from .services.match_cache import DryRunCache
from .services.match_service import MatchService
from .services.planner import MatchPlanner
from .services.relocator import RelocatorService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.match_service()
        reports = await service.run(request)

    Pour les tests, surcharger la configuration ou le client IA :
        container.config.override(providers.Object(settings))
        container.ai_client.override(providers.Object(fake_client))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    worker_pool = providers.Singleton(
        AsyncioWorkerPool,
        max_workers=config.provided.max_concurrent_jobs,
    )

    # Client IA - Factory : cree a la demande (la cle peut manquer)
    ai_client = providers.Factory(create_ai_client, settings=config)

    # Services stateless
    discovery_service = providers.Singleton(FileDiscoveryService)
    match_planner = providers.Singleton(MatchPlanner)

    # Cache des plans - un seul fichier par installation
    match_cache = providers.Factory(
        DryRunCache,
        cache_file=config.provided.cache_file,
    )

    relocator_service = providers.Factory(
        RelocatorService,
        file_system=file_system,
        worker_pool=worker_pool,
        backup_enabled=config.provided.backup_enabled,
    )

    # Service d'appariement - Factory car il porte le client IA d'un run
    match_service = providers.Factory(
        MatchService,
        discovery=discovery_service,
        planner=match_planner,
        cache=match_cache,
        relocator=relocator_service,
        settings=config,
        ai_client_factory=ai_client.provider,
    )
