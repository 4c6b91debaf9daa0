"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from routine_tracker.adapters.memory_routine_repository import (
    InMemoryRoutineRepository,
)
from routine_tracker.adapters.supabase_routine_repository import (
    SupabaseRoutineRepository,
)
from routine_tracker.config import Settings
from routine_tracker.services.dashboard import DashboardService, RoutineRepository

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when settings cannot produce a working container."""


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    routine_repository: RoutineRepository
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_repository(settings: Settings) -> RoutineRepository:
    """Create the routine repository selected by the storage backend."""
    if settings.storage_backend == "memory":
        return InMemoryRoutineRepository()
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required for supabase storage"
        )
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    return SupabaseRoutineRepository(client)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    repository = build_repository(resolved_settings)
    dashboard_service = DashboardService(
        repository=repository,
        policy=resolved_settings.scoring_policy(),
    )
    logger.info(
        "Container built",
        extra={"storage_backend": resolved_settings.storage_backend},
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        routine_repository=repository,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
