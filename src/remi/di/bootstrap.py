from __future__ import annotations

from pathlib import Path
from typing import Optional

from remi.config import DB_POOL_SIZE, DB_POOL_TIMEOUT_SEC, default_database_path
from remi.domain.repositories import INookRepository, IPreferenceSink
from remi.events.bus import EventBus
from remi.gui.services.hotkey_service import HotkeyService
from remi.gui.viewmodels.nook_list_viewmodel import NookListViewModel
from remi.infrastructure.db.pool import ConnectionPool
from remi.infrastructure.repositories.sqlite_nook_repository import SQLiteNookRepository
from remi.settings.manager import SettingsManager
from remi.settings.preferences import SettingsPreferenceSink

from .container import Container


def bootstrap(
    container: Container,
    db_path: Optional[Path] = None,
    settings_path: Optional[Path] = None,
) -> None:
    """Register all application services in the DI container."""

    def _settings(_: Container) -> SettingsManager:
        manager = SettingsManager(path=settings_path)
        manager.load()
        return manager

    container.register_singleton(EventBus, EventBus)
    container.register_factory(SettingsManager, _settings)
    container.register_factory(
        ConnectionPool,
        lambda _: ConnectionPool(
            db_path or default_database_path(),
            pool_size=DB_POOL_SIZE,
            timeout=DB_POOL_TIMEOUT_SEC,
        ),
    )
    container.register_factory(
        INookRepository, lambda c: SQLiteNookRepository(c.resolve(ConnectionPool))
    )
    container.register_factory(
        IPreferenceSink, lambda c: SettingsPreferenceSink(c.resolve(SettingsManager))
    )
    container.register_factory(
        NookListViewModel,
        lambda c: NookListViewModel(
            repository=c.resolve(INookRepository),
            preferences=c.resolve(IPreferenceSink),
            event_bus=c.resolve(EventBus),
        ),
    )
    container.register_factory(
        HotkeyService,
        lambda c: HotkeyService.from_settings(c.resolve(NookListViewModel), c.resolve(SettingsManager)),
    )


def create_container(
    db_path: Optional[Path] = None,
    settings_path: Optional[Path] = None,
) -> Container:
    container = Container()
    bootstrap(container, db_path=db_path, settings_path=settings_path)
    return container
