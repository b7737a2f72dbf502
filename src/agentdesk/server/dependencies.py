"""FastAPI dependency providers.

Tests override ``get_settings`` to point the app at a temporary workspace
and database.
"""

from pathlib import Path
from typing import Annotated

from fastapi import Depends

from ..activity import ActivityFeed
from ..config import Settings, get_settings
from ..indexer import IncrementalIndexer
from ..schedule import ScheduleService
from ..search import SearchService
from ..storage import WorkspaceStore

# One initialized store per database file
_stores: dict[Path, WorkspaceStore] = {}


def get_store(settings: Annotated[Settings, Depends(get_settings)]) -> WorkspaceStore:
    store = _stores.get(settings.database_path)
    if store is None:
        store = WorkspaceStore(settings.database_path)
        store.initialize()
        _stores[settings.database_path] = store
    return store


def get_search_service(
    store: Annotated[WorkspaceStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SearchService:
    return SearchService(store, default_limit=settings.search_limit)


def get_activity_feed(
    store: Annotated[WorkspaceStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ActivityFeed:
    return ActivityFeed(store, clock=store.clock, page_size=settings.activity_page_size)


def get_schedule_service(store: Annotated[WorkspaceStore, Depends(get_store)]) -> ScheduleService:
    return ScheduleService(store, clock=store.clock)


def get_indexer(
    store: Annotated[WorkspaceStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    activity: Annotated[ActivityFeed, Depends(get_activity_feed)],
) -> IncrementalIndexer:
    return IncrementalIndexer(store, settings=settings, activity=activity)
