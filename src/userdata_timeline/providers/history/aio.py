"""Asyncio facade: runs the blocking history calls in worker threads."""

from __future__ import annotations

import asyncio

from userdata_timeline.core.models import Resource, Snapshot
from userdata_timeline.core.paging import Page, paginate
from userdata_timeline.providers.history.base import HistoryProvider
from userdata_timeline.providers.history.local import BackupStore


class AsyncHistory:
    """Awaitable view over a HistoryProvider.

    Each call is one ``asyncio.to_thread`` hop, so the event loop is free
    while the filesystem is touched. No cancellation reaches the provider.
    """

    def __init__(self, provider: HistoryProvider) -> None:
        self.provider = provider

    async def backup(self, resource: Resource) -> Snapshot:
        if not isinstance(self.provider, BackupStore):
            raise TypeError(f"{self.provider.name} history is read-only")
        return await asyncio.to_thread(self.provider.backup, resource)

    async def get_all_entries(self, resource: Resource) -> list[Snapshot]:
        return await asyncio.to_thread(self.provider.get_all_entries, resource)

    async def resolve_content(self, resource: Resource, name: str) -> str:
        return await asyncio.to_thread(self.provider.resolve_content, resource, name)

    async def page(self, resource: Resource, cursor: str | None = None) -> Page:
        """List entries and return the page at ``cursor``."""
        entries = await self.get_all_entries(resource)
        return paginate(entries, cursor)
