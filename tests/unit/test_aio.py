"""Tests for userdata_timeline.providers.history.aio — AsyncHistory."""

import asyncio
from pathlib import Path

import pytest

from userdata_timeline.core.models import Resource
from userdata_timeline.providers.history.aio import AsyncHistory
from userdata_timeline.providers.history.local import BackupStore
from userdata_timeline.providers.history.sync import SyncBackupResolver


def _store(tmp_path: Path) -> BackupStore:
    user_data = tmp_path / "User"
    user_data.mkdir()
    (user_data / "keybindings.json").write_text('[{"key": "ctrl+k"}]', encoding="utf-8")
    return BackupStore(tmp_path / "backups", user_data)


class TestAsyncHistory:
    def test_backup_list_resolve(self, tmp_path: Path):
        history = AsyncHistory(_store(tmp_path))

        async def scenario():
            snap = await history.backup(Resource.KEYBINDINGS)
            entries = await history.get_all_entries(Resource.KEYBINDINGS)
            content = await history.resolve_content(Resource.KEYBINDINGS, snap.name)
            return snap, entries, content

        snap, entries, content = asyncio.run(scenario())
        assert entries == [snap]
        assert content == '[{"key": "ctrl+k"}]'

    def test_page(self, tmp_path: Path):
        history = AsyncHistory(_store(tmp_path))
        page = asyncio.run(history.page(Resource.SETTINGS))
        assert page.items == []
        assert page.cursor is None

    def test_backup_on_read_only_provider(self, tmp_path: Path):
        history = AsyncHistory(SyncBackupResolver(tmp_path))
        with pytest.raises(TypeError):
            asyncio.run(history.backup(Resource.SETTINGS))

    def test_backup_error_propagates(self, tmp_path: Path):
        store = BackupStore(tmp_path / "backups", tmp_path / "missing")
        with pytest.raises(FileNotFoundError):
            asyncio.run(AsyncHistory(store).backup(Resource.SETTINGS))
