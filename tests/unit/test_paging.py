"""Tests for userdata_timeline.core.paging."""

from datetime import datetime, timedelta

import pytest

from userdata_timeline.core.models import Resource, Snapshot, snapshot_name
from userdata_timeline.core.paging import PAGE_SIZE, paginate


def _entries(count: int) -> list[Snapshot]:
    base = datetime(2024, 3, 1, 12, 0, 0)
    names = [snapshot_name(base + timedelta(minutes=i)) for i in range(count)]
    return [Snapshot.from_name(Resource.SETTINGS, n) for n in reversed(names)]


class TestPaginate:
    def test_first_page(self):
        entries = _entries(25)
        page = paginate(entries)
        assert page.items == entries[:10]
        assert page.cursor == "10"

    def test_middle_page(self):
        entries = _entries(25)
        page = paginate(entries, "10")
        assert page.items == entries[10:20]
        assert page.cursor == "20"

    def test_last_page(self):
        entries = _entries(25)
        page = paginate(entries, "20")
        assert len(page.items) == 5
        assert page.items == entries[20:]
        assert page.cursor is None

    def test_exact_fit_has_no_cursor(self):
        page = paginate(_entries(10))
        assert len(page.items) == 10
        assert page.cursor is None

    def test_empty(self):
        page = paginate([])
        assert page.items == []
        assert page.cursor is None

    def test_cursor_past_end(self):
        page = paginate(_entries(5), "30")
        assert page.items == []
        assert page.cursor is None

    def test_default_page_size(self):
        assert PAGE_SIZE == 10

    def test_custom_page_size(self):
        page = paginate(_entries(7), None, page_size=3)
        assert len(page.items) == 3
        assert page.cursor == "3"

    def test_stateless(self):
        entries = _entries(25)
        assert paginate(entries, "10") == paginate(entries, "10")

    @pytest.mark.parametrize("cursor", ["abc", "-10", "1.5"])
    def test_invalid_cursor(self, cursor):
        with pytest.raises(ValueError):
            paginate(_entries(3), cursor)
