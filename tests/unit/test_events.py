"""Tests for userdata_timeline.core.events — ChangeNotifier."""

import pytest

from userdata_timeline.core.events import ChangeNotifier
from userdata_timeline.core.models import Resource


class TestChangeNotifier:
    def test_fire_reaches_all_subscribers(self):
        n = ChangeNotifier()
        a, b = [], []
        n.subscribe(a.append)
        n.subscribe(b.append)

        n.fire(Resource.SETTINGS)

        assert a == [Resource.SETTINGS]
        assert b == [Resource.SETTINGS]

    def test_no_replay_for_late_subscribers(self):
        n = ChangeNotifier()
        n.fire(Resource.SETTINGS)

        seen = []
        n.subscribe(seen.append)
        assert seen == []

        n.fire(Resource.KEYBINDINGS)
        assert seen == [Resource.KEYBINDINGS]

    def test_dispose_unsubscribes(self):
        n = ChangeNotifier()
        seen = []
        sub = n.subscribe(seen.append)
        sub.dispose()

        n.fire(Resource.SETTINGS)
        assert seen == []
        assert n.listener_count == 0

    def test_dispose_twice_is_harmless(self):
        n = ChangeNotifier()
        sub = n.subscribe(lambda r: None)
        sub.dispose()
        sub.dispose()
        assert n.listener_count == 0

    def test_subscription_context_manager(self):
        n = ChangeNotifier()
        seen = []
        with n.subscribe(seen.append):
            n.fire(Resource.SETTINGS)
        n.fire(Resource.SETTINGS)
        assert seen == [Resource.SETTINGS]

    def test_failing_listener_does_not_block_others(self):
        n = ChangeNotifier()

        def boom(resource):
            raise RuntimeError("listener bug")

        seen = []
        n.subscribe(boom)
        n.subscribe(seen.append)

        n.fire(Resource.SETTINGS)
        assert seen == [Resource.SETTINGS]

    def test_listener_count(self):
        n = ChangeNotifier()
        subs = [n.subscribe(lambda r: None) for _ in range(3)]
        assert n.listener_count == 3
        subs[0].dispose()
        assert n.listener_count == 2

    def test_close(self):
        n = ChangeNotifier()
        seen = []
        n.subscribe(seen.append)
        n.close()

        n.fire(Resource.SETTINGS)
        assert seen == []
        with pytest.raises(RuntimeError):
            n.subscribe(seen.append)

    def test_instances_are_independent(self):
        first, second = ChangeNotifier(), ChangeNotifier()
        seen = []
        first.subscribe(seen.append)
        second.fire(Resource.SETTINGS)
        assert seen == []
