"""Tests for the RateTableStore."""

from __future__ import annotations

import threading

import pytest

from courtquote.data.rate_store import RateTableStore
from courtquote.data.seed import DEFAULT_RATE_TABLE
from courtquote.exceptions import ConfigurationError
from courtquote.models.rate_table import RateTable


@pytest.fixture()
def store() -> RateTableStore:
    return RateTableStore([DEFAULT_RATE_TABLE])


class TestRateTableStore:
    def test_get_returns_named_table(self, store: RateTableStore) -> None:
        table = store.get("default")
        assert table == DEFAULT_RATE_TABLE
        assert table is not DEFAULT_RATE_TABLE

    def test_unknown_name_raises(self, store: RateTableStore) -> None:
        with pytest.raises(ConfigurationError, match="summer"):
            store.get("summer")

    def test_snapshots_are_independent(self, store: RateTableStore) -> None:
        snapshot = store.get("default")
        snapshot.flooring["acrylic"] = 1.0
        assert store.get("default").flooring["acrylic"] == 950.0

    def test_put_replaces_whole_table(self, store: RateTableStore) -> None:
        store.put({"name": "default", "lighting": {"standard": 100.0}})
        table = store.get("default")
        assert table.lighting == {"standard": 100.0}
        assert table.flooring == {}

    def test_put_rejects_invalid_table(self, store: RateTableStore) -> None:
        with pytest.raises(ValueError, match="Invalid rate table"):
            store.put({"name": "default", "lighting": {"led": 1.0}})
        assert store.get("default") == DEFAULT_RATE_TABLE

    def test_names(self, store: RateTableStore) -> None:
        store.put(RateTable(name="alt", lighting={"standard": 1.0}))
        assert store.names() == ["alt", "default"]

    def test_readers_never_see_partial_update(self, store: RateTableStore) -> None:
        first = RateTable(name="t", edgewall=1.0, drainage=1.0, lighting={"standard": 1.0})
        second = RateTable(name="t", edgewall=2.0, drainage=2.0, lighting={"standard": 2.0})
        store.put(first)
        mixed: list[RateTable] = []

        def writer() -> None:
            for i in range(200):
                store.put(first if i % 2 else second)

        def reader() -> None:
            for _ in range(200):
                table = store.get("t")
                if not table.edgewall == table.drainage == table.lighting["standard"]:
                    mixed.append(table)

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert mixed == []
