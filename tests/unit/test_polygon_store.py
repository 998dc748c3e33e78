"""
Unit tests for the in-memory polygon store.

Tests:
- Create / get / replace / delete
- Size cap eviction
- Atomic replacement under concurrent readers
- Singleton access
"""

import threading

import pytest

from server.memory.polygon_store import (
    InMemoryPolygonStore,
    get_polygon_store,
    reset_polygon_store,
)


class TestStoreOperations:
    """Basic lifecycle."""

    def test_create_and_get(self, prepared_sample):
        store = InMemoryPolygonStore()
        polygon_id = store.create(prepared_sample)

        assert store.get(polygon_id) is prepared_sample
        assert store.get_record(polygon_id).rev == 1
        assert store.list_ids() == [polygon_id]

    def test_record_timestamps_are_utc(self, prepared_sample, prepared_rectangle):
        from datetime import timezone

        store = InMemoryPolygonStore()
        polygon_id = store.create(prepared_sample)
        record = store.get_record(polygon_id)
        created = record.created_at

        assert created.tzinfo == timezone.utc
        store.replace(polygon_id, prepared_rectangle)
        assert record.updated_at.tzinfo == timezone.utc
        assert record.updated_at >= created
        assert record.created_at == created

    def test_create_takes_only_the_polygon(self, prepared_sample):
        store = InMemoryPolygonStore()
        with pytest.raises(TypeError):
            store.create(prepared_sample, {"note": "unused"})

    def test_get_unknown(self):
        store = InMemoryPolygonStore()
        assert store.get("missing") is None
        assert store.get_record("missing") is None

    def test_replace_bumps_revision(self, prepared_sample, prepared_rectangle):
        store = InMemoryPolygonStore()
        polygon_id = store.create(prepared_sample)

        assert store.replace(polygon_id, prepared_rectangle) == 2
        assert store.get(polygon_id) is prepared_rectangle
        assert store.replace(polygon_id, prepared_sample) == 3

    def test_replace_unknown(self, prepared_sample):
        store = InMemoryPolygonStore()
        assert store.replace("missing", prepared_sample) is None
        assert store.list_ids() == []

    def test_delete(self, prepared_sample):
        store = InMemoryPolygonStore()
        polygon_id = store.create(prepared_sample)

        assert store.delete(polygon_id) is True
        assert store.get(polygon_id) is None
        assert store.delete(polygon_id) is False

    def test_clear(self, prepared_sample):
        store = InMemoryPolygonStore()
        store.create(prepared_sample)
        store.create(prepared_sample)
        store.clear()
        assert store.list_ids() == []


class TestEviction:
    """Size cap."""

    def test_oldest_evicted(self, prepared_sample):
        store = InMemoryPolygonStore(max_polygons=2)
        first = store.create(prepared_sample)
        second = store.create(prepared_sample)
        third = store.create(prepared_sample)

        ids = store.list_ids()
        assert first not in ids
        assert second in ids
        assert third in ids

    def test_default_cap_from_config(self, monkeypatch):
        from histogram_routing import config

        monkeypatch.setattr(config, "MAX_POLYGONS", 7)
        assert InMemoryPolygonStore().max_polygons == 7


class TestConcurrency:
    """Readers never see a torn value."""

    @pytest.mark.slow
    def test_replace_while_reading(self, prepared_sample, prepared_rectangle):
        store = InMemoryPolygonStore()
        polygon_id = store.create(prepared_sample)
        seen = []
        stop = threading.Event()

        def reader():
            while True:
                value = store.get(polygon_id)
                seen.append(value is prepared_sample or value is prepared_rectangle)
                if stop.is_set():
                    break

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for i in range(200):
            store.replace(polygon_id, prepared_rectangle if i % 2 == 0 else prepared_sample)
        stop.set()
        for t in threads:
            t.join()

        assert seen
        assert all(seen)
        assert store.get_record(polygon_id).rev == 201


class TestSingleton:
    """Tests for get_polygon_store / reset_polygon_store."""

    def test_same_instance(self):
        reset_polygon_store()
        assert get_polygon_store() is get_polygon_store()

    def test_reset(self, prepared_sample):
        reset_polygon_store()
        store = get_polygon_store()
        store.create(prepared_sample)

        reset_polygon_store()
        assert get_polygon_store() is not store
        assert get_polygon_store().list_ids() == []
