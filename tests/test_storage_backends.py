"""
Contract tests run against both storage backends.

Every test here receives the ``backend`` fixture, which is an empty
in‑memory store or a freshly migrated SQLite file.
"""

from datetime import timedelta

import pytest

from razor_tracker_api.app.core.exceptions import NotFoundError

from tests.helpers import BASE_TIME, make_blade, make_razor, make_usage, populate


COLLECTIONS = ["razors", "blades", "usage_records"]


def _fill(backend, collection, count):
    for index in range(count):
        if collection == "razors":
            backend.create_razor(make_razor(model=f"Model {index}"))
        elif collection == "blades":
            backend.create_blade(make_blade(model=f"Blade {index}"))
        else:
            backend.create_usage_record(make_usage(hours=index))


def _strip_timestamps(value):
    if isinstance(value, dict):
        return {
            key: _strip_timestamps(item)
            for key, item in value.items()
            if key not in {"created_at", "updated_at", "purchase_date"}
        }
    if isinstance(value, list):
        return [_strip_timestamps(item) for item in value]
    return value


class TestCreateAndGet:
    """IDs, timestamps and read‑after‑write."""

    def test_ids_increase_and_timestamps_set(self, backend):
        first = backend.create_razor(make_razor())
        second = backend.create_razor(make_razor("Merkur", "34C"))

        assert first.id > 0
        assert second.id > first.id
        assert first.created_at is not None
        assert first.updated_at >= first.created_at

    def test_get_returns_created_razor(self, backend):
        created = backend.create_razor(make_razor(price=12.5, notes="travel razor"))
        assert backend.get_razor(created.id) == created

    def test_get_returns_created_blade(self, backend):
        created = backend.create_blade(make_blade(unit_price=0.5, compatible_razors="[1, 2]"))
        fetched = backend.get_blade(created.id)

        assert fetched == created
        assert fetched.compatible_razors == "[1, 2]"

    def test_usage_record_is_hydrated(self, populated):
        record = populated.create_usage_record(make_usage(razor_id=2, blade_id=2, rating=5))

        fetched = populated.get_usage_record(record.id)
        assert fetched == record
        assert fetched.razor.model == "OneBlade Pro"
        assert fetched.blade.model == "OneBlade cartridge"

    def test_ids_not_reused_after_delete(self, backend):
        first = backend.create_blade(make_blade())
        backend.delete_blade(first.id)
        second = backend.create_blade(make_blade())

        assert second.id > first.id

    @pytest.mark.parametrize("getter", ["get_razor", "get_blade", "get_usage_record"])
    def test_get_missing_raises_not_found(self, backend, getter):
        with pytest.raises(NotFoundError):
            getattr(backend, getter)(9999)


class TestPagination:
    """Slicing never fails and always reports the full total."""

    @pytest.mark.parametrize("collection", COLLECTIONS)
    @pytest.mark.parametrize("offset", [0, 3, 6, 7, 50, 2**63, 10**19])
    @pytest.mark.parametrize("limit", [1, 3, 10, 2**63])
    def test_page_size_and_total(self, backend, collection, offset, limit):
        _fill(backend, collection, 7)

        items, total = getattr(backend, f"list_{collection}")(offset, limit)

        assert total == 7
        assert len(items) == min(limit, max(0, 7 - offset))

    def test_razor_pages_follow_id_order(self, backend):
        created = [backend.create_razor(make_razor(model=f"Model {i}")) for i in range(5)]

        page, _ = backend.list_razors(2, 2)
        assert [razor.id for razor in page] == [created[2].id, created[3].id]

    def test_usage_record_list_newest_first(self, populated):
        populated.create_usage_record(make_usage(hours=1))
        populated.create_usage_record(make_usage(hours=5))
        populated.create_usage_record(make_usage(hours=3))

        items, total = populated.list_usage_records(0, 10)

        assert total == 3
        assert [r.usage_time for r in items] == [
            BASE_TIME + timedelta(hours=5),
            BASE_TIME + timedelta(hours=3),
            BASE_TIME + timedelta(hours=1),
        ]
        assert all(r.razor is not None and r.blade is not None for r in items)


class TestUpdateAndDelete:

    def test_update_blade_restamps(self, backend):
        blade = backend.create_blade(make_blade())
        blade.remaining_quantity = 3
        blade.notes = "running low"

        updated = backend.update_blade(blade)

        assert updated.remaining_quantity == 3
        assert updated.notes == "running low"
        assert updated.created_at == blade.created_at
        assert updated.updated_at >= blade.updated_at
        assert backend.get_blade(blade.id) == updated

    def test_update_stamp_comes_from_stored_row(self, backend):
        blade = backend.create_blade(make_blade())
        future = blade.updated_at + timedelta(days=30)
        blade.updated_at = future

        updated = backend.update_blade(blade)

        assert blade.created_at <= updated.updated_at < future

    def test_update_missing_blade(self, backend):
        blade = backend.create_blade(make_blade())
        backend.delete_blade(blade.id)

        with pytest.raises(NotFoundError):
            backend.update_blade(blade)

    def test_delete_blade(self, backend):
        blade = backend.create_blade(make_blade())
        backend.delete_blade(blade.id)

        with pytest.raises(NotFoundError):
            backend.get_blade(blade.id)
        with pytest.raises(NotFoundError):
            backend.delete_blade(blade.id)

    def test_update_and_delete_usage_record(self, populated):
        record = populated.create_usage_record(make_usage(rating=3))
        record.rating = 5
        record.blade_id = 2

        updated = populated.update_usage_record(record)
        assert updated.rating == 5
        assert updated.blade.id == 2

        populated.delete_usage_record(record.id)
        with pytest.raises(NotFoundError):
            populated.get_usage_record(record.id)

    def test_deleting_referenced_blade_orphans_record(self, populated):
        record = populated.create_usage_record(make_usage(razor_id=1, blade_id=2))

        populated.delete_blade(2)

        orphan = populated.get_usage_record(record.id)
        assert orphan.blade_id == 2
        assert orphan.blade is None
        assert orphan.razor.id == 1


class TestIntegerRange:
    """IDs and offsets beyond 64 bits behave like any other missing value."""

    @pytest.mark.parametrize("entity_id", [2**63, -(2**63) - 1, 10**30])
    @pytest.mark.parametrize("getter", ["get_razor", "get_blade", "get_usage_record"])
    def test_get_unstorable_id(self, populated, getter, entity_id):
        with pytest.raises(NotFoundError):
            getattr(populated, getter)(entity_id)

    @pytest.mark.parametrize("deleter", ["delete_blade", "delete_usage_record"])
    def test_delete_unstorable_id(self, populated, deleter):
        with pytest.raises(NotFoundError):
            getattr(populated, deleter)(2**63)

    def test_update_unstorable_id(self, populated):
        blade = populated.get_blade(1)
        blade.id = 2**63

        with pytest.raises(NotFoundError):
            populated.update_blade(blade)

    def test_recent_with_huge_limit(self, populated):
        for hours in range(3):
            populated.create_usage_record(make_usage(hours=hours))

        assert len(populated.recent_usage_records(2**63)) == 3


class TestSnapshots:
    """Returned values never alias stored state."""

    def test_mutating_result_does_not_change_store(self, populated):
        record = populated.create_usage_record(make_usage())
        record.razor.brand = "Changed"
        record.experience_text = "changed"

        fresh = populated.get_usage_record(record.id)
        assert fresh.razor.brand == "Gillette"
        assert fresh.experience_text == ""


class TestAggregates:

    def test_average_is_zero_without_ratings(self, populated):
        populated.create_usage_record(make_usage())

        stats = populated.statistics()
        assert stats.total_usage == 1
        assert stats.average_rating == 0.0

    def test_average_ignores_unrated_records(self, populated):
        for hours, rating in enumerate([4, 2, 5, None, None]):
            populated.create_usage_record(make_usage(hours=hours, rating=rating))

        stats = populated.statistics()
        assert stats.total_usage == 5
        assert stats.razor_count == 2
        assert stats.blade_count == 2
        assert stats.average_rating == pytest.approx(11 / 3)

    def test_recent_orders_by_usage_time(self, populated):
        for hours in [3, 1, 4, 2]:
            populated.create_usage_record(make_usage(hours=hours))

        recent = populated.recent_usage_records(3)

        assert [r.usage_time for r in recent] == [
            BASE_TIME + timedelta(hours=4),
            BASE_TIME + timedelta(hours=3),
            BASE_TIME + timedelta(hours=2),
        ]

    def test_recent_ties_prefer_higher_id(self, populated):
        first = populated.create_usage_record(make_usage())
        second = populated.create_usage_record(make_usage())

        recent = populated.recent_usage_records(5)
        assert [r.id for r in recent] == [second.id, first.id]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_recent_non_positive_limit(self, populated, limit):
        populated.create_usage_record(make_usage())
        assert populated.recent_usage_records(limit) == []


def test_backends_agree(tmp_path):
    """The same sequence of calls yields the same observable results."""
    from razor_tracker_api.app.storage import MemoryBackend, SQLiteBackend

    sqlite = SQLiteBackend(str(tmp_path / "parity.db"))
    sqlite.migrate()
    memory = MemoryBackend(seed=False)

    results = []
    for store in (memory, sqlite):
        populate(store)
        store.create_usage_record(make_usage(razor_id=1, blade_id=1, hours=2, rating=4))
        store.create_usage_record(make_usage(razor_id=2, blade_id=2, hours=1))
        store.create_usage_record(make_usage(razor_id=1, blade_id=2, hours=3, rating=1))
        blade = store.get_blade(1)
        blade.remaining_quantity = 7
        store.update_blade(blade)
        items, total = store.list_usage_records(1, 5)
        results.append(
            {
                "razors": [r.model_dump() for r in store.list_razors(0, 10)[0]],
                "blades": [b.model_dump() for b in store.list_blades(0, 10)[0]],
                "page": [r.model_dump() for r in items],
                "total": total,
                "stats": store.statistics().model_dump(),
                "recent": [r.model_dump() for r in store.recent_usage_records(2)],
            }
        )

    assert _strip_timestamps(results[0]) == _strip_timestamps(results[1])
