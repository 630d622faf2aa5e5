"""
Tests specific to the SQLite backend: migrations, razor mutation and
error translation.
"""

import sqlite3

import pytest

from razor_tracker_api.app.core.db import MIGRATIONS, get_database_path, init_db
from razor_tracker_api.app.core.exceptions import (
    BackendUnavailableError,
    NotFoundError,
    ValidationFailureError,
)
from razor_tracker_api.app.storage import SQLiteBackend

from tests.helpers import make_razor, make_usage, populate


class TestMigrations:

    def test_fresh_database_reaches_latest_version(self, tmp_path):
        path = str(tmp_path / "nested" / "dir" / "tracker.db")
        version = init_db(path)

        assert version == MIGRATIONS[-1][0] == 2

        conn = sqlite3.connect(path)
        try:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
            indexes = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'")
            }
            applied = [row[0] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        finally:
            conn.close()

        assert {"razors", "blades", "usage_records", "migrations"} <= tables
        assert "idx_usage_records_usage_time" in indexes
        assert applied == [1, 2]

    def test_migrate_is_idempotent_and_keeps_data(self, sqlite_backend):
        razor = sqlite_backend.create_razor(make_razor())

        assert sqlite_backend.migrate() == 2
        assert sqlite_backend.get_razor(razor.id) == razor

    def test_relative_path_resolves_under_project_root(self):
        path = get_database_path("data/tracker.db")
        assert path.endswith("data/tracker.db") or path.endswith("data\\tracker.db")

    def test_absolute_path_used_as_is(self, tmp_path):
        target = str(tmp_path / "abs.db")
        assert get_database_path(target) == target


class TestRazorMutation:

    def test_update_razor(self, sqlite_backend):
        razor = sqlite_backend.create_razor(make_razor())
        razor.notes = "needs a new handle"
        razor.price = 50.0

        updated = sqlite_backend.update_razor(razor)

        assert updated.notes == "needs a new handle"
        assert updated.price == 50.0
        assert updated.updated_at >= razor.updated_at

    def test_update_missing_razor(self, sqlite_backend):
        razor = sqlite_backend.create_razor(make_razor())
        sqlite_backend.delete_razor(razor.id)

        with pytest.raises(NotFoundError):
            sqlite_backend.update_razor(razor)
        with pytest.raises(NotFoundError):
            sqlite_backend.delete_razor(razor.id)

    def test_deleting_referenced_razor_orphans_record(self, sqlite_backend):
        populate(sqlite_backend)
        record = sqlite_backend.create_usage_record(make_usage(razor_id=1, blade_id=1))

        sqlite_backend.delete_razor(1)

        orphan = sqlite_backend.get_usage_record(record.id)
        assert orphan.razor_id == 1
        assert orphan.razor is None
        assert orphan.blade is not None
        assert sqlite_backend.statistics().razor_count == 1


class TestFailures:

    def test_unmigrated_database_reports_unavailable(self, tmp_path):
        backend = SQLiteBackend(str(tmp_path / "empty.db"))

        with pytest.raises(BackendUnavailableError):
            backend.list_razors(0, 10)

    def test_unopenable_path_fails_migration(self, tmp_path):
        # A directory cannot be opened as a database file.
        backend = SQLiteBackend(str(tmp_path))

        with pytest.raises(BackendUnavailableError):
            backend.migrate()

    def test_out_of_range_value_is_rejected(self, sqlite_backend):
        populate(sqlite_backend)
        record = sqlite_backend.create_usage_record(make_usage(rating=3))
        record.rating = 2**63

        with pytest.raises(ValidationFailureError):
            sqlite_backend.update_usage_record(record)
        assert sqlite_backend.get_usage_record(record.id).rating == 3

    def test_timestamps_stored_as_utc_text(self, sqlite_backend):
        populate(sqlite_backend)
        sqlite_backend.create_usage_record(make_usage())

        conn = sqlite3.connect(sqlite_backend.db_path)
        try:
            usage_time, created_at = conn.execute(
                "SELECT usage_time, created_at FROM usage_records"
            ).fetchone()
        finally:
            conn.close()

        assert usage_time == "2024-05-01T07:30:00.000000+00:00"
        assert created_at.endswith("+00:00")
