"""
Tests for the file and sample DAOs.
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from dao.file_dao import FileDAO
from dao.sample_dao import SampleDAO
from models import db, File, Sample, SampleRecord
from utils.exceptions import PersistenceError


def _records(n, curve="GR", start=0.0):
    return [SampleRecord(start + i, curve, float(i)) for i in range(n)]


class TestBulkInsert:

    def test_inserts_all_rows_in_batches(self, make_file):
        file_id = make_file()
        progress = []
        n = SampleDAO.bulk_insert(file_id, iter(_records(7)), batch_size=3, progress_callback=progress.append)

        assert n == 7
        assert progress == [3, 6, 7]
        assert SampleDAO.count_for_file(file_id) == 7

    def test_uses_configured_batch_size(self, app, make_file):
        file_id = make_file()
        progress = []
        SampleDAO.bulk_insert(file_id, _records(5), progress_callback=progress.append)
        # SAMPLE_BATCH_SIZE is 3 in the test app
        assert progress == [3, 5]

    def test_empty_input(self, make_file):
        file_id = make_file()
        assert SampleDAO.bulk_insert(file_id, []) == 0

    def test_failed_batch_rolls_back_only_itself(self, make_file):
        file_id = make_file()
        rows = _records(4) + [SampleRecord(10.0, "GR", 1.0), SampleRecord(11.0, "GR", None)]

        with pytest.raises(PersistenceError):
            SampleDAO.bulk_insert(file_id, rows, batch_size=2)

        # first two batches committed, the third rolled back entirely
        assert SampleDAO.count_for_file(file_id) == 4
        assert SampleDAO.get_depth_range(file_id) == (0.0, 3.0)


class TestQueries:

    @pytest.fixture
    def file_id(self, make_file):
        samples = [
            (300.0, "GR", 3.0),
            (100.0, "GR", 1.0),
            (200.0, "GR", 2.0),
            (100.0, "RES", 10.0),
            (300.0, "RES", 30.0),
            (150.0, "NPHI", 0.2),
        ]
        return make_file(samples)

    def test_sorted_by_depth(self, file_id):
        rows = SampleDAO.query_samples(file_id, ["GR"], 0, 1000)
        assert [r.depth for r in rows] == [100.0, 200.0, 300.0]

    def test_inclusive_bounds(self, file_id):
        rows = SampleDAO.query_samples(file_id, ["GR", "RES"], 100.0, 300.0)
        assert len(rows) == 5
        assert {r.depth for r in rows} == {100.0, 200.0, 300.0}

    def test_window_filters(self, file_id):
        rows = SampleDAO.query_samples(file_id, ["GR", "RES", "NPHI"], 120.0, 250.0)
        assert rows == [SampleRecord(150.0, "NPHI", 0.2), SampleRecord(200.0, "GR", 2.0)]

    def test_curve_filter_and_unknown_curve(self, file_id):
        rows = SampleDAO.query_samples(file_id, {"RES", "NOPE"}, 0, 1000)
        assert [r.curve_name for r in rows] == ["RES", "RES"]
        assert SampleDAO.query_samples(file_id, ["NOPE"], 0, 1000) == []

    def test_none_means_all_curves_empty_means_none(self, file_id):
        assert len(SampleDAO.query_samples(file_id, None, 0, 1000)) == 6
        assert SampleDAO.query_samples(file_id, [], 0, 1000) == []

    def test_repeated_queries_identical(self, file_id):
        first = SampleDAO.query_samples(file_id, ["GR", "RES"], 0, 1000)
        second = SampleDAO.query_samples(file_id, ["GR", "RES"], 0, 1000)
        assert first == second

    def test_curve_names_distinct_and_sorted(self, file_id):
        assert SampleDAO.get_curve_names(file_id) == ["GR", "NPHI", "RES"]

    def test_depth_range(self, file_id):
        assert SampleDAO.get_depth_range(file_id) == (100.0, 300.0)

    def test_unknown_file_is_empty_not_error(self, app):
        assert SampleDAO.query_samples(999, ["GR"], 0, 1000) == []
        assert SampleDAO.get_curve_names(999) == []
        assert SampleDAO.get_depth_range(999) is None

    def test_files_do_not_leak_into_each_other(self, file_id, make_file):
        other = make_file([(100.0, "GR", 99.0)], name="other.las")
        assert [r.value for r in SampleDAO.query_samples(other, ["GR"], 0, 1000)] == [99.0]
        assert len(SampleDAO.query_samples(file_id, ["GR"], 0, 1000)) == 3


class TestFileDAO:

    def test_recent_first(self, make_file):
        now = datetime.now(timezone.utc)
        old = make_file(name="old.las", uploaded_at=now - timedelta(days=2))
        new = make_file(name="new.las", uploaded_at=now)
        mid = make_file(name="mid.las", uploaded_at=now - timedelta(days=1))

        assert [f.id for f in FileDAO.get_recent()] == [new, mid, old]
        assert [f.id for f in FileDAO.get_recent(limit=1)] == [new]

    def test_to_dict(self, make_file):
        file_id = make_file(name="a.las")
        d = FileDAO.get_by_id(file_id).to_dict()
        assert d["id"] == file_id
        assert d["name"] == "a.las"
        assert d["upload_date"]

    def test_create_failure_raises_persistence_error(self, app, monkeypatch):
        def boom():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db.session, "commit", boom)
        with pytest.raises(PersistenceError):
            FileDAO.create("x.las", "/tmp/x.las")

    def test_delete_removes_samples_and_stored_copy(self, app, tmp_path):
        stored = tmp_path / "stored.las"
        stored.write_text("~A\n")
        file_id = FileDAO.create("stored.las", str(stored)).id
        SampleDAO.bulk_insert(file_id, _records(5))

        assert FileDAO.delete_permanent(file_id) is True
        assert db.session.get(File, file_id) is None
        assert Sample.query.filter_by(file_id=file_id).count() == 0
        assert not stored.exists()

    def test_delete_failure_keeps_file_and_samples(self, app, tmp_path, monkeypatch):
        stored = tmp_path / "kept.las"
        stored.write_text("~A\n")
        file_id = FileDAO.create("kept.las", str(stored)).id
        SampleDAO.bulk_insert(file_id, _records(5))

        def boom():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db.session, "commit", boom)
        with pytest.raises(PersistenceError):
            FileDAO.delete_permanent(file_id)

        assert db.session.get(File, file_id) is not None
        assert Sample.query.filter_by(file_id=file_id).count() == 5
        assert stored.exists()

    def test_delete_unknown(self, app):
        assert FileDAO.delete_permanent(12345) is False
