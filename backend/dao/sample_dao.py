"""
Sample Data Access Object - database operations for (depth, curve, value) samples.
"""
import functools
import logging
from itertools import islice
from typing import Iterable

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from models import Sample, SampleRecord
from utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)

BATCH_SIZE = 5000


def _read_errors_as_persistence(fn):
    """Roll back and re-raise database read failures as PersistenceError."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as e:
            from models.base import db
            db.session.rollback()
            raise PersistenceError(f"{fn.__name__} failed: {e}") from e
    return wrapper


def _batches(iterable, size):
    it = iter(iterable)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


class SampleDAO:
    """Handles sample database operations."""

    @staticmethod
    def bulk_insert(
        file_id: int,
        samples: Iterable[SampleRecord],
        batch_size: int | None = None,
        progress_callback=None,
    ) -> int:
        """
        Insert samples for one file, pulling them lazily from any iterable.
        Each batch is its own transaction, committed in order; a failing batch is
        rolled back and raises PersistenceError while earlier batches stay committed.
        progress_callback(inserted_count) is called after every committed batch.
        Returns the number of rows inserted.
        """
        from models.base import db
        size = batch_size or current_app.config.get("SAMPLE_BATCH_SIZE", BATCH_SIZE)
        inserted = 0
        for batch in _batches(samples, size):
            mappings = [
                {"file_id": file_id, "depth": s.depth, "curve_name": s.curve_name, "value": s.value}
                for s in batch
            ]
            try:
                db.session.bulk_insert_mappings(Sample, mappings)
                db.session.commit()
            except SQLAlchemyError as e:
                db.session.rollback()
                raise PersistenceError(
                    f"Failed to insert samples {inserted}-{inserted + len(batch)} for file {file_id}: {e}"
                ) from e
            inserted += len(batch)
            logger.debug("file_id=%s committed batch, %d rows so far", file_id, inserted)
            if progress_callback is not None:
                progress_callback(inserted)
        return inserted

    @staticmethod
    @_read_errors_as_persistence
    def query_samples(
        file_id: int, curve_names, depth_min: float, depth_max: float
    ) -> list[SampleRecord]:
        """
        Samples of a file within [depth_min, depth_max], ordered by depth.
        curve_names=None means every curve; an empty collection matches nothing.
        """
        if curve_names is not None:
            curve_names = list(curve_names)
            if not curve_names:
                return []
        q = Sample.query.filter(
            Sample.file_id == file_id,
            Sample.depth >= depth_min,
            Sample.depth <= depth_max,
        )
        if curve_names is not None:
            q = q.filter(Sample.curve_name.in_(curve_names))
        rows = q.order_by(Sample.depth, Sample.id).with_entities(
            Sample.depth, Sample.curve_name, Sample.value
        ).all()
        return [SampleRecord(r.depth, r.curve_name, r.value) for r in rows]

    @staticmethod
    @_read_errors_as_persistence
    def get_curve_names(file_id: int) -> list:
        """Get distinct curve names for a file, lexically ordered."""
        result = Sample.query.filter(Sample.file_id == file_id).with_entities(
            Sample.curve_name
        ).distinct().order_by(Sample.curve_name).all()
        return [r[0] for r in result]

    @staticmethod
    @_read_errors_as_persistence
    def get_depth_range(file_id: int) -> tuple[float, float] | None:
        """Get (depth_min, depth_max) for a file. Returns None if it has no samples."""
        row = Sample.query.filter(Sample.file_id == file_id).with_entities(
            func.min(Sample.depth).label("min_d"),
            func.max(Sample.depth).label("max_d"),
        ).first()
        if not row or row.min_d is None:
            return None
        return (float(row.min_d), float(row.max_d))

    @staticmethod
    @_read_errors_as_persistence
    def count_for_file(file_id: int) -> int:
        return Sample.query.filter(Sample.file_id == file_id).count()

    @staticmethod
    def delete_by_file_id(file_id: int) -> int:
        """
        Delete all samples for a file in the current transaction; the caller commits.
        Returns number of rows removed.
        """
        return Sample.query.filter_by(file_id=file_id).delete(synchronize_session=False)
