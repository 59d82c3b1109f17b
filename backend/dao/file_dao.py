"""
File Data Access Object - database operations for file metadata.
"""
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from models import File
from dao.sample_dao import SampleDAO
from utils.exceptions import PersistenceError
from utils.storage_utils import delete_stored

logger = logging.getLogger(__name__)


class FileDAO:
    """Handles file metadata database operations."""

    @staticmethod
    def create(file_name: str, storage_path: str, uploaded_at: datetime | None = None) -> File:
        """Insert file metadata. Raises PersistenceError if the row cannot be written."""
        from models.base import db
        f = File(file_name=file_name, storage_path=storage_path)
        if uploaded_at is not None:
            f.uploaded_at = uploaded_at
        try:
            db.session.add(f)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError(f"Could not record file {file_name!r}: {e}") from e
        return f

    @staticmethod
    def get_by_id(file_id: int) -> File | None:
        """Fetch file by ID."""
        from models.base import db
        return db.session.get(File, file_id)

    @staticmethod
    def get_recent(limit: int | None = None) -> list:
        """Fetch files, most recently uploaded first."""
        q = File.query.order_by(File.uploaded_at.desc(), File.id.desc())
        if limit:
            q = q.limit(limit)
        return q.all()

    @staticmethod
    def delete_permanent(file_id: int) -> bool:
        """
        Permanently delete file: remove the stored upload, its samples, then the DB record.
        Returns False if the file does not exist.
        """
        from models.base import db

        f = db.session.get(File, file_id)
        if not f:
            return False
        storage_path = f.storage_path
        try:
            SampleDAO.delete_by_file_id(file_id)
            db.session.delete(f)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError(f"Could not delete file {file_id}: {e}") from e
        if not delete_stored(storage_path):
            logger.warning("file_id=%s removed but stored copy %s was not", file_id, storage_path)
        return True
