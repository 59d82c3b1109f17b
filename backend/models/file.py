"""
File SQLAlchemy model.
"""
from datetime import datetime, timezone
from .base import db


def _utcnow():
    return datetime.now(timezone.utc)


class File(db.Model):
    """File entity - one ingested LAS document and where its raw copy is stored."""
    __tablename__ = "files"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    file_name = db.Column(db.String(255), nullable=False)
    uploaded_at = db.Column(db.DateTime, default=_utcnow, nullable=False, index=True)
    # local filesystem path or s3://bucket/key
    storage_path = db.Column(db.String(512), nullable=False)

    samples = db.relationship(
        "Sample",
        backref="file",
        lazy="dynamic",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_dict(self):
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "name": self.file_name,
            "upload_date": self.uploaded_at.isoformat() if self.uploaded_at else None,
            "storage_path": self.storage_path,
        }
