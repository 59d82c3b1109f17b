"""
Sample SQLAlchemy model.
"""
from typing import NamedTuple
from .base import db


class SampleRecord(NamedTuple):
    """One (depth, curve, value) measurement, as parsed or as read back."""
    depth: float
    curve_name: str
    value: float


class Sample(db.Model):
    """Sample entity - one measurement of one curve at one depth of one file."""
    __tablename__ = "samples"
    __table_args__ = (
        db.Index("ix_samples_file_curve_depth", "file_id", "curve_name", "depth"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    file_id = db.Column(
        db.Integer, db.ForeignKey("files.id", ondelete="CASCADE"), nullable=False, index=True
    )
    depth = db.Column(db.Float, nullable=False, index=True)
    curve_name = db.Column(db.String(100), nullable=False)
    value = db.Column(db.Float, nullable=False)

