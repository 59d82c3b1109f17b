"""Models package."""
from .base import db
from .file import File
from .sample import Sample, SampleRecord

__all__ = ["db", "File", "Sample", "SampleRecord"]
