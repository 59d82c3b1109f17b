"""
Domain exceptions raised by the ingestion and query layers.

Unknown files are not an error anywhere in the store: reads against them
return empty data, so there is no NotFound exception here.
"""


class IngestError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ParseError(IngestError):
    """The LAS stream could not be opened or read. Nothing is kept."""

    status_code = 400


class PersistenceError(IngestError):
    """A database write or read failed."""

    status_code = 500


class EmptyInputError(IngestError):
    """Statistics were requested over a window with no samples."""

    status_code = 404
