"""
File ingestion service: store the raw upload, stream-parse it, persist samples.
"""
import logging

from botocore.exceptions import ClientError
from flask import current_app

from dao.file_dao import FileDAO
from dao.sample_dao import SampleDAO
from services.las_parser_service import LASParserService
from utils.exceptions import ParseError, PersistenceError
from utils.storage_utils import delete_stored, open_stored, save_upload

logger = logging.getLogger(__name__)


def _range_dict(depth_range):
    if depth_range is None:
        return {"min": None, "max": None}
    return {"min": depth_range[0], "max": depth_range[1]}


class FileService:
    """Handles upload storage, parsing and sample persistence."""

    @staticmethod
    def ingest(file_obj, file_name: str, emit=None):
        """
        Store the upload, parse it line by line and write samples in batches.
        Returns { file_id, file_name, curves, depth_range, sample_count }.
        Raises ParseError (nothing kept) or PersistenceError.
        If emit(event, data) is provided, progress is pushed to the frontend via WebSocket.
        """
        def log(msg: str, **kwargs):
            logger.info("[%s] %s", file_name, msg)
            if emit:
                emit("ingest_log", {"file_name": file_name, "message": msg, **kwargs})

        log("Upload received", step="start")
        try:
            location = save_upload(file_obj, file_name)
        except (OSError, ClientError) as e:
            raise PersistenceError(f"Could not store upload {file_name!r}: {e}") from e

        try:
            stream = open_stored(location)
        except (OSError, ClientError) as e:
            delete_stored(location)
            raise ParseError(f"Could not open {file_name!r}: {e}") from e

        with stream:
            result = LASParserService.parse(
                stream, max_header_lines=current_app.config.get("MAX_HEADER_LINES", 5000)
            )
            try:
                file_meta = FileDAO.create(file_name=file_name, storage_path=location)
            except PersistenceError:
                delete_stored(location)
                raise
            log(f"Created file id={file_meta.id}, parsing", step="parse", file_id=file_meta.id)

            def progress_cb(inserted: int):
                if emit:
                    emit("ingest_log", {
                        "file_id": file_meta.id,
                        "message": f"Inserted {inserted:,} samples",
                        "step": "insert",
                        "inserted": inserted,
                    })

            try:
                count = SampleDAO.bulk_insert(file_meta.id, result.samples, progress_callback=progress_cb)
            except ParseError:
                log("Read failed, removing partial file", step="error", file_id=file_meta.id)
                FileDAO.delete_permanent(file_meta.id)
                raise

        log(
            f"Done: {count:,} samples, curves {result.curves}, depth range {result.depth_range}",
            step="done",
            file_id=file_meta.id,
        )
        return {
            "file_id": file_meta.id,
            "file_name": file_name,
            "curves": result.curves,
            "depth_range": _range_dict(result.depth_range),
            "sample_count": count,
        }

    @staticmethod
    def list_files():
        """[{id, name, upload_date}] most recent first."""
        return [
            {k: v for k, v in f.to_dict().items() if k != "storage_path"}
            for f in FileDAO.get_recent()
        ]

    @staticmethod
    def get_curves(file_id: int) -> list:
        return SampleDAO.get_curve_names(file_id)

    @staticmethod
    def get_depth_range(file_id: int) -> dict:
        return _range_dict(SampleDAO.get_depth_range(file_id))

    @staticmethod
    def delete(file_id: int) -> bool:
        return FileDAO.delete_permanent(file_id)
