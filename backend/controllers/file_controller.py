"""
File upload and lookup controller.
"""
import os
from flask import current_app, request, send_file
from extensions import socketio
from services.file_service import FileService
from dao.file_dao import FileDAO
from utils.response_wrapper import success_response, error_response
from utils.storage_utils import get_presigned_url, is_s3_url

ALLOWED_EXTENSIONS = (".las", ".las2", ".txt")


def _emit_process(event: str, data: dict) -> None:
    """Emit ingestion event to all connected clients (for live logs)."""
    socketio.emit(event, data)


class FileController:
    """Handles file upload requests."""

    @staticmethod
    def upload():
        """POST /api/files/upload - ingest LAS file(s): store, parse, persist samples."""
        files_list = [f for f in request.files.getlist("file") if f and f.filename]
        if not files_list:
            return error_response("No file part in request", 400)
        files_list = [f for f in files_list if f.filename.lower().endswith(ALLOWED_EXTENSIONS)]
        if not files_list:
            return error_response("No valid LAS files to upload", 400)
        results = [FileService.ingest(f, f.filename, emit=_emit_process) for f in files_list]
        if len(results) == 1:
            return success_response(results[0], "Upload successful", 201)
        return success_response(
            {"uploads": results, "count": len(results)},
            "Upload successful",
            201,
        )

    @staticmethod
    def list_recent():
        """GET /api/files - list ingested files, newest first."""
        return success_response(FileService.list_files())

    @staticmethod
    def get_curves(file_id: int):
        """GET /api/files/<id>/curves - distinct curve names (empty for unknown files)."""
        return success_response({"curve_names": FileService.get_curves(file_id)})

    @staticmethod
    def get_depth_range(file_id: int):
        """GET /api/files/<id>/depth-range - {min, max}, both null when there is no data."""
        return success_response(FileService.get_depth_range(file_id))

    @staticmethod
    def download(file_id: int):
        """GET /api/files/<id>/download - presigned URL for S3, the file itself for local storage."""
        file_meta = FileDAO.get_by_id(file_id)
        if not file_meta:
            return error_response("File not found", 404)
        if is_s3_url(file_meta.storage_path):
            return success_response({"download_url": get_presigned_url(file_meta.storage_path, expiration=3600)})
        if not os.path.isfile(file_meta.storage_path):
            current_app.logger.warning("Stored copy missing for file_id=%s", file_id)
            return error_response("Stored file is missing", 404)
        return send_file(file_meta.storage_path, as_attachment=True, download_name=file_meta.file_name)

    @staticmethod
    def delete_permanent(file_id: int):
        """DELETE /api/files/<id> - permanently remove file and its samples."""
        if FileService.delete(file_id):
            return success_response(None, "File deleted permanently", 200)
        return error_response("File not found", 404)
