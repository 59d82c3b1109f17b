"""
API route definitions using Flask Blueprint.
"""
from flask import Blueprint
from controllers.file_controller import FileController
from controllers.visualization_controller import VisualizationController
from controllers.ai_controller import AIController
from utils.response_wrapper import success_response

api = Blueprint("api", __name__, url_prefix="/api")


@api.route("/health", methods=["GET"])
def health():
    return success_response({"status": "OK"})


@api.route("/files/upload", methods=["POST"])
def upload_file():
    return FileController.upload()


@api.route("/files", methods=["GET"])
def list_files():
    return FileController.list_recent()


@api.route("/files/<int:file_id>/curves", methods=["GET"])
def get_file_curves(file_id):
    return FileController.get_curves(file_id)


@api.route("/files/<int:file_id>/depth-range", methods=["GET"])
def get_file_depth_range(file_id):
    return FileController.get_depth_range(file_id)


@api.route("/files/<int:file_id>/download", methods=["GET"])
def download_file(file_id):
    return FileController.download(file_id)


@api.route("/files/<int:file_id>", methods=["DELETE"])
def delete_file_permanent(file_id):
    return FileController.delete_permanent(file_id)


@api.route("/visualization", methods=["POST"])
def visualization():
    return VisualizationController.get_curve_data()


@api.route("/ai/interpret", methods=["POST"])
def ai_interpret():
    return AIController.interpret()


@api.route("/ai/chat", methods=["POST"])
def ai_chat():
    return AIController.chat()
