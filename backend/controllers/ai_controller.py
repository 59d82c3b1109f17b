"""
AI interpretation controller.
"""
from flask import request
from services.ai_service import AIService
from services.chat_service import ChatService
from utils.response_wrapper import success_response, error_response
from utils.request_utils import parse_window_request


class AIController:
    """Handles interpretation and assistant requests."""

    @staticmethod
    def interpret():
        """POST /api/ai/interpret - deterministic statistics and peak recommendations."""
        parsed, error = parse_window_request(request.get_json(silent=True) or {})
        if error:
            return error_response(error, 400)
        # EmptyInputError -> 404 "No data found" via the global handler
        return success_response(AIService.interpret(*parsed))

    @staticmethod
    def chat():
        """POST /api/ai/chat - ask the well log assistant about a file."""
        data = request.get_json(silent=True) or {}
        message = (data.get("message") or "").strip()
        if not message:
            return error_response("message is required", 400)
        file_id = data.get("file_id")
        try:
            file_id = int(file_id) if file_id is not None else None
        except (ValueError, TypeError):
            return error_response("file_id must be an integer", 400)
        return success_response({"reply": ChatService.reply(message, file_id)})
