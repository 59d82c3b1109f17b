"""
Visualization controller.
"""
from flask import request
from services.visualization_service import VisualizationService
from utils.response_wrapper import success_response, error_response
from utils.request_utils import parse_window_request


class VisualizationController:
    """Handles chart data requests."""

    @staticmethod
    def get_curve_data():
        """POST /api/visualization - {curve: [{depth, value}]} for the requested window."""
        parsed, error = parse_window_request(request.get_json(silent=True) or {})
        if error:
            return error_response(error, 400)
        return success_response(VisualizationService.get_curve_data(*parsed))
