"""
AI interpretation service - descriptive statistics and peak recommendations.
"""
import logging

from dao.sample_dao import SampleDAO
from services.statistics_service import StatisticsService
from services.visualization_service import VisualizationService
from utils.exceptions import EmptyInputError

logger = logging.getLogger(__name__)


class AIService:
    """Statistical interpretation of well log curves over a depth window."""

    @staticmethod
    def interpret(file_id: int, curve_names: list, depth_min: float, depth_max: float):
        """
        Returns { depth_range, interpretations: {curve: {statistics, summary}}, recommendations }.
        Raises EmptyInputError when nothing matches (unknown file, curves or window).
        """
        records = SampleDAO.query_samples(file_id, curve_names, depth_min, depth_max)
        if not records:
            raise EmptyInputError("No data found")

        interpretations = {}
        recommendations = []
        for curve_name, points in VisualizationService.assemble(records).items():
            stats = StatisticsService.summarize(curve_name, [v for _, v in points])
            interpretations[curve_name] = {
                "statistics": stats.to_dict(),
                "summary": stats.summary(),
            }
            rec = StatisticsService.peak_recommendation(stats, points)
            if rec:
                recommendations.append(rec)

        logger.info(
            "Interpreted file_id=%s curves=%s [%s, %s]: %d recommendations",
            file_id, list(interpretations), depth_min, depth_max, len(recommendations),
        )
        return {
            "depth_range": {"min": depth_min, "max": depth_max},
            "interpretations": interpretations,
            "recommendations": recommendations,
        }
