"""
Visualization data preparation service.
"""
from typing import Iterable

from dao.sample_dao import SampleDAO
from models import SampleRecord


class VisualizationService:
    """Prepares curve data for visualization."""

    @staticmethod
    def assemble(samples: Iterable[SampleRecord]) -> dict[str, list[tuple[float, float]]]:
        """
        Group samples by curve, keeping the order they arrive in.
        No gap filling: a depth missing for a curve simply has no point for it.
        """
        series: dict[str, list[tuple[float, float]]] = {}
        for s in samples:
            series.setdefault(s.curve_name, []).append((s.depth, s.value))
        return series

    @staticmethod
    def get_curve_data(file_id: int, curve_names: list, depth_min: float, depth_max: float):
        """
        Fetch curves in depth range and return format:
        { GR: [{depth, value}, ...], RES: [...] }
        Curves without samples in the window are absent.
        """
        records = SampleDAO.query_samples(file_id, curve_names, depth_min, depth_max)
        return {
            name: [{"depth": d, "value": v} for d, v in points]
            for name, points in VisualizationService.assemble(records).items()
        }
