"""
Descriptive statistics for curve values in a depth window.
"""
import statistics
from dataclasses import dataclass
from typing import Sequence

from utils.exceptions import EmptyInputError

PEAK_SIGMAS = 2


@dataclass(frozen=True)
class CurveStatistics:
    """Full-precision summary of one curve; rounding happens only in to_dict()."""
    curve_name: str
    average: float
    minimum: float
    maximum: float
    std_deviation: float
    count: int

    @property
    def peak_threshold(self) -> float:
        return self.average + PEAK_SIGMAS * self.std_deviation

    def to_dict(self):
        """Two-decimal strings, the shape the charting client expects."""
        return {
            "average": f"{self.average:.2f}",
            "minimum": f"{self.minimum:.2f}",
            "maximum": f"{self.maximum:.2f}",
            "std_deviation": f"{self.std_deviation:.2f}",
            "count": self.count,
        }

    def summary(self) -> str:
        return f"{self.curve_name}: {self.count} points, range {self.minimum:.2f} to {self.maximum:.2f}"


def format_depth(depth: float) -> str:
    """1500.0 -> '1500', 1500.25 -> '1500.25'."""
    return f"{depth:f}".rstrip("0").rstrip(".")


class StatisticsService:
    """Per-curve statistics and peak recommendations."""

    @staticmethod
    def summarize(curve_name: str, values: Sequence[float]) -> CurveStatistics:
        """
        Average, min, max, population standard deviation and count.
        Raises EmptyInputError when values is empty.
        """
        if not values:
            raise EmptyInputError(f"No samples for curve {curve_name} in the requested range")
        return CurveStatistics(
            curve_name=curve_name,
            average=statistics.fmean(values),
            minimum=min(values),
            maximum=max(values),
            std_deviation=statistics.pstdev(values),
            count=len(values),
        )

    @staticmethod
    def peak_recommendation(stats: CurveStatistics, points: Sequence[tuple[float, float]]) -> str | None:
        """
        Recommendation text when the maximum is strictly above average + 2 sigma.
        points are the (depth, value) pairs the statistics were computed from; the
        depth reported is that of the first point holding the maximum.
        """
        if not stats.maximum > stats.peak_threshold:
            return None
        depth = next(d for d, v in points if v == stats.maximum)
        return f"High peak in {stats.curve_name} at {format_depth(depth)}ft: {stats.maximum:.2f}"
