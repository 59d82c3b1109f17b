"""
Well log assistant - keyword rules over a file's curves and statistics.

Each rule is a (predicate, responder) pair evaluated in order; the first
predicate that accepts the message answers it.
"""
import re
from dataclasses import dataclass, field
from typing import Callable

from dao.sample_dao import SampleDAO
from services.statistics_service import CurveStatistics, StatisticsService, format_depth
from services.visualization_service import VisualizationService

NO_FILE_REPLY = "Please select a file first from the dropdown menu."

# (curve-name substrings, [(predicate over mean, hint)]) - first matching hint wins
CURVE_HINTS = [
    (("GR",), [
        (lambda m: m > 100, "High gamma ray suggests shale-dominated interval."),
        (lambda m: m < 50, "Low gamma ray suggests clean sand or limestone."),
        (lambda m: True, "Moderate gamma ray indicates mixed lithology."),
    ]),
    (("RHOB", "DEN"), [
        (lambda m: m < 2.0, "Low density may indicate gas or high porosity."),
        (lambda m: m > 2.6, "High density suggests dense minerals or tight formation."),
        (lambda m: True, "Density within typical reservoir range."),
    ]),
    (("NPHI", "PHIT"), [
        (lambda m: m > 0.25, "High porosity reading."),
        (lambda m: True, "Porosity in typical range."),
    ]),
    (("RES", "ILD", "LLD", "RT"), [
        (lambda m: m > 20, "High resistivity may indicate hydrocarbons or tight rock."),
        (lambda m: True, "Low to moderate resistivity, consistent with water-bearing or shaly rock."),
    ]),
]


def curve_hint(stats: CurveStatistics) -> str | None:
    name = stats.curve_name.upper()
    for keys, hints in CURVE_HINTS:
        if any(k in name for k in keys):
            return next(text for pred, text in hints if pred(stats.average))
    return None


@dataclass
class ChatContext:
    """The message plus lazily loaded facts about the selected file."""
    file_id: int
    message: str
    tokens: set = field(init=False)
    _curves: list | None = field(default=None, init=False, repr=False)
    _depth_range: tuple | None = field(default=None, init=False, repr=False)
    _stats: dict = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self.message = self.message.strip().upper()
        self.tokens = set(re.findall(r"[A-Z0-9]+", self.message))

    @property
    def curves(self) -> list:
        if self._curves is None:
            self._curves = SampleDAO.get_curve_names(self.file_id)
        return self._curves

    @property
    def depth_range(self):
        if self._depth_range is None:
            self._depth_range = SampleDAO.get_depth_range(self.file_id)
        return self._depth_range

    def mentioned_curves(self) -> list:
        return [c for c in self.curves if c.upper() in self.tokens]

    def stats(self, curve_names) -> list:
        """[(CurveStatistics, points)] over the whole file for the given curves."""
        missing = [c for c in curve_names if c not in self._stats]
        if missing and self.depth_range:
            records = SampleDAO.query_samples(self.file_id, missing, *self.depth_range)
            for name, points in VisualizationService.assemble(records).items():
                values = [v for _, v in points]
                self._stats[name] = (StatisticsService.summarize(name, values), points)
        return [self._stats[c] for c in curve_names if c in self._stats]

    def peaks(self, curve_names) -> list:
        out = []
        for stats, points in self.stats(curve_names):
            rec = StatisticsService.peak_recommendation(stats, points)
            if rec:
                out.append(rec)
        return out


@dataclass(frozen=True)
class ChatRule:
    name: str
    matches: Callable[[ChatContext], bool]
    respond: Callable[[ChatContext], str]


def _has_any(*words):
    return lambda ctx: any(w in ctx.message for w in words)


def _hydrocarbon_reply(ctx):
    hc = [c for c in ctx.curves if c.upper().startswith("HC")]
    if not hc:
        return "This file has no hydrocarbon (HC) curves."
    peaks = ctx.peaks(hc)
    if not peaks:
        return f"Hydrocarbon curves {', '.join(hc)} show no peaks above 2 standard deviations."
    return "Possible hydrocarbon zones: " + "; ".join(peaks)


def _anomaly_reply(ctx):
    peaks = ctx.peaks(ctx.curves)
    if not peaks:
        return "No values above 2 standard deviations were found in any curve."
    return "Anomalies found: " + "; ".join(peaks)


def _curve_detail_reply(ctx):
    parts = []
    for stats, _ in ctx.stats(ctx.mentioned_curves()):
        text = (
            f"{stats.summary()}, average {stats.average:.2f}, "
            f"standard deviation {stats.std_deviation:.2f}."
        )
        hint = curve_hint(stats)
        parts.append(f"{text} {hint}" if hint else text)
    return " ".join(parts) or "That curve has no data in this file."


def _curve_list_reply(ctx):
    if not ctx.curves:
        return "No curves were found for this file."
    return f"Available curves ({len(ctx.curves)}): {', '.join(ctx.curves)}"


def _depth_reply(ctx):
    if not ctx.depth_range:
        return "This file has no depth data."
    lo, hi = ctx.depth_range
    return f"Depth range: {format_depth(lo)} to {format_depth(hi)} ft."


CHAT_RULES = [
    ChatRule("hydrocarbons", _has_any("HYDROCARBON", "HC ZONE", "GAS ZONE", "PAY ZONE"), _hydrocarbon_reply),
    ChatRule("anomalies", _has_any("ANOMAL", "PEAK", "SPIKE", "OUTLIER"), _anomaly_reply),
    ChatRule("curve_detail", lambda ctx: bool(ctx.mentioned_curves()), _curve_detail_reply),
    ChatRule("curve_list", _has_any("CURVE", "LOGS", "CHANNEL"), _curve_list_reply),
    ChatRule("depth", _has_any("DEPTH", "RANGE", "INTERVAL"), _depth_reply),
]

FALLBACK_REPLY = (
    "I can list curves, report the depth range, describe a curve (e.g. 'Tell me about GR'), "
    "find hydrocarbon zones or show anomalies."
)


class ChatService:
    """Answers free-text questions about one ingested file."""

    @staticmethod
    def reply(message: str, file_id: int | None) -> str:
        if not file_id:
            return NO_FILE_REPLY
        ctx = ChatContext(file_id=file_id, message=message)
        for rule in CHAT_RULES:
            if rule.matches(ctx):
                return rule.respond(ctx)
        return FALLBACK_REPLY
