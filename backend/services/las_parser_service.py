"""
LAS file parsing service.

Streams a LAS document line by line and emits (depth, curve, value) samples.
The parser keeps only the curve catalog and the depth range in memory; the
samples come out of a generator so callers can write them to the database in
batches while the file is still being read.
"""
import codecs
import io
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from models import SampleRecord
from utils.exceptions import ParseError

logger = logging.getLogger(__name__)

HEADER = "HEADER"
DATA = "DATA"

DEFAULT_MAX_HEADER_LINES = 5000
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def _to_float(token: str):
    """Parse a finite float; None for anything else (text, nan, inf)."""
    try:
        v = float(token)
    except ValueError:
        return None
    return v if math.isfinite(v) else None


def _is_curve_marker(line: str) -> bool:
    return line[:2].upper() == "~C"


def _is_data_marker(line: str) -> bool:
    # ~A covers ~ASCII
    upper = line.upper()
    return upper.startswith("~A") or upper.startswith("~DATA")


class CurveCatalog:
    """
    Ordered, de-duplicated curve names taken from header lines.

    Only lines inside ~C sections are candidates: lines under ~V, ~W, ~P or ~O
    and purely numeric names are rejected on purpose, so header mnemonics such
    as VERS or WRAP never shift the positional mapping of data columns. A
    header without any section marker offers every dotted line.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_HEADER_LINES):
        self.max_lines = max_lines
        self.names: list[str] = []
        self.lines_seen = 0
        self._in_other_section = False

    @staticmethod
    def normalize(token: str) -> str:
        """'GR.API' -> 'GR', 'NPHI' -> 'NPHI', '.ft' -> ''."""
        return _NON_ALNUM.sub("", token.split(".", 1)[0])

    @property
    def exhausted(self) -> bool:
        return self.lines_seen >= self.max_lines

    def enter_section(self, marker_line: str) -> None:
        """Called for every '~' line seen while in the header."""
        self._in_other_section = not _is_curve_marker(marker_line)

    def add_line(self, line: str) -> str | None:
        """Offer one header line. Returns the newly added curve name, if any."""
        if self.exhausted:
            return None
        self.lines_seen += 1
        line = line.strip()
        if not line or line.startswith("#") or line.startswith("~"):
            return None
        if self._in_other_section or "." not in line:
            return None
        name = self.normalize(line.split()[0])
        if not name or name.isdigit() or "DEPT" in name.upper() or name in self.names:
            return None
        self.names.append(name)
        return name

    @classmethod
    def discover(cls, header_lines: Iterable[str], max_lines: int = DEFAULT_MAX_HEADER_LINES) -> list[str]:
        """Curve names from the lines before the data marker, in first-seen order."""
        catalog = cls(max_lines=max_lines)
        for raw in header_lines:
            line = raw.strip()
            if _is_data_marker(line):
                break
            if line.startswith("~"):
                catalog.enter_section(line)
                continue
            catalog.add_line(line)
            if catalog.exhausted:
                break
        return list(catalog.names)


class LASStreamParser:
    """
    Two-state (HEADER / DATA) line parser.

    | line                        | HEADER            | DATA              |
    |-----------------------------|-------------------|-------------------|
    | ~C...                       | HEADER            | HEADER            |
    | ~A... / ~DATA...            | DATA              | DATA              |
    | other ~ marker              | stop curve lines  | ignored           |
    | blank / # comment           | ignored           | ignored           |
    | anything else               | catalog candidate | sample row        |
    """

    def __init__(self, max_header_lines: int = DEFAULT_MAX_HEADER_LINES):
        self.state = HEADER
        self.catalog = CurveCatalog(max_lines=max_header_lines)
        self.depth_min: float | None = None
        self.depth_max: float | None = None
        self.line_count = 0
        self.sample_count = 0

    @property
    def curves(self) -> list[str]:
        return list(self.catalog.names)

    @property
    def depth_range(self) -> tuple[float, float] | None:
        if self.depth_min is None:
            return None
        return (self.depth_min, self.depth_max)

    def feed(self, raw_line: str) -> list[SampleRecord]:
        """Consume one line; return the samples it yields (possibly none)."""
        self.line_count += 1
        line = raw_line.strip()
        if not line or line.startswith("#"):
            return []
        if line.startswith("~"):
            if _is_curve_marker(line):
                self.state = HEADER
                self.catalog.enter_section(line)
            elif _is_data_marker(line):
                self.state = DATA
            elif self.state == HEADER:
                self.catalog.enter_section(line)
            return []
        if self.state == HEADER:
            self.catalog.add_line(line)
            return []
        return self._data_line(line)

    def _data_line(self, line: str) -> list[SampleRecord]:
        tokens = line.split()
        if len(tokens) < 2:
            return []
        depth = _to_float(tokens[0])
        if depth is None:
            return []
        if self.depth_min is None or depth < self.depth_min:
            self.depth_min = depth
        if self.depth_max is None or depth > self.depth_max:
            self.depth_max = depth

        names = self.catalog.names
        out = []
        for name, token in zip(names, tokens[1:]):
            value = _to_float(token)
            if value is not None:
                out.append(SampleRecord(depth, name, value))
        self.sample_count += len(out)
        return out

    def iter_samples(self, lines: Iterable[str]) -> Iterator[SampleRecord]:
        for line in lines:
            yield from self.feed(line)
        logger.info(
            "Parse complete: %d lines, %d curves, %d samples, depth range %s",
            self.line_count, len(self.catalog.names), self.sample_count, self.depth_range,
        )


@dataclass
class ParseResult:
    """
    Outcome of LASParserService.parse.
    curves, depth_range and counts are final only once samples is exhausted.
    """
    parser: LASStreamParser
    samples: Iterator[SampleRecord] = field(repr=False)

    @property
    def curves(self) -> list[str]:
        return self.parser.curves

    @property
    def depth_range(self) -> tuple[float, float] | None:
        return self.parser.depth_range

    @property
    def sample_count(self) -> int:
        return self.parser.sample_count

    @property
    def line_count(self) -> int:
        return self.parser.line_count


def _is_binary_file(stream) -> bool:
    return hasattr(stream, "readable") and not isinstance(stream, io.TextIOBase)


def _binary_file_lines(stream, encoding: str) -> Iterator[str]:
    """Universal-newline lines of a binary file object; the stream is left open."""
    text = io.TextIOWrapper(stream, encoding=encoding, errors="replace", newline=None)
    try:
        yield from text
    finally:
        if not stream.closed:
            text.detach()


def _chunk_lines(chunks, encoding: str) -> Iterator[str]:
    """Lines of an iterable of str or bytes chunks, each holding whole lines."""
    decoder = None
    for chunk in chunks:
        if isinstance(chunk, bytes):
            if decoder is None:
                decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
            chunk = decoder.decode(chunk)
        yield from chunk.splitlines()
    if decoder is not None:
        yield from decoder.decode(b"", final=True).splitlines()


def iter_text_lines(stream, encoding: str = "utf-8-sig") -> Iterator[str]:
    """
    Lines of a binary or text stream as str. Bytes are decoded incrementally
    (invalid sequences replaced) and \\r, \\n and \\r\\n all end a line. A leading
    byte order mark is dropped. Read failures surface as ParseError.
    """
    if _is_binary_file(stream):
        lines = _binary_file_lines(stream, encoding)
    else:
        lines = _chunk_lines(stream, encoding)
    try:
        first = True
        for line in lines:
            if first:
                line = line.lstrip("\ufeff")
                first = False
            yield line
    except (OSError, ValueError) as e:
        raise ParseError(f"Could not read LAS stream: {e}") from e


class LASParserService:
    """Parse LAS streams into curve names and samples."""

    @staticmethod
    def parse(stream, max_header_lines: int = DEFAULT_MAX_HEADER_LINES) -> ParseResult:
        """
        Parse a binary or text stream (file object, or any iterable of lines).
        Raises ParseError if the stream is closed or not iterable.
        """
        if stream is None or getattr(stream, "closed", False):
            raise ParseError("LAS stream is not readable")
        try:
            iter(stream)
        except TypeError as e:
            raise ParseError("LAS stream is not readable") from e
        parser = LASStreamParser(max_header_lines=max_header_lines)
        return ParseResult(parser=parser, samples=parser.iter_samples(iter_text_lines(stream)))

    @staticmethod
    def parse_text(content: str, max_header_lines: int = DEFAULT_MAX_HEADER_LINES) -> ParseResult:
        """Parse in-memory LAS text. Mostly for small documents and tests."""
        return LASParserService.parse(content.splitlines(), max_header_lines=max_header_lines)
