"""Core diagnostic protocol: diagnostics, severities, spans and source code."""

from __future__ import annotations

import enum
import inspect
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


class OutOfBoundsError(IndexError):
    """Raised when a span reaches beyond the end of its source code."""

    def __init__(self, message: str = "The given offset is outside the bounds of its Source") -> None:
        super().__init__(message)


class Severity(enum.Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"
    ADVICE = "advice"

    def __str__(self) -> str:
        return self.value


class Diagnostic(Exception):
    """An exception carrying rich metadata for human-friendly reports.

    Metadata may be given as keyword arguments when the diagnostic is
    created; anything not given is reported as ``None``. Subclasses may
    also override the hooks directly.
    """

    _code: str | None = None
    _severity: Severity | None = None
    _help: str | None = None
    _url: str | None = None
    _source_code: SourceCode | None = None
    _labels: tuple[LabeledSpan, ...] | None = None
    _related: tuple[Diagnostic, ...] | None = None
    _diagnostic_source: Diagnostic | None = None

    def __init__(
        self,
        *args: Any,
        code: Any = None,
        severity: Severity | str | None = None,
        help: Any = None,
        url: Any = None,
        source_code: SourceCode | None = None,
        labels: Iterable[LabeledSpan] | None = None,
        related: Iterable[Diagnostic] | None = None,
        diagnostic_source: Diagnostic | None = None,
    ) -> None:
        super().__init__(*args)
        if code is not None:
            self._code = str(code)
        if severity is not None:
            self._severity = (
                severity if isinstance(severity, Severity) else Severity(str(severity).lower())
            )
        if help is not None:
            self._help = str(help)
        if url is not None:
            self._url = str(url)
        if source_code is not None:
            self._source_code = source_code
        if labels is not None:
            self._labels = tuple(labels)
        if related is not None:
            self._related = tuple(related)
        if diagnostic_source is not None:
            self._diagnostic_source = diagnostic_source

    def code(self) -> str | None:
        """Unique code identifying this kind of diagnostic."""
        return self._code

    def severity(self) -> Severity | None:
        """Severity of the diagnostic; ``None`` means treat it as an error."""
        return self._severity

    def help(self) -> str | None:
        """Advice on how to fix the problem."""
        return self._help

    def url(self) -> str | None:
        """Where to read more about this diagnostic."""
        return self._url

    def source_code(self) -> SourceCode | None:
        """Source code that the labels refer to."""
        return self._source_code

    def labels(self) -> Iterable[LabeledSpan] | None:
        """Labelled spans to highlight in the source code."""
        return None if self._labels is None else iter(self._labels)

    def related(self) -> Iterable[Diagnostic] | None:
        """Further diagnostics reported alongside this one."""
        return None if self._related is None else iter(self._related)

    def diagnostic_source(self) -> Diagnostic | None:
        """The diagnostic that caused this one, if any."""
        return self._diagnostic_source


class MessageDiagnostic(Diagnostic):
    """A plain diagnostic made of nothing but a message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return repr(self.message)


class _WrappedError(Diagnostic):
    """Diagnostic that transparently presents an ordinary exception."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error
        self.__cause__ = error.__cause__

    def __str__(self) -> str:
        return str(self.error)

    def __repr__(self) -> str:
        return repr(self.error)


def as_diagnostic(value: Any) -> Diagnostic:
    """Turn a message or an exception into a :class:`Diagnostic`.

    Diagnostics are returned unchanged, strings become a
    :class:`MessageDiagnostic`, and other exceptions are wrapped so that
    their message and cause show through unchanged.
    """
    if isinstance(value, Diagnostic):
        return value
    if isinstance(value, str):
        return MessageDiagnostic(value)
    if isinstance(value, BaseException):
        return _WrappedError(value)
    raise TypeError(f"cannot make a diagnostic from {type(value).__name__}")


class SourceCode(ABC):
    """Readable source code that spans can be looked up in."""

    @abstractmethod
    def read_span(
        self,
        span: SourceSpan,
        context_lines_before: int,
        context_lines_after: int,
    ) -> SpanContents:
        """Read a span, keeping some lines before and after it as context."""


def _check_offset(value: int, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be an int, not {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{what} must not be negative: {value}")
    return value


@dataclass(frozen=True)
class SourceOffset:
    """A byte offset from the beginning of some source code."""

    offset: int

    def __post_init__(self) -> None:
        _check_offset(self.offset, "offset")

    @classmethod
    def from_location(cls, source: str, loc_line: int, loc_col: int) -> SourceOffset:
        """Convert a 1-based line/column pair into a byte offset.

        Never fails: a location past the end yields the length of the
        source in bytes.
        """
        line = 0
        col = 0
        offset = 0
        for char in source:
            if char == "\n":
                col = 0
                line += 1
            else:
                col += 1
            if line + 1 >= loc_line and col + 1 >= loc_col:
                break
            offset += len(char.encode("utf-8"))
        return cls(offset)

    @classmethod
    def from_current_location(cls) -> tuple[str, SourceOffset]:
        """Return the caller's file name and the offset of the call in it.

        Raises :class:`OSError` if the file cannot be read.
        """
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is None:
            raise RuntimeError("no calling frame available")
        try:
            info = inspect.getframeinfo(caller, context=0)
        finally:
            del frame, caller
        positions = getattr(info, "positions", None)
        col_offset = positions.col_offset if positions is not None else None
        column = (col_offset or 0) + 1
        with open(info.filename, encoding="utf-8") as handle:
            text = handle.read()
        return info.filename, cls.from_location(text, info.lineno, column)


@dataclass(frozen=True)
class SourceSpan:
    """A run of bytes in some source code: a start offset and a length."""

    offset: int
    length: int = 0

    def __post_init__(self) -> None:
        _check_offset(self.offset, "offset")
        _check_offset(self.length, "length")

    @property
    def end(self) -> int:
        """Offset just past the last byte of the span."""
        return self.offset + self.length

    @classmethod
    def from_range(cls, start: int, stop: int) -> SourceSpan:
        """Span covering ``start`` up to but not including ``stop``."""
        return cls(start, max(0, stop - start))

    @classmethod
    def coerce(cls, value: Any) -> SourceSpan:
        """Build a span from a span, ``(offset, length)`` pair, range, or offset."""
        if isinstance(value, SourceSpan):
            return value
        if isinstance(value, SourceOffset):
            return cls(value.offset, 0)
        if isinstance(value, range):
            if value.step != 1:
                raise ValueError("a span range must have a step of 1")
            return cls.from_range(value.start, value.stop)
        if isinstance(value, tuple) and len(value) == 2:
            start, length = value
            if isinstance(start, SourceOffset):
                start = start.offset
            if isinstance(length, SourceOffset):
                length = length.offset
            return cls(start, length)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value, 0)
        raise TypeError(f"cannot make a span from {value!r}")

    def is_empty(self) -> bool:
        """Whether the span has zero length; it may still mark a point."""
        return self.length == 0


@dataclass(frozen=True)
class LabeledSpan:
    """A span with an optional label to show next to it."""

    label: str | None
    span: SourceSpan

    def __post_init__(self) -> None:
        object.__setattr__(self, "span", SourceSpan.coerce(self.span))

    @classmethod
    def with_span(cls, label: str | None, span: Any) -> LabeledSpan:
        """Make a labelled span from anything :meth:`SourceSpan.coerce` accepts."""
        return cls(label, SourceSpan.coerce(span))

    @property
    def offset(self) -> int:
        """The 0-based starting byte offset."""
        return self.span.offset

    @property
    def length(self) -> int:
        """The number of bytes covered."""
        return self.span.length

    def is_empty(self) -> bool:
        """Whether the underlying span has zero length."""
        return self.span.is_empty()


@dataclass(frozen=True)
class SpanContents:
    """Bytes read from source code for a span, with position information."""

    data: bytes
    span: SourceSpan
    line: int
    column: int
    line_count: int
    name: str | None = field(default=None)