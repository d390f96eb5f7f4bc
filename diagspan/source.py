"""Reading spans, with surrounding context lines, out of in-memory source code."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any

from diagspan.protocol import OutOfBoundsError, SourceCode, SourceSpan, SpanContents

_CR = 0x0D
_LF = 0x0A


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"cannot read source code from {type(data).__name__}")


def context_info(
    data: bytes | str,
    span: Any,
    context_lines_before: int,
    context_lines_after: int,
) -> SpanContents:
    """Read ``span`` from ``data`` along with the requested context lines.

    ``data`` is raw bytes (text is encoded as UTF-8). Lines end at ``\\n``,
    ``\\r`` or ``\\r\\n``. Raises :class:`OutOfBoundsError` if the span lies
    beyond the end of the data.
    """
    data = _as_bytes(data)
    span = SourceSpan.coerce(span)
    span_last = span.offset + max(span.length - 1, 0)
    span_end_inclusive = max(span.offset + span.length - 1, 0)

    offset = 0
    line_count = 0
    start_line = 0
    start_column = 0
    before_lines_starts: deque[int] = deque()
    current_line_start = 0
    end_lines = 0
    post_span = False
    post_span_got_newline = False

    position = 0
    size = len(data)
    while position < size:
        char = data[position]
        position += 1
        if char in (_CR, _LF):
            line_count += 1
            if char == _CR and position < size and data[position] == _LF:
                position += 1
                offset += 1
            if offset < span.offset:
                # Still before the span: remember where this line started.
                start_column = 0
                before_lines_starts.append(current_line_start)
                if len(before_lines_starts) > context_lines_before:
                    start_line += 1
                    before_lines_starts.popleft()
            elif offset >= span_last and post_span:
                # Past the span; count trailing context lines.
                start_column = 0
                if post_span_got_newline:
                    end_lines += 1
                else:
                    post_span_got_newline = True
                if end_lines >= context_lines_after:
                    offset += 1
                    break
            current_line_start = offset + 1
        elif offset < span.offset:
            start_column += 1

        if offset >= span_end_inclusive:
            post_span = True
            if end_lines >= context_lines_after:
                offset += 1
                break

        offset += 1

    if offset < span_end_inclusive:
        raise OutOfBoundsError()

    if before_lines_starts:
        starting_offset = before_lines_starts[0]
    elif context_lines_before == 0:
        starting_offset = span.offset
    else:
        starting_offset = 0
    if starting_offset > offset:
        raise OutOfBoundsError()

    return SpanContents(
        data=data[starting_offset:offset],
        span=SourceSpan(starting_offset, offset - starting_offset),
        line=start_line,
        column=start_column if context_lines_before == 0 else 0,
        line_count=line_count,
    )


def read_span(
    source: Any,
    span: Any,
    context_lines_before: int,
    context_lines_after: int,
) -> SpanContents:
    """Read a span from a :class:`SourceCode`, a string or a bytes-like object."""
    if isinstance(source, SourceCode):
        return source.read_span(
            SourceSpan.coerce(span), context_lines_before, context_lines_after
        )
    return context_info(
        _as_bytes(source), span, context_lines_before, context_lines_after
    )


@dataclass(frozen=True)
class TextSource(SourceCode):
    """Source code held in memory as text or bytes."""

    text: str | bytes

    def read_span(
        self,
        span: Any,
        context_lines_before: int,
        context_lines_after: int,
    ) -> SpanContents:
        """Read a span with context lines from the held text."""
        return context_info(
            self.text, span, context_lines_before, context_lines_after
        )