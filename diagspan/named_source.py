"""Source code with a name attached, such as a file name."""

from __future__ import annotations

import dataclasses
from typing import Any

from diagspan.protocol import SourceCode, SpanContents
from diagspan.source import read_span as _read_span


class NamedSource(SourceCode):
    """Wraps source code and gives the contents read from it a name.

    The wrapped source may be a :class:`SourceCode`, a string or bytes.
    """

    def __init__(self, name: str, source: Any) -> None:
        if not isinstance(source, (SourceCode, str, bytes, bytearray, memoryview)):
            raise TypeError(f"cannot use {type(source).__name__} as source code")
        self.name = str(name)
        self._source = source

    def __repr__(self) -> str:
        return f"NamedSource(name={self.name!r}, source=<redacted>)"

    def inner(self) -> Any:
        """The wrapped source code."""
        return self._source

    def read_span(
        self,
        span: Any,
        context_lines_before: int,
        context_lines_after: int,
    ) -> SpanContents:
        """Read from the wrapped source and label the result with this name."""
        contents = _read_span(
            self._source, span, context_lines_before, context_lines_after
        )
        return dataclasses.replace(contents, name=self.name)