# diagspan

`diagspan` provides the building blocks for rich, human-friendly error
reports: a `Diagnostic` exception type that carries metadata, byte-offset
spans into source text, labelled highlights, and extraction of the source
snippet around a span, including the lines before and after it.

## Installing

```sh
pip install diagspan
```

## Diagnostics

`diagspan.protocol.Diagnostic` is an `Exception` with eight hooks:
`code()`, `severity()`, `help()`, `url()`, `source_code()`, `labels()`,
`related()` and `diagnostic_source()`. Each returns `None` unless it is
given a value.

Values can be passed as keyword arguments when the diagnostic is created:

```python
from diagspan.protocol import Diagnostic, LabeledSpan, Severity
from diagspan.named_source import NamedSource

err = Diagnostic(
    "oops!",
    code="oops::my::bad",
    severity="warning",  # or Severity.WARNING
    help="try doing it better next time?",
    source_code=NamedSource("bad_file.rs", "source\n  text\n    here"),
    labels=[LabeledSpan.with_span("this bit here", (9, 4))],
)
assert err.severity() is Severity.WARNING
```

`severity` accepts a `Severity` member or one of the strings `"error"`,
`"warning"` and `"advice"` (in any case). `labels()` and `related()` return
iterators over what was given.

Subclasses may instead override the hooks directly:

```python
from diagspan.protocol import Diagnostic


class BadThing(Diagnostic):
    def code(self):
        return "oops::my::bad"

    def help(self):
        return "try doing it better next time?"
```

`as_diagnostic(value)` returns a diagnostic unchanged, turns a string into
a `MessageDiagnostic`, and wraps any other exception in a diagnostic whose
`str()` and `repr()` are those of the exception and whose `__cause__` is
the exception's own cause. Anything else raises `TypeError`.

## Spans

`SourceSpan(offset, length)` is a byte offset plus a length (default 0);
both must be non-negative integers. `span.end` is the offset just past the
span and `span.is_empty()` tells whether the length is zero.

`SourceSpan.coerce` accepts an existing span, an `(offset, length)` tuple
(whose items may also be `SourceOffset`s), a `range` with step 1, an
integer or a `SourceOffset`. `SourceSpan.from_range(start, stop)` builds a
span from bounds.

`SourceOffset.from_location(source, line, column)` turns a 1-based
line/column position into a byte offset; a position past the end gives
the length of the source in bytes. `SourceOffset.from_current_location()`
returns the caller's file name and the offset of the call within that file,
raising `OSError` if the file cannot be read.

`LabeledSpan(label, span)` pairs an optional label with a span; the span
may be anything `SourceSpan.coerce` accepts. It exposes `offset`, `length`
and `is_empty()`.

## Reading snippets

`read_span(source, span, context_lines_before, context_lines_after)` in
`diagspan.source` works on `str`, bytes-like objects and anything that
implements `SourceCode`. It returns a `SpanContents` holding the covered
data as bytes, the span actually read, the 0-based starting line and
column, the number of lines seen, and an optional name:

```python
from diagspan.source import read_span

contents = read_span("xxx\nfoo\nbar\nbaz\n\nyyy\n", (8, 3), 1, 1)
assert contents.data == b"foo\nbar\nbaz\n"
assert contents.line == 1
```

Lines end at `\n`, `\r` or `\r\n`. A span that runs past the end of the
source raises `OutOfBoundsError` (a subclass of `IndexError`).
`context_info` does the same work directly on text or bytes.

`TextSource(text)` wraps text or bytes as a `SourceCode`. `NamedSource(name,
source)` wraps a `SourceCode`, a string or bytes and sets `name` on every
`SpanContents` read through it; `inner()` returns the wrapped source.

To read from some other kind of storage, subclass `SourceCode` and
implement `read_span`.

## What it does not do

`diagspan` gathers and extracts the information a report needs, but it
does not print reports: there is no graphical, narrated or JSON renderer,
no error chain or context-wrapping type, and no command-line tool.