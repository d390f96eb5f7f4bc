import pytest

from diagspan.named_source import NamedSource
from diagspan.protocol import OutOfBoundsError, SourceSpan
from diagspan.source import TextSource, read_span

TEXT = "source\n  text\n    here"


def test_name_is_attached():
    named = NamedSource("bad_file.rs", TEXT)
    contents = named.read_span(SourceSpan(9, 4), 1, 1)
    assert contents.name == "bad_file.rs"


def test_contents_match_inner_source():
    named = NamedSource("bad_file.rs", TEXT)
    plain = read_span(TEXT, (9, 4), 1, 1)
    named_contents = named.read_span((9, 4), 1, 1)
    assert named_contents.data == plain.data
    assert named_contents.span == plain.span
    assert named_contents.line == plain.line
    assert named_contents.column == plain.column
    assert named_contents.line_count == plain.line_count


def test_inner_returns_wrapped_source():
    inner = TextSource(TEXT)
    assert NamedSource("bad_file.rs", inner).inner() is inner


def test_name_overrides_nested_name():
    nested = NamedSource("bad_file.rs", NamedSource("other.rs", TEXT))
    assert nested.read_span((0, 6), 0, 0).name == "bad_file.rs"


def test_repr_hides_source():
    text = repr(NamedSource("bad_file.rs", TEXT))
    assert "bad_file.rs" in text
    assert "here" not in text


def test_out_of_bounds_propagates():
    with pytest.raises(OutOfBoundsError):
        NamedSource("bad_file.rs", "foo").read_span((10, 2), 0, 0)


def test_rejects_unsupported_source():
    with pytest.raises(TypeError):
        NamedSource("bad_file.rs", 42)