"""Tests for step headers, previews and banners."""

from collections import deque

import numpy as np
import pandas as pd

from pipestep.stepping.reporting import (
    COMPLETION_BANNER,
    ERROR_MESSAGE,
    START_BANNER,
    StepReporter,
    make_preview,
    print_header,
    separator_line,
)


def test_separator_line_defaults():
    """Test the default separator: 60 dashes and a newline."""
    assert separator_line() == "-" * 60 + "\n"
    assert separator_line("=", 3) == "===\n"


def test_print_header_boxes_text(capsys):
    """Test separator, text, separator at the requested width."""
    print_header("X", 10)

    out = capsys.readouterr().out
    assert out == "=" * 10 + "\nX\n" + "=" * 10 + "\n"


def test_print_header_does_not_truncate(capsys):
    """Test that text wider than the separators is printed whole."""
    print_header("a much longer header", 4, char="*")

    out = capsys.readouterr().out
    assert out.splitlines() == ["****", "a much longer header", "****"]


def test_make_preview_dataframe():
    """Test that DataFrames are previewed with head(n)."""
    df = pd.DataFrame({"value": range(20)})

    preview = make_preview(df, 3)

    assert len(preview) == 3
    assert len(df) == 20


def test_make_preview_sequences_and_mappings():
    """Test previews of lists, arrays, dicts and scalars."""
    assert make_preview(list(range(10)), 4) == [0, 1, 2, 3]
    assert make_preview((1, 2, 3), 2) == (1, 2)
    assert np.array_equal(make_preview(np.arange(10), 2), np.array([0, 1]))
    assert make_preview({"a": 1, "b": 2, "c": 3}, 2) == {"a": 1, "b": 2}
    assert make_preview("a long string", 2) == "a long string"
    assert make_preview(42, 2) == 42
    assert make_preview(np.array(5), 2) == np.array(5)


def test_make_preview_other_sized_collections():
    """Test that sets, deques and dict views are bounded too."""
    values = set(range(1000))

    preview = make_preview(values, 3)

    assert isinstance(preview, set)
    assert len(preview) == 3
    assert preview <= values
    assert len(values) == 1000

    assert make_preview(deque(range(10)), 2) == deque([0, 1])
    assert len(make_preview(frozenset(range(50)), 4)) == 4
    assert make_preview({"a": 1, "b": 2, "c": 3}.keys(), 2) == ["a", "b"]


def test_make_preview_leaves_iterators_unconsumed():
    """Test that generators are shown as-is, without consuming them."""
    generator = (x for x in range(5))

    assert make_preview(generator, 2) is generator
    assert list(generator) == [0, 1, 2, 3, 4]


def test_reporter_preview_ends_with_blank_line(capsys):
    """Test that a preview is followed by a blank separator line."""
    reporter = StepReporter(width=10, preview_rows=2)

    reporter.preview([1, 2, 3, 4])

    out = capsys.readouterr().out
    assert out == "[1, 2]\n\n"


def test_reporter_preview_without_display_options(capsys):
    """Test previews when no pandas display options are configured."""
    reporter = StepReporter(width=10, preview_rows=1, display_options={})

    reporter.preview(pd.Series([10, 20, 30]))

    out = capsys.readouterr().out
    assert "10" in out
    assert "30" not in out


def test_reporter_error_report(capsys):
    """Test the error report message and details."""
    reporter = StepReporter(width=10)

    reporter.error(ValueError("boom"))

    out = capsys.readouterr().out
    assert ERROR_MESSAGE in out
    assert "ValueError: boom" in out


def test_reporter_banners(capsys):
    """Test the start and completion banners."""
    reporter = StepReporter(width=10)

    reporter.start()
    reporter.finish()

    out = capsys.readouterr().out
    assert out == f"\n{START_BANNER}\n{COMPLETION_BANNER}\n\n"
