"""Tests for the pipe pretty printer."""

from pipestep.stepping.pretty import pretty_pipe


def test_pretty_pipe_breaks_after_each_marker():
    """Test line break and indentation after every marker."""
    assert pretty_pipe("a %>% b %>% c", marker="%>%") == "a %>%\n  b %>%\n  c"


def test_pretty_pipe_default_marker():
    """Test the default `>>` marker used in step headers."""
    assert pretty_pipe("_ >> add_one()") == "_ >>\n  add_one()"


def test_pretty_pipe_collapses_leading_break():
    """Test that a marker at the very start does not push the first stage down."""
    assert pretty_pipe(">> b >> c") == ">> b >>\n  c"


def test_pretty_pipe_without_marker():
    """Test that text without markers is returned unchanged."""
    assert pretty_pipe("df.head(3)") == "df.head(3)"


def test_pretty_pipe_custom_indent():
    """Test a custom indentation string."""
    assert pretty_pipe("x >> f >> g", indent="    ") == "x >>\n    f >>\n    g"
