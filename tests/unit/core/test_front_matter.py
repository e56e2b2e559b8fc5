"""Unit tests for core/front_matter.py"""

from datetime import datetime

import pytest

from mdpost.core.front_matter import load, parse, split, stringify
from mdpost.errors import FrontMatterError


# --- split ---

def test_split_prefixed_yaml():
    """A leading --- block is split into data and content."""
    s = split("---\ntitle: Hello\n---\n# Body\n")
    assert s.data == "title: Hello"
    assert s.content == "# Body\n"
    assert s.separator == "---"
    assert s.prefix_separator is True
    assert s.json_mode is False


def test_split_prefixed_json():
    """A ;;; separator marks JSON mode."""
    s = split(';;;\n"title": "Hello"\n;;;\nBody')
    assert s.data == '"title": "Hello"'
    assert s.content == "Body"
    assert s.json_mode is True


def test_split_trailing_separator_only():
    """Front matter closed by a separator but not opened by one is still split."""
    s = split("title: Hello\n---\nBody")
    assert s.data == "title: Hello"
    assert s.content == "Body"
    assert s.prefix_separator is False


def test_split_scaffold_without_body():
    """A scaffold ending at its closing separator has empty content."""
    s = split("---\ntitle: {{ title }}\ntags:\n---\n")
    assert s.data == "title: {{ title }}\ntags:"
    assert s.content == ""


def test_split_no_front_matter():
    """Text with no separator has no data."""
    s = split("# Just a body\n")
    assert s.data is None
    assert s.content == "# Just a body\n"


# --- load / parse ---

def test_load_json_members():
    """JSON mode wraps the members in braces before decoding."""
    assert load('"a": 1, "b": [1, 2]', json_mode=True) == {"a": 1, "b": [1, 2]}


def test_load_invalid_yaml():
    """Malformed YAML raises FrontMatterError."""
    with pytest.raises(FrontMatterError, match="Invalid YAML frontmatter"):
        load("key: [unclosed", json_mode=False)


def test_load_non_mapping():
    """YAML that is not a mapping is rejected."""
    with pytest.raises(FrontMatterError, match="expected a mapping"):
        load("- a\n- b", json_mode=False)


def test_parse_with_yaml():
    """parse returns the decoded header and the body."""
    fm, body = parse("---\ntitle: Hello\ntags:\n  - a\n---\nBody text\n")
    assert fm == {"title": "Hello", "tags": ["a"]}
    assert body == "Body text\n"


def test_parse_without_header():
    """parse returns an empty mapping and the full text when there is no header."""
    assert parse("# Title\n\nBody\n") == ({}, "# Title\n\nBody\n")


def test_parse_paragraph_above_rule_is_body():
    """A paragraph followed by a horizontal rule is not mistaken for front matter."""
    text = "Just a sentence.\n---\nMore text\n"
    assert parse(text) == ({}, text)


def test_parse_prefixed_invalid_raises():
    """A header opened by a separator must be valid."""
    with pytest.raises(FrontMatterError):
        parse("---\nkey: [unclosed\n---\nBody")


# --- stringify ---

def test_stringify_yaml_null_and_datetime():
    """None values become bare keys and datetimes plain timestamps."""
    out = stringify({"title": "Hi", "tags": None, "date": datetime(2024, 1, 2, 3, 4, 5)})
    assert out == "title: Hi\ntags:\ndate: 2024-01-02 03:04:05\n---\n"


def test_stringify_yaml_reparses():
    """Stringified YAML front matter parses back to the same values."""
    data = {"title": "Hello: World", "tags": ["a", "b"]}
    fm, body = parse(stringify(data, prefix_separator=True, content="Body"))
    assert fm == data
    assert body == "Body"


def test_stringify_json():
    """JSON mode writes the members without the outer braces and closes with ;;;."""
    out = stringify({"title": "Hi", "n": 1}, json_mode=True)
    assert out.endswith(";;;\n")
    assert load(out[: -len(";;;\n")], json_mode=True) == {"title": "Hi", "n": 1}


def test_stringify_empty():
    """An empty mapping yields just the closing separator."""
    assert stringify({}) == "---\n"
