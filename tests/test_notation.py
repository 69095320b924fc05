"""Tests for the lens text notation."""

import pytest

from optics.errors import MalformedLens
from optics.lens import EACH, KEYS, VALUES, Key, Lens, Step, index, key, lens
from optics.notation import (
    describe_steps,
    format_lens,
    parse_lens,
    quote_name,
    token_spans,
    tokenize,
    unwrap_literal,
)


# ---------------------------------------------------------------------------
# Literal handling
# ---------------------------------------------------------------------------

def test_quote_plain_name():
    assert quote_name("name") == "name"

def test_quote_name_with_space():
    assert quote_name("first name") == "[first name]"

def test_quote_empty_name():
    assert quote_name("") == "[]"

def test_quote_escapes_bracket():
    assert quote_name("a]b") == r"[a\]b]"

def test_unwrap_literal_brackets():
    assert unwrap_literal("[Joe Smith]") == "Joe Smith"

def test_unwrap_literal_plain():
    assert unwrap_literal("hello") == "hello"

def test_unwrap_literal_escape():
    assert unwrap_literal(r"[a\]b]") == "a]b"

def test_tokenize_keeps_brackets_together():
    assert tokenize("key [a b] each") == ["key", "[a b]", "each"]


# ---------------------------------------------------------------------------
# format_lens
# ---------------------------------------------------------------------------

def test_format_simple():
    assert format_lens(lens(key("z"), index(2), key("f"), EACH)) == "key z index 2 key f each"

def test_format_traversals():
    assert format_lens(lens(VALUES, KEYS)) == "values keys"

def test_format_empty():
    assert format_lens(Lens()) == ""

def test_format_quoted_key():
    assert format_lens(key("first name")) == "key [first name]"


# ---------------------------------------------------------------------------
# parse_lens
# ---------------------------------------------------------------------------

def test_parse_simple():
    assert parse_lens("key x index 2 key z") == lens(key("x"), index(2), key("z"))

def test_parse_traversals():
    assert parse_lens("each keys values") == lens(EACH, KEYS, VALUES)

def test_parse_empty():
    assert parse_lens("   ") == Lens()

def test_parse_bracketed_key():
    assert parse_lens("key [first name] each") == lens(key("first name"), EACH)

def test_parse_keyword_as_key_name():
    assert parse_lens("key each") == key("each")

def test_parse_negative_index():
    assert parse_lens("index -1") == index(-1)

def test_parse_named_reference():
    named = {"pos": lens(key("z"), index(2))}
    assert parse_lens("@pos key f", named) == lens(key("z"), index(2), key("f"))

def test_parse_unknown_reference():
    with pytest.raises(MalformedLens):
        parse_lens("@nope", {})

def test_parse_reference_without_table():
    with pytest.raises(MalformedLens):
        parse_lens("@pos")

def test_parse_unknown_word():
    with pytest.raises(MalformedLens):
        parse_lens("key x frobnicate")

def test_parse_missing_argument():
    with pytest.raises(MalformedLens):
        parse_lens("key x index")

def test_parse_bad_index():
    with pytest.raises(MalformedLens):
        parse_lens("index two")

def test_round_trip_awkward_names():
    p = lens(key("a b"), key(""), key("x]y"), key("back\\slash"), key("[z]"), index(0))
    assert parse_lens(format_lens(p)) == p


# ---------------------------------------------------------------------------
# Helpers used by the engine and the shell
# ---------------------------------------------------------------------------

def test_describe_steps_known():
    assert describe_steps(lens(key("a b"), EACH).steps) == "key [a b] each"

def test_describe_steps_unknown_step():
    class Odd(Step):
        def __repr__(self):
            return "Odd()"

    assert describe_steps((Key("x"), Odd())) == "key x Odd()"

def test_token_spans_offsets():
    text = "key [a = b] = 2"
    spans = token_spans(text)
    assert [t for t, _, _ in spans] == ["key", "[a = b]", "=", "2"]
    _, start, end = spans[2]
    assert text[start:end] == "="
