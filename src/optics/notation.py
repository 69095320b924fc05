"""Text notation for lenses.

A lens is written as whitespace-separated words::

    key orders  each  key name
    key z  index 2  key f  index 1
    key [first name]  values

Names holding whitespace, brackets or backslashes are wrapped in ``[...]``
with ``]`` and ``\\`` escaped by a backslash.  ``@name`` splices a lens taken
from the *named* mapping passed to :func:`parse_lens`.
"""

from __future__ import annotations

import re
from typing import Mapping

from .errors import MalformedLens
from .lens import Each, Index, Key, Keys, Lens, Step, Values


_TOKEN_RE = re.compile(r"\[(?:\\.|[^\]\\])*\]|\S+", re.DOTALL)
_NEEDS_BRACKETS_RE = re.compile(r"[\s\[\]\\]")
_INTEGER_RE = re.compile(r"-?[0-9]+")
_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

_TRAVERSALS: dict[str, Step] = {"each": Each(), "keys": Keys(), "values": Values()}
_KNOWN_STEPS = (Key, Index, Each, Keys, Values)


# ---------------------------------------------------------------------------
# Literal handling
# ---------------------------------------------------------------------------

def quote_name(name: str) -> str:
    if name and not _NEEDS_BRACKETS_RE.search(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("]", "\\]")
    return f"[{escaped}]"


def unwrap_literal(token: str) -> str:
    """Remove [...] brackets and unescape ``\\]`` and ``\\\\``."""
    if len(token) >= 2 and token.startswith("[") and token.endswith("]"):
        return _UNESCAPE_RE.sub(r"\1", token[1:-1])
    return token


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_step(step: Step) -> str:
    if isinstance(step, Key):
        return f"key {quote_name(step.name)}"
    if isinstance(step, Index):
        return f"index {step.position}"
    if isinstance(step, Each):
        return "each"
    if isinstance(step, Keys):
        return "keys"
    if isinstance(step, Values):
        return "values"
    raise MalformedLens(f"cannot format unknown step {step!r}")


def format_lens(path: Lens) -> str:
    """Render *path* in text notation; the empty lens renders as ``""``."""
    return " ".join(format_step(step) for step in path.steps)


def describe_steps(steps: tuple[Step, ...]) -> str:
    """Like :func:`format_lens`, but falls back to ``repr`` for unknown steps.

    Used in error messages, which must never fail themselves.
    """
    return " ".join(
        format_step(step) if isinstance(step, _KNOWN_STEPS) else repr(step)
        for step in steps
    )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def token_spans(text: str) -> list[tuple[str, int, int]]:
    """Tokens of *text* with their start and end offsets."""
    return [(m.group(), m.start(), m.end()) for m in _TOKEN_RE.finditer(text)]


def tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text)


def parse_lens(text: str, named: Mapping[str, Lens] | None = None) -> Lens:
    """Parse lens *text*.  Raises :class:`MalformedLens` on bad input."""
    tokens = tokenize(text)
    steps: list[Step] = []
    i = 0

    while i < len(tokens):
        word = tokens[i]
        i += 1

        if word in _TRAVERSALS:
            steps.append(_TRAVERSALS[word])
            continue

        if word.startswith("@") and len(word) > 1:
            ref = word[1:]
            if named is None or ref not in named:
                raise MalformedLens(f"unknown lens reference '@{ref}' in {text!r}")
            steps.extend(named[ref].steps)
            continue

        if word in ("key", "index"):
            if i >= len(tokens):
                raise MalformedLens(f"'{word}' is missing its argument in {text!r}")
            arg = tokens[i]
            i += 1
            if word == "key":
                steps.append(Key(unwrap_literal(arg)))
            else:
                if not _INTEGER_RE.fullmatch(arg):
                    raise MalformedLens(f"index needs an integer, got {arg!r} in {text!r}")
                steps.append(Index(int(arg)))
            continue

        raise MalformedLens(f"unknown lens word {word!r} in {text!r}")

    return Lens(tuple(steps))
