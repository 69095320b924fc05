"""Lens paths: step variants, the Lens sequence and its builders.

A lens is plain data, an immutable tuple of steps.  Two lenses with the same
steps are interchangeable, and building a bigger lens always produces a new
tuple, so intermediate lenses can be shared freely::

    last_item = lens(key("items"), index(2))
    names = compose(key("orders"), EACH, key("name"))
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import ClassVar, Iterable, Iterator, Union

from .errors import MalformedLens


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

class Step:
    """Base class for one segment of a lens path."""

    traversal: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Key(Step):
    """Descend into a dict at ``name``."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise MalformedLens(f"key step needs a string name, got {self.name!r}")


@dataclass(frozen=True, slots=True)
class Index(Step):
    """Descend into a list at ``position`` (0-based)."""

    position: int

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise MalformedLens(
                f"index step needs an integer position, got {self.position!r}"
            )


@dataclass(frozen=True, slots=True)
class Each(Step):
    """Every element of a list."""

    traversal: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Keys(Step):
    """The key names of a dict.  Read-only and terminal."""

    traversal: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Values(Step):
    """Every value of a dict, in insertion order."""

    traversal: ClassVar[bool] = True


def has_traversal(steps: Iterable[Step]) -> bool:
    """True when *steps* fan out to several targets."""
    return any(step.traversal for step in steps)


# ---------------------------------------------------------------------------
# Lens
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Lens:
    steps: tuple[Step, ...] = ()

    def __post_init__(self) -> None:
        steps = tuple(self.steps)
        for step in steps:
            if not isinstance(step, Step):
                raise MalformedLens(f"not a lens step: {step!r}")
        object.__setattr__(self, "steps", steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __add__(self, other: object) -> Lens:
        if not isinstance(other, Lens):
            return NotImplemented
        return Lens(self.steps + other.steps)

    def __str__(self) -> str:
        from .notation import format_lens
        return format_lens(self)

    @property
    def is_traversal(self) -> bool:
        return has_traversal(self.steps)


LensLike = Union[Lens, Step, Iterable[Union[Lens, Step]]]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def key(name: str) -> Lens:
    return Lens((Key(name),))


def index(position: int) -> Lens:
    return Lens((Index(position),))


def lens(*parts: Lens | Step) -> Lens:
    """Concatenate already-built lenses (or bare steps) into one lens."""
    steps: list[Step] = []
    for part in parts:
        if isinstance(part, Lens):
            steps.extend(part.steps)
        elif isinstance(part, Step):
            steps.append(part)
        else:
            raise MalformedLens(f"cannot build a lens from {part!r}")
    return Lens(tuple(steps))


def compose(*lenses: Lens) -> Lens:
    """Concatenate *lenses* left to right.  The arguments are not modified."""
    for part in lenses:
        if not isinstance(part, Lens):
            raise MalformedLens(f"compose() takes lenses, got {part!r}")
    return Lens(tuple(chain.from_iterable(part.steps for part in lenses)))


def as_lens(path: LensLike) -> Lens:
    """Coerce a Lens, a single Step or a sequence of those into a Lens."""
    if isinstance(path, Lens):
        return path
    if isinstance(path, Step):
        return Lens((path,))
    if isinstance(path, (str, bytes)) or not isinstance(path, Iterable):
        raise MalformedLens(f"not a lens: {path!r}")
    return lens(*path)


EACH = Lens((Each(),))
KEYS = Lens((Keys(),))
VALUES = Lens((Values(),))
