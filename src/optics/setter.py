"""Update resolution for optics: ``update``, ``set`` and ``append``.

Every level follows the same write-back discipline: read the child, update it
recursively, then store the result back into the parent at the same key or
index.  The root is mutated in place and also returned, since an empty lens
replaces the root itself.

Updates are not transactional.  If a fan-out fails part-way (say the third of
five ``each`` targets is not a list), targets already written back stay
modified.  Lens validation and the ``keys`` check run before anything is
touched, so those errors never leave partial writes behind.
"""

from __future__ import annotations

import copy
from logging import DEBUG, getLogger
from typing import Any, Callable

from .convert import to_value
from .errors import MalformedLens, UnsupportedOperation
from .lens import Each, Index, Key, Keys, LensLike, Step, Values, as_lens
from .model import Value, dict_get, dict_set, list_append, list_get, list_set, require_dict, require_list
from .notation import describe_steps


logger = getLogger("optics")

Transform = Callable[[Value], Any]

_KNOWN_STEPS = (Key, Index, Each, Values)


def update(root: Value, path: LensLike, transform: Transform) -> Value:
    """Replace every target of *path* in *root* with ``transform(target)``.

    *transform* may return a Value or plain Python data (converted with
    :func:`optics.convert.to_value`).  Returns the root.
    """
    path = as_lens(path)
    text = describe_steps(path.steps)
    for step in path.steps:
        if isinstance(step, Keys):
            raise UnsupportedOperation(f"update does not support the traversal lens 'keys': '{text}'")
        if not isinstance(step, _KNOWN_STEPS):
            raise MalformedLens(f"update encountered an ill-formed lens: '{text}'; specifically, {step!r}")
    if logger.isEnabledFor(DEBUG):
        logger.debug("update '%s'", text)
    return _update(root, path.steps, transform, f"attempted to apply lens '{text}'")


def _update(d: Value, steps: tuple[Step, ...], transform: Transform, where: str) -> Value:
    if not steps:
        return to_value(transform(d))

    step, rest = steps[0], steps[1:]

    if isinstance(step, Each):
        for i in range(len(require_list(d, "update", where).items)):
            nested = list_get(d, i, "update", where)
            list_set(d, i, _update(nested, rest, transform, where), "update", where)
        return d

    if isinstance(step, Values):
        for k in list(require_dict(d, "update", where).entries):
            nested = dict_get(d, k, "update", where)
            dict_set(d, k, _update(nested, rest, transform, where), "update", where)
        return d

    if isinstance(step, Key):
        nested = dict_get(d, step.name, "update", where)
        dict_set(d, step.name, _update(nested, rest, transform, where), "update", where)
        return d

    # Index: the only step left after validation in update()
    nested = list_get(d, step.position, "update", where)
    list_set(d, step.position, _update(nested, rest, transform, where), "update", where)
    return d


# ---------------------------------------------------------------------------
# Derived operations
# ---------------------------------------------------------------------------

def set(root: Value, path: LensLike, new_value: Any) -> Value:
    """Replace every target of *path* with *new_value*.

    Each target receives its own copy, so later in-place edits through one
    target never show up at another.
    """
    new_value = to_value(new_value)
    return update(root, path, lambda _old: copy.deepcopy(new_value))


def append(root: Value, path: LensLike, element: Any) -> Value:
    """Append *element* to every list targeted by *path*."""
    path = as_lens(path)
    element = to_value(element)
    where = f"attempted to apply lens '{describe_steps(path.steps)}'"

    def _push(target: Value) -> Value:
        list_append(target, copy.deepcopy(element), "append", where)
        return target

    return update(root, path, _push)
