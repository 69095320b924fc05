"""View resolution for optics.

``view`` reads the value(s) a lens points at.  A path without traversal steps
yields a single Value; any ``each``/``keys``/``values`` step makes the result a
flat list of Values, nested traversals included.

The engine assumes exclusive access to *root* for the duration of the call;
callers sharing a root between threads must lock around it themselves.
"""

from __future__ import annotations

from logging import DEBUG, getLogger

from .errors import MalformedLens
from .lens import Each, Index, Key, Keys, LensLike, Step, Values, as_lens, has_traversal
from .model import Value, VScalar, dict_get, list_get, require_dict, require_list
from .notation import describe_steps


logger = getLogger("optics")


def view(root: Value, path: LensLike) -> Value | list[Value]:
    """Return the value at *path* in *root*, or the list of values if *path*
    contains a traversal."""
    path = as_lens(path)
    if logger.isEnabledFor(DEBUG):
        logger.debug("view '%s'", describe_steps(path.steps))
    return _view(root, path.steps, f"attempted to apply lens '{describe_steps(path.steps)}'")


def _view(d: Value, steps: tuple[Step, ...], where: str) -> Value | list[Value]:
    if not steps:
        return d

    step, rest = steps[0], steps[1:]

    if isinstance(step, Each):
        items = require_list(d, "view", where).items
        return _collect((_view(item, rest, where) for item in items), rest)

    if isinstance(step, Values):
        entries = require_dict(d, "view", where).entries
        return _collect((_view(item, rest, where) for item in entries.values()), rest)

    if isinstance(step, Keys):
        # Terminal: whatever follows a keys step is never interpreted
        return [VScalar(k) for k in require_dict(d, "view", where).entries]

    if isinstance(step, Key):
        return _view(dict_get(d, step.name, "view", where), rest, where)

    if isinstance(step, Index):
        return _view(list_get(d, step.position, "view", where), rest, where)

    raise MalformedLens(f"view encountered an ill-formed lens; {where}; specifically, {step!r}")


def _collect(results, rest: tuple[Step, ...]) -> list[Value]:
    """Accumulate per-target results into one flat list."""
    accumulator: list[Value] = []
    if has_traversal(rest):
        for sub in results:
            accumulator.extend(sub)
    else:
        accumulator.extend(results)
    return accumulator
