"""LensRepl — incremental shell for exploring data through lenses.

Also provides the ``optics-repl`` CLI entry point via ``main()``.

Inside a ``?<< file`` batch, ``:q`` ends the batch rather than the session,
and ``?>>`` redirects are rejected: they only work at the interactive prompt.
"""

from __future__ import annotations

import json
import sys
from logging import getLogger
from typing import IO

from .convert import loads
from .errors import LensError, MalformedLens
from .getter import view
from .lens import Lens
from .model import Value, VDict, VList, VScalar
from .notation import parse_lens, token_spans
from .setter import append, set as set_


logger = getLogger("optics")


# ---------------------------------------------------------------------------
# LensRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class LensRepl:
    """Stateful shell holding one root value and a table of named lenses.

    Usage::

        repl = LensRepl()
        repl.load('{"z": ["a", "b", {"f": ["hello", "there"]}]}')
        repl.define("f", "key z index 2 key f")
        repl.set("@f index 1", '"world"')
        repl.view("@f each")        # → [VScalar("hello"), VScalar("world")]

        repl.data     # current root
        repl.lenses   # named lenses
        repl.reset()  # clear state
    """

    def __init__(self) -> None:
        self.data: Value = VDict()
        self.lenses: dict[str, Lens] = {}

    def parse(self, path_text: str) -> Lens:
        return parse_lens(path_text, self.lenses)

    def load(self, json_text: str) -> Value:
        """Replace the root with the value parsed from *json_text*."""
        self.data = loads(json_text)
        return self.data

    def define(self, name: str, path_text: str) -> Lens:
        if not name or name.startswith("@"):
            raise MalformedLens(f"invalid lens name {name!r}")
        self.lenses[name] = self.parse(path_text)
        return self.lenses[name]

    def view(self, path_text: str) -> Value | list[Value]:
        return view(self.data, self.parse(path_text))

    def set(self, path_text: str, json_text: str) -> Value:
        self.data = set_(self.data, self.parse(path_text), loads(json_text))
        return self.data

    def append(self, path_text: str, json_text: str) -> Value:
        self.data = append(self.data, self.parse(path_text), loads(json_text))
        return self.data

    def reset(self) -> None:
        """Clear the root value and all named lenses."""
        self.data = VDict()
        self.lenses = {}


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value | list[Value]) -> str:
    """Format a value for compact one-line display."""
    if isinstance(value, VScalar):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, VList):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VDict):
        return "{" + ", ".join(f"{k}: {_fmt_inline(v)}" for k, v in value.entries.items()) + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_fmt_inline(v) for v in value) + "]"
    return repr(value)


def _fmt_inspect(value: Value | list[Value]) -> str:
    """Pretty-print a value for inspect() / i()."""
    if isinstance(value, VDict):
        if not value.entries:
            return "VDict {}"
        width = max(len(k) for k in value.entries)
        lines = ["VDict {"]
        for k, v in value.entries.items():
            lines.append(f"  {k:<{width}}: {_fmt_inline(v)}")
        lines.append("}")
        return "\n".join(lines)

    if isinstance(value, (VList, list)):
        items = value.items if isinstance(value, VList) else value
        header = "VList [" if isinstance(value, VList) else f"{len(items)} targets ["
        lines = [header]
        for i, v in enumerate(items):
            lines.append(f"  {i}: {_fmt_inline(v)}")
        lines.append("]")
        return "\n".join(lines)

    return _fmt_inline(value)


def _show_lenses(repl: LensRepl, dest: IO[str]) -> None:
    """Print all named lenses."""
    if not repl.lenses:
        print("  (no lenses defined)", file=dest)
        return
    width = max(len(k) for k in repl.lenses)
    for name, path in repl.lenses.items():
        print(f"  @{name:<{width}} : {path}", file=dest)


def _split_assignment(rest: str) -> tuple[str, str]:
    """Split ``<lens> = <json>`` at the first bare ``=`` word.

    An ``=`` inside a bracketed key name such as ``key [a = b]`` is part of
    that name, so the lens tokenizer decides where the lens ends.
    """
    for token, start, end in token_spans(rest):
        if token == "=":
            return rest[:start].strip(), rest[end:].strip()
    raise MalformedLens(f"expected '<lens> = <json>', got {rest!r}")


def _run_command(repl: LensRepl, line: str, dest: IO[str]) -> bool:
    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":data":
        print(_fmt_inspect(repl.data), file=dest)
        return True

    if line == ":lenses":
        _show_lenses(repl, dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    if line.startswith(":load "):
        repl.load(line[6:].strip())
        return True

    if line.startswith(":let "):
        name, _, path_text = line[5:].strip().partition(" ")
        repl.define(name, path_text)
        return True

    if line.startswith(":set "):
        repl.set(*_split_assignment(line[5:]))
        return True

    if line.startswith(":append "):
        repl.append(*_split_assignment(line[8:]))
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if line.startswith(prefix) and line.endswith(")"):
            print(_fmt_inspect(repl.view(line[len(prefix):-1].strip())), file=dest)
            return True

    # ── ? lens ────────────────────────────────────────────────────────────
    if line == "?" or line.startswith("? "):
        print(_fmt_inline(repl.view(line[1:].strip())), file=dest)
        return True

    # ── Redirects belong to the prompt loop in main() ────────────────────
    if line.startswith("?>>"):
        print("Error: output redirect (?>>) is only available at the prompt", file=dest)
        return True

    # ── Batch file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        filepath = line[4:].strip()
        try:
            with open(filepath, encoding="utf-8") as fh:
                for file_line in fh:
                    if not _process_line(repl, file_line.rstrip("\n"), dest):
                        break
        except OSError as exc:
            print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
        return True

    print(f"Error: unknown command {line!r}", file=dest)
    return True


def _process_line(repl: LensRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True
    try:
        return _run_command(repl, line, dest)
    except (LensError, ValueError) as exc:
        logger.info("command %r failed: %s", line, exc)
        print(f"Error: {exc}", file=dest)
        return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Interactive lens shell (``optics-repl`` / ``python -m optics.repl``)."""
    repl = LensRepl()
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    print("optics REPL  (:q to quit  |  :data  :lenses  :reset  |  :load <json>  :let <name> <lens>")
    print("              ? <lens>  inspect(<lens>)  :set <lens> = <json>  :append <lens> = <json>)")

    while True:
        try:
            line = input("optics> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                _file = None
                dest = sys.stdout
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()


if __name__ == "__main__":
    main()
