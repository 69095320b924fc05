"""optics — path lenses over nested lists and dicts.

The package exports an operation named ``set``, so ``from optics import *``
shadows the builtin ``set`` in the importing module.  Prefer
``import optics`` and ``optics.set(...)`` where that matters.
"""

from .convert import dumps, loads, to_python, to_value
from .errors import (
    IndexOutOfRange,
    KeyNotFound,
    LensError,
    MalformedLens,
    ShapeError,
    UnsupportedOperation,
)
from .getter import view
from .lens import (
    EACH,
    KEYS,
    VALUES,
    Each,
    Index,
    Key,
    Keys,
    Lens,
    Step,
    Values,
    as_lens,
    compose,
    has_traversal,
    index,
    key,
    lens,
)
from .model import (
    Value,
    VDict,
    VList,
    VScalar,
    dict_get,
    dict_keys,
    dict_set,
    is_dict,
    is_list,
    list_append,
    list_get,
    list_len,
    list_set,
    require_dict,
    require_list,
    shape_of,
)
from .notation import format_lens, parse_lens
from .repl import LensRepl
from .setter import append, set, update

__all__ = [
    "view",
    "update",
    "set",
    "append",
    "key",
    "index",
    "lens",
    "compose",
    "as_lens",
    "has_traversal",
    "EACH",
    "KEYS",
    "VALUES",
    "Lens",
    "Step",
    "Key",
    "Index",
    "Each",
    "Keys",
    "Values",
    "Value",
    "VList",
    "VDict",
    "VScalar",
    "is_list",
    "is_dict",
    "shape_of",
    "require_list",
    "require_dict",
    "list_get",
    "list_set",
    "list_append",
    "list_len",
    "dict_get",
    "dict_set",
    "dict_keys",
    "to_value",
    "to_python",
    "loads",
    "dumps",
    "format_lens",
    "parse_lens",
    "LensError",
    "ShapeError",
    "KeyNotFound",
    "IndexOutOfRange",
    "MalformedLens",
    "UnsupportedOperation",
    "LensRepl",
]
