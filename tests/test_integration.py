"""End-to-end scenarios with literal nested data."""

from optics import EACH, KEYS, VALUES, append, index, key, lens, set, to_python, to_value, view
from optics.model import VScalar


def test_nested_key_index_key():
    d = to_value({"x": ["a", "b", {"y": 1, "z": 2}]})
    p = lens(key("x"), index(2), key("z"))
    assert view(d, p) == VScalar(2)
    set(d, p, 3)
    assert view(d, p) == VScalar(3)


def test_set_through_each():
    d = to_value([{"x": 1, "y": 1}, {"x": 2, "y": 2}])
    p = lens(EACH, key("x"))
    assert to_python(view(d, p)) == [1, 2]
    set(d, p, 3)
    assert to_python(d) == [{"x": 3, "y": 1}, {"x": 3, "y": 2}]


def test_each_keys():
    d = to_value([{"hello": 1}, {"world": 2}])
    assert to_python(view(d, lens(EACH, KEYS))) == ["hello", "world"]


def test_each_values():
    d = to_value([{"hello": 1}, {"world": 2}])
    assert to_python(view(d, lens(EACH, VALUES))) == [1, 2]


def test_set_then_view_through_each():
    d = to_value({"z": ["a", "b", {"f": ["hello", "there"]}]})
    set(d, lens(key("z"), index(2), key("f"), index(1)), "world")
    assert to_python(view(d, lens(key("z"), index(2), key("f"), EACH))) == ["hello", "world"]


def test_append_with_shared_prefix():
    d = to_value({"z": ["a", "b", {"f": ["hello", "there"]}]})
    last_pos = lens(key("z"), index(2))
    f = lens(last_pos, key("f"))
    set(d, lens(f, index(1)), "world")
    append(d, f, "!")
    assert to_python(view(d, lens(f, EACH))) == ["hello", "world", "!"]
    assert last_pos == lens(key("z"), index(2))


def test_lens_reused_across_roots():
    names = lens(key("people"), EACH, key("name"))
    first = to_value({"people": [{"name": "ann"}, {"name": "bob"}]})
    second = to_value({"people": [{"name": "cy"}]})
    assert to_python(view(first, names)) == ["ann", "bob"]
    assert to_python(view(second, names)) == ["cy"]
