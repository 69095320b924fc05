"""Property-based tests for the lens engine.

Run with: pytest tests/test_properties.py --hypothesis-show-statistics
"""

import copy

import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis required for property tests")

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from optics import EACH, KEYS, VALUES, Lens, compose, index, key, lens, set, to_value, update, view
from optics.lens import Each, Index, Key, Keys, Values
from optics.model import VDict, VList
from optics.notation import format_lens, parse_lens


# =============================================================================
# Strategies
# =============================================================================

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**31), max_value=2**31),
    st.text(max_size=10),
)

names = st.text(max_size=8)

plain_data = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(names, children, max_size=4),
    ),
    max_leaves=20,
)

steps = st.one_of(
    names.map(Key),
    st.integers(min_value=-3, max_value=10).map(Index),
    st.sampled_from([Each(), Keys(), Values()]),
)

lenses = st.lists(steps, max_size=5).map(lambda s: Lens(tuple(s)))


@composite
def value_and_single_path(draw):
    """A value plus a traversal-free lens that is valid for it."""
    value = to_value(draw(plain_data))
    path = []
    current = value
    for _ in range(draw(st.integers(min_value=0, max_value=4))):
        if isinstance(current, VList) and current.items:
            i = draw(st.integers(min_value=0, max_value=len(current.items) - 1))
            path.append(index(i))
            current = current.items[i]
        elif isinstance(current, VDict) and current.entries:
            k = draw(st.sampled_from(sorted(current.entries)))
            path.append(key(k))
            current = current.entries[k]
        else:
            break
    return value, lens(*path)


# =============================================================================
# Properties
# =============================================================================

@given(value_and_single_path(), plain_data)
def test_set_then_view_round_trip(case, new):
    value, path = case
    root = set(value, path, new)
    assert view(root, path) == to_value(new)


@given(value_and_single_path())
def test_identity_update_keeps_structure(case):
    value, path = case
    original = copy.deepcopy(value)
    assert update(value, path, lambda v: v) == original


@given(plain_data)
def test_identity_update_through_each(data):
    value = to_value([data, data])
    original = copy.deepcopy(value)
    assert update(value, EACH, lambda v: v) == original


@given(lenses, lenses, lenses)
def test_compose_is_associative(a, b, c):
    assert compose(compose(a, b), c) == compose(a, compose(b, c)) == compose(a, b, c)


@given(lenses, lenses)
def test_compose_leaves_arguments_alone(a, b):
    before = (a.steps, b.steps)
    compose(a, b)
    assert (a.steps, b.steps) == before


@given(st.lists(plain_data, max_size=8))
def test_each_yields_one_result_per_element(items):
    value = to_value(items)
    result = view(value, EACH)
    assert len(result) == len(items)
    assert result == value.items


@given(st.dictionaries(names, plain_data, max_size=6))
def test_keys_and_values_follow_insertion_order(data):
    value = to_value(data)
    assert [k.value for k in view(value, KEYS)] == list(data)
    assert view(value, VALUES) == list(value.entries.values())


@given(lenses)
def test_notation_round_trip(path):
    assert parse_lens(format_lens(path)) == path
