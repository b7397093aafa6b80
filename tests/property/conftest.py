# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import output_items, input_values

    @given(outputs=output_items)
    def test_filter_is_order_preserving(outputs) -> None:
        ...
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from flowkit.contracts import (
    FlowNodeInputItem,
    FlowNodeInputType,
    FlowNodeOutputItem,
    Position,
    WorkflowIOValueType,
)

# Input keys look like identifiers in real workflows
input_keys = st.from_regex(r"[a-z][a-zA-Z0-9_]{0,11}", fullmatch=True)

value_types = st.sampled_from(list(WorkflowIOValueType))

positions = st.builds(
    Position,
    x=st.floats(min_value=-10_000, max_value=10_000, allow_nan=False),
    y=st.floats(min_value=-10_000, max_value=10_000, allow_nan=False),
)

# JSON-safe values a user can type into an input
input_values: st.SearchStrategy[Any] = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**31), max_value=2**31),
    st.text(max_size=30),
    st.lists(st.text(max_size=10), max_size=3),
)


@st.composite
def output_items(draw: st.DrawFn) -> list[FlowNodeOutputItem]:
    """Outputs with unique ids and arbitrary value types."""
    ids = draw(st.lists(input_keys, unique=True, max_size=8))
    return [FlowNodeOutputItem(id=output_id, key=output_id, value_type=draw(value_types)) for output_id in ids]


@st.composite
def dynamic_inputs(draw: st.DrawFn, *, exclude: frozenset[str] = frozenset()) -> list[FlowNodeInputItem]:
    """User-added ports, flagged as dynamic so they survive reconciliation."""
    keys = draw(st.lists(input_keys.filter(lambda k: k not in exclude), unique=True, max_size=4))
    return [
        FlowNodeInputItem(
            key=key,
            value=draw(input_values),
            render_type_list=[FlowNodeInputType.ADD_INPUT_PARAM],
        )
        for key in keys
    ]
