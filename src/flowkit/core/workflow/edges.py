# src/flowkit/core/workflow/edges.py
"""Edge conversion between storage and the canvas."""

from __future__ import annotations

from flowkit.contracts import EDGE_TYPE, RenderEdge, StoreEdge
from flowkit.core.identifiers import DEFAULT_ID_GENERATOR, IdGenerator


def store_edges_render_edge(edge: StoreEdge, *, id_generator: IdGenerator = DEFAULT_ID_GENERATOR) -> RenderEdge:
    """Give a stored edge a fresh canvas id and the default render type.

    Extra keys stored on the edge are carried over.
    """
    return RenderEdge.model_validate(
        {
            **edge.model_dump(),
            "id": id_generator.next(),
            "type": EDGE_TYPE,
        }
    )


def render_edge_to_store_edge(edge: RenderEdge) -> StoreEdge:
    """Drop canvas-only fields before saving."""
    return StoreEdge(
        source=edge.source,
        target=edge.target,
        source_handle=edge.source_handle,
        target_handle=edge.target_handle,
    )
