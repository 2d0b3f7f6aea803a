"""Utility functions for flowgraph."""

from flowgraph.utils.identifiers import (
    generate_node_id,
    generate_edge_id,
    generate_condition_id,
    generate_update_id,
    generate_workflow_id,
    utc_timestamp,
)
from flowgraph.utils.logger import get_logger

__all__ = [
    "generate_node_id",
    "generate_edge_id",
    "generate_condition_id",
    "generate_update_id",
    "generate_workflow_id",
    "utc_timestamp",
    "get_logger",
]
