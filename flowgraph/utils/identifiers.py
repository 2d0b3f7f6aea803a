"""ID generation and timestamp utilities."""

import time
import uuid
from datetime import datetime, timezone


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def generate_node_id(kind: str) -> str:
    """Generate a node ID from its kind and the creation time, e.g. "wait-1718000000000"."""
    return f"{kind}-{_epoch_millis()}"


def generate_edge_id(source: str, target: str) -> str:
    """Generate an edge ID from its endpoints."""
    return f"edge-{source}-{target}"


def generate_condition_id() -> str:
    return f"condition-{_epoch_millis()}"


def generate_update_id() -> str:
    return f"update-{_epoch_millis()}"


def generate_workflow_id() -> str:
    """Generate a unique workflow ID (UUID4)."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
