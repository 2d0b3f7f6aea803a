"""API routes backing the node palette and node edit dialogs."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, model_validator

from flowgraph.models.base import CamelModel
from flowgraph.models.node_config import (
    NODE_KIND_DESCRIPTIONS,
    NODE_KIND_NAMES,
    FieldError,
    NodeConfig,
    NodeKind,
    default_config,
    derive_label,
    normalize_config,
    tag_config,
    validate_config,
)

router = APIRouter()


class NodeKindInfo(BaseModel):
    kind: NodeKind
    name: str
    description: str


class NodeDefaults(CamelModel):
    kind: NodeKind
    config: NodeConfig
    label: str


class ValidateConfigRequest(CamelModel):
    kind: NodeKind
    config: NodeConfig

    @model_validator(mode="before")
    @classmethod
    def tag_untagged_config(cls, data: Any) -> Any:
        return tag_config(data)


class ValidateConfigResponse(CamelModel):
    """Field errors for the dialog plus the config and label to store if there are none."""

    errors: list[FieldError]
    config: NodeConfig
    label: str


@router.get("/node-kinds")
def list_node_kinds() -> list[NodeKindInfo]:
    """list the node kinds the palette offers."""
    return [
        NodeKindInfo(
            kind=kind,
            name=NODE_KIND_NAMES[kind],
            description=NODE_KIND_DESCRIPTIONS[kind],
        )
        for kind in NodeKind
    ]


@router.get("/node-kinds/{kind}/default")
def get_node_defaults(kind: str) -> NodeDefaults:
    """default config and label for a freshly dropped node."""
    try:
        node_kind = NodeKind(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown node kind: {kind}")
    config = default_config(node_kind)
    return NodeDefaults(kind=node_kind, config=config, label=derive_label(node_kind, config))


@router.post("/node-configs/validate")
def validate_node_config(request: ValidateConfigRequest) -> ValidateConfigResponse:
    """check a config from an edit dialog before it is attached to its node."""
    errors = validate_config(request.kind, request.config)
    config = request.config if errors else normalize_config(request.config)
    return ValidateConfigResponse(
        errors=errors,
        config=config,
        label=derive_label(request.kind, config),
    )
