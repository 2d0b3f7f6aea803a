"""Per-kind configuration payloads attached to workflow nodes.

Each node kind has exactly one config variant. The variants form a pydantic
discriminated union on ``kind``, so a payload is parsed straight into the
right class and a mismatched shape is rejected at the boundary.

Configs are immutable. The edit helpers at the bottom of this module
(add_recipient, add_condition, ...) mirror what the editor dialogs do and
always return a new config.
"""

import re
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from flowgraph.models.base import CamelModel
from flowgraph.utils.identifiers import generate_condition_id, generate_update_id


class NodeKind(str, Enum):
    """The closed set of automation steps a workflow can contain."""

    wait = "wait"
    send_email = "send-email"
    decision_split = "decision-split"
    update_profile = "update-profile"


# palette display names, also used as the label of an unconfigured node
NODE_KIND_NAMES: dict[NodeKind, str] = {
    NodeKind.wait: "Wait",
    NodeKind.send_email: "Send Email",
    NodeKind.decision_split: "Decision Split",
    NodeKind.update_profile: "Update Profile",
}

NODE_KIND_DESCRIPTIONS: dict[NodeKind, str] = {
    NodeKind.wait: "Add delays with configurable duration",
    NodeKind.send_email: "Send email campaigns with templates and recipients",
    NodeKind.decision_split: "Create conditional branches based on user properties",
    NodeKind.update_profile: "Modify user profile data with field updates",
}

WAIT_REQUIRED_MESSAGE = "Please enter at least one time value (hours, minutes, or seconds)"
WAIT_RANGE_MESSAGE = "Minutes and seconds must be less than 60"
SUBJECT_REQUIRED_MESSAGE = "Please enter an email subject"


# strict: a bool or numeric string is an error, never coerced
DurationPart = Annotated[int, Field(ge=0, strict=True)]


class _ConfigModel(CamelModel):
    model_config = {"extra": "forbid", "frozen": True}


class WaitConfig(_ConfigModel):
    kind: Literal["wait"] = "wait"
    hours: DurationPart = 0
    minutes: DurationPart = 1
    seconds: DurationPart = 0


class SendEmailConfig(_ConfigModel):
    kind: Literal["send-email"] = "send-email"
    subject: str = "New Email"
    template: str = ""
    recipients: list[str] = Field(default_factory=list)
    recipient_type: Literal["all", "specific", "segment"] = "all"


class Condition(_ConfigModel):
    """One branch of a decision split."""

    id: str
    field: str
    operator: Literal["equals", "not_equals", "contains", "greater_than", "less_than"]
    value: str
    label: str


class DecisionSplitConfig(_ConfigModel):
    kind: Literal["decision-split"] = "decision-split"
    conditions: list[Condition] = Field(default_factory=list)
    default_path: str = "Default"


class ProfileUpdate(_ConfigModel):
    """A single field change applied to a user profile."""

    id: str
    field: str
    value: str
    operation: Literal["set", "increment", "append", "prepend"]


class UpdateProfileConfig(_ConfigModel):
    kind: Literal["update-profile"] = "update-profile"
    updates: list[ProfileUpdate] = Field(default_factory=list)


NodeConfig = Annotated[
    Union[WaitConfig, SendEmailConfig, DecisionSplitConfig, UpdateProfileConfig],
    Field(discriminator="kind"),
]


def tag_config(data: Any) -> Any:
    """Copy the owning node's kind into a config payload that lacks one.

    Used as a before-validator wherever a config travels next to its kind.
    Unknown kinds are left alone for field validation to report.
    """
    if not isinstance(data, dict):
        return data
    config = data.get("config")
    if not isinstance(config, dict) or "kind" in config or data.get("kind") is None:
        return data
    try:
        kind = NodeKind(data["kind"])
    except ValueError:
        return data
    return {**data, "config": {**config, "kind": kind.value}}


class FieldError(BaseModel):
    """A problem with one field of a node's config, shown in its edit dialog."""

    field: str
    message: str


def default_config(kind: NodeKind | str) -> NodeConfig:
    """Return the config a freshly dropped node of ``kind`` starts with."""
    kind = NodeKind(kind)
    if kind == NodeKind.wait:
        return WaitConfig()
    elif kind == NodeKind.send_email:
        return SendEmailConfig()
    elif kind == NodeKind.decision_split:
        return DecisionSplitConfig()
    elif kind == NodeKind.update_profile:
        return UpdateProfileConfig()
    raise TypeError(f"Unhandled node kind: {kind}")


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}(s)"


def _wait_label(config: WaitConfig) -> str:
    parts = []
    if config.hours:
        parts.append(f"{config.hours}h")
    if config.minutes:
        parts.append(f"{config.minutes}m")
    if config.seconds:
        parts.append(f"{config.seconds}s")
    return " ".join(parts) if parts else "0m"


def derive_label(kind: NodeKind | str, config: NodeConfig | None) -> str:
    """Build the display label of a node from its kind and config.

    Purely presentational; validation never looks at labels.
    """
    kind = NodeKind(kind)
    if config is None:
        return NODE_KIND_NAMES[kind]

    if isinstance(config, WaitConfig):
        return _wait_label(config)
    elif isinstance(config, SendEmailConfig):
        return f"Send Email: {config.subject or 'Untitled'}"
    elif isinstance(config, DecisionSplitConfig):
        if not config.conditions:
            return "Decision Split"
        return f"Decision Split ({_plural(len(config.conditions), 'condition')})"
    elif isinstance(config, UpdateProfileConfig):
        if not config.updates:
            return "Update Profile"
        return f"Update Profile ({_plural(len(config.updates), 'field')})"
    raise TypeError(f"Unhandled config type: {type(config).__name__}")


def validate_config(kind: NodeKind | str, config: NodeConfig | None) -> list[FieldError]:
    """Check the field-level rules of a node config.

    Returns an empty list when the config can be saved. These errors belong
    to the node's edit dialog and are independent of graph validation. An
    unconfigured node is checked against its kind's default config.
    """
    kind = NodeKind(kind)
    if config is None:
        config = default_config(kind)
    if config.kind != kind.value:
        return [
            FieldError(
                field="kind",
                message=f"Expected a '{kind.value}' config, got '{config.kind}'",
            )
        ]

    errors: list[FieldError] = []
    if isinstance(config, WaitConfig):
        if config.hours == 0 and config.minutes == 0 and config.seconds == 0:
            errors.append(FieldError(field="duration", message=WAIT_REQUIRED_MESSAGE))
        elif config.minutes >= 60 or config.seconds >= 60:
            field = "minutes" if config.minutes >= 60 else "seconds"
            errors.append(FieldError(field=field, message=WAIT_RANGE_MESSAGE))
    elif isinstance(config, SendEmailConfig):
        if not config.subject.strip():
            errors.append(FieldError(field="subject", message=SUBJECT_REQUIRED_MESSAGE))
    elif isinstance(config, (DecisionSplitConfig, UpdateProfileConfig)):
        # empty condition / update lists are a valid no-op step
        pass
    else:
        raise TypeError(f"Unhandled config type: {type(config).__name__}")
    return errors


def normalize_config(config: NodeConfig) -> NodeConfig:
    """Return the form a config is stored in once its dialog is saved."""
    if isinstance(config, SendEmailConfig):
        return config.model_copy(update={"subject": config.subject.strip()})
    return config


# --- Edit helpers ---


def coerce_time_value(raw: str | int) -> int:
    """Turn raw text from a duration input into a non-negative integer.

    Non-digit characters are dropped ("abc123" -> 123), empty input is 0.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return max(raw, 0)
    digits = re.sub(r"\D", "", str(raw))
    return int(digits) if digits else 0


def add_recipient(config: SendEmailConfig, recipient: str) -> SendEmailConfig:
    """Append a recipient; blank or already-present recipients are a no-op."""
    recipient = recipient.strip()
    if not recipient or recipient in config.recipients:
        return config
    return config.model_copy(update={"recipients": [*config.recipients, recipient]})


def remove_recipient(config: SendEmailConfig, recipient: str) -> SendEmailConfig:
    return config.model_copy(
        update={"recipients": [r for r in config.recipients if r != recipient]}
    )


def _unique_id(candidate: str, taken: set[str]) -> str:
    # ids are millisecond based, two adds in the same tick must not collide
    unique = candidate
    suffix = 1
    while unique in taken:
        unique = f"{candidate}-{suffix}"
        suffix += 1
    return unique


def add_condition(config: DecisionSplitConfig) -> DecisionSplitConfig:
    condition = Condition(
        id=_unique_id(generate_condition_id(), {c.id for c in config.conditions}),
        field="user_property",
        operator="equals",
        value="",
        label=f"Condition {len(config.conditions) + 1}",
    )
    return config.model_copy(update={"conditions": [*config.conditions, condition]})


def remove_condition(config: DecisionSplitConfig, condition_id: str) -> DecisionSplitConfig:
    return config.model_copy(
        update={"conditions": [c for c in config.conditions if c.id != condition_id]}
    )


def add_profile_update(config: UpdateProfileConfig) -> UpdateProfileConfig:
    update = ProfileUpdate(
        id=_unique_id(generate_update_id(), {u.id for u in config.updates}),
        field="",
        value="",
        operation="set",
    )
    return config.model_copy(update={"updates": [*config.updates, update]})


def remove_profile_update(config: UpdateProfileConfig, update_id: str) -> UpdateProfileConfig:
    return config.model_copy(
        update={"updates": [u for u in config.updates if u.id != update_id]}
    )
