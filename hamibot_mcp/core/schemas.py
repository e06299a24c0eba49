# =============================================================================
# core/schemas.py  —  Argument Schemas
# =============================================================================
#
# Every tool argument is declared here ONCE as an Annotated type.  The same
# declaration does two jobs:
#   1. Runtime validation: FastMCP hands the raw arguments to pydantic,
#      which runs the validators below before the handler is ever called.
#   2. Self-description: pydantic turns the Field(description=...) into
#      the JSON schema the MCP client sees in tools/list.
#
# Identifiers are validated with a plain function (validate_object_id)
# so the rule can be tested without pydantic in the loop.  DeviceRef is
# the one structured argument: a validated id plus an optional label.
# =============================================================================

import re
from dataclasses import dataclass
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, Field

from hamibot_mcp.core.errors import InvalidArgument


OBJECT_ID_PATTERN = r"^[0-9a-f]{24}$"
OBJECT_ID_EXAMPLE = "507f1f77bcf86cd799439011"

_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)


def validate_object_id(value: str) -> str:
    """Check that value is a 24-character lowercase hex string.

    Args:
        value: Candidate identifier.

    Returns:
        The identifier, unchanged.

    Raises:
        InvalidArgument: If the value does not match OBJECT_ID_PATTERN.
    """
    if not isinstance(value, str) or not _OBJECT_ID_RE.fullmatch(value):
        raise InvalidArgument(
            f"Must be a 24-character hexadecimal string, example: {OBJECT_ID_EXAMPLE}"
        )
    return value


# The pattern is advertised in the JSON schema but enforced by the validator,
# so callers get the message with the example rather than pydantic's generic one.
ObjectId = Annotated[
    str,
    AfterValidator(validate_object_id),
    Field(json_schema_extra={"pattern": OBJECT_ID_PATTERN}),
]

VarMap = dict[str, Any]


# -----------------------------------------------------------------------------
# DeviceRef: a target for run-script / execute
# -----------------------------------------------------------------------------
# Only the id routes the call; name is carried through for the upstream's
# benefit and never inspected here.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DeviceRef:
    """A device to run code on."""

    id: Annotated[ObjectId, Field(description="Device ID")]
    name: Annotated[Optional[str], Field(description="Device name")] = None

    def to_payload(self) -> dict[str, str]:
        """Return the JSON body form, omitting name when unset."""
        payload = {"id": self.id}
        if self.name is not None:
            payload["name"] = self.name
        return payload


# -----------------------------------------------------------------------------
# Tool arguments
# -----------------------------------------------------------------------------
ScriptIdArg = Annotated[
    ObjectId,
    Field(description="The ID of the script to run (24-character hex)"),
]

CodeArg = Annotated[
    str,
    Field(description="JavaScript code to be executed on the devices. Must be valid JavaScript/Auto.js code"),
]

RunDevicesArg = Annotated[
    list[DeviceRef],
    Field(description="Array of target devices to run the script on. Each device requires an ID and optional name"),
]

ExecuteDevicesArg = Annotated[
    list[DeviceRef],
    Field(description="Array of target devices to execute the code on. Each device requires an ID and optional name"),
]

RunVarsArg = Annotated[
    Optional[VarMap],
    Field(description="Optional variables to pass to the script. Key-value pairs that will be available in the script context"),
]

ExecuteVarsArg = Annotated[
    Optional[VarMap],
    Field(description="Optional variables to pass to the code. Key-value pairs that will be available in the code context"),
]
