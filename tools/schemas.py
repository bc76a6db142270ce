# =============================================================================
# tools/schemas.py  -  Argument shapes for every tool
# =============================================================================
#
# One pydantic model per tool.  The dispatch facade validates the raw argument
# bag against these models BEFORE touching the registry.
#
# The constrained field types (AgentName, Capabilities, ...) are shared with
# the FastMCP signatures in tools/mcp_server.py, so the advertised inputSchema
# and the wire-level validation carry the same limits as the models.
#
# Field names are the wire names callers send (camelCase), so they are kept
# as-is rather than converted to snake_case.
#
# Everything is strict: "5" is not a number and 1 is not a string.
# Integers are still accepted wherever a number is expected.
# =============================================================================

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, ValidationError

AgentName = Annotated[StrictStr, Field(min_length=1, description="Name of the agent")]
Capabilities = Annotated[
    list[StrictStr],
    Field(min_length=1, description="Array of agent capabilities"),
]
InitialBalance = Annotated[
    StrictFloat,
    Field(ge=0, allow_inf_nan=False, description="Initial SOL balance for the agent"),
]
AgentId = Annotated[StrictStr, Field(min_length=1)]
Amount = Annotated[
    StrictFloat,
    Field(gt=0, allow_inf_nan=False, description="Amount of SOL to transfer"),
]
TransferMessage = Annotated[
    Optional[StrictStr],
    Field(description="Optional message for the transfer"),
]


class ToolArgs(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")


class CreateAgentArgs(ToolArgs):
    name: AgentName
    capabilities: Capabilities
    initialBalance: InitialBalance


class ListAgentsArgs(ToolArgs):
    pass


class TransferFundsArgs(ToolArgs):
    fromAgentId: Annotated[AgentId, Field(description="ID of the source agent")]
    toAgentId: Annotated[AgentId, Field(description="ID of the destination agent")]
    amount: Amount
    message: TransferMessage = None


class GetBalanceArgs(ToolArgs):
    agentId: Annotated[AgentId, Field(description="ID of the agent")]


class HealthCheckArgs(ToolArgs):
    pass


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line per field.

    e.g. "amount: Input should be greater than 0; toAgentId: Field required"
    """
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)
