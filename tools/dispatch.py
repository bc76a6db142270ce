# =============================================================================
# tools/dispatch.py  -  Tool Dispatch Facade
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Turns (tool name, argument bag) into a text response plus an error flag.
#   It is framework-agnostic: tools/mcp_server.py plugs it into FastMCP, and
#   the tests call it directly.
#
# HOW IT WORKS (the flow for every call):
#   1. Look the name up in TOOL_SPECS          -> UnknownOperation
#   2. Validate arguments with its schema      -> InvalidInput
#   3. Call the registry / network probe       -> NotFound, InsufficientFunds
#   4. Format the result as text (tools/formatting.py)
#   5. Any exception from steps 1-4 becomes an error-flagged ToolResponse.
#      call() never raises.
#
# LOGGING:
#   Requests, intermediate status and responses are logged to STDERR in
#   colour.  STDOUT carries the MCP protocol and must stay clean.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import ValidationError

from core.errors import (
    A2PError,
    ExternalUnavailable,
    InvalidInput,
    NotFound,
    UnknownOperation,
)
from core.health import check_health
from core.registry import AgentRegistry
from core.solana import NetworkProbe
from tools import formatting
from tools.schemas import (
    CreateAgentArgs,
    GetBalanceArgs,
    HealthCheckArgs,
    ListAgentsArgs,
    ToolArgs,
    TransferFundsArgs,
    describe_validation_error,
)

logger = logging.getLogger(__name__)

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Error responses
_RESET = "\033[0m"


def _log_request(tool_name: str, params: dict) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, response: "ToolResponse") -> "ToolResponse":
    """Log the first line of the response (GREEN, or RED for errors), then return it."""
    color = _RED if response.is_error else _GREEN
    headline = response.text.splitlines()[0] if response.text else ""
    logger.info(f"{color}  ← {tool_name} response: {headline}{_RESET}")
    return response


# -----------------------------------------------------------------------------
# ToolResponse / ToolSpec
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResponse:
    """Text payload of one tool call.

    `error` holds the A2PError code (e.g. "NOT_FOUND") when is_error is set,
    or "INTERNAL_ERROR" for unexpected exceptions.
    """

    text: str
    is_error: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: type[ToolArgs]

    def input_schema(self) -> dict:
        return self.args_model.model_json_schema()


TOOL_SPECS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "a2p_create_agent",
            "Create a new A2P agent with specified capabilities and initial balance",
            CreateAgentArgs,
        ),
        ToolSpec(
            "a2p_list_agents",
            "List all active A2P agents with their status and capabilities",
            ListAgentsArgs,
        ),
        ToolSpec(
            "a2p_transfer_funds",
            "Transfer SOL between A2P agents",
            TransferFundsArgs,
        ),
        ToolSpec(
            "a2p_get_balance",
            "Get the SOL balance for a specific A2P agent",
            GetBalanceArgs,
        ),
        ToolSpec(
            "a2p_health_check",
            "Perform system health check and get network information",
            HealthCheckArgs,
        ),
    )
}


class ToolDispatcher:
    """Routes tool calls to the registry and formats their results.

    Args:
        registry: The AgentRegistry owned by the hosting server.
        probe: Network probe used only by the health check.
        network: Configured network name, shown by the health check.
    """

    def __init__(self, registry: AgentRegistry, probe: NetworkProbe, network: str):
        self.registry = registry
        self.probe = probe
        self.network = network
        self._handlers: dict[str, Callable[[Any], "ToolResponse"]] = {
            "a2p_create_agent": self._create_agent,
            "a2p_list_agents": self._list_agents,
            "a2p_transfer_funds": self._transfer_funds,
            "a2p_get_balance": self._get_balance,
            "a2p_health_check": self._health_check,
        }

    def call(self, name: str, arguments: Optional[dict] = None) -> ToolResponse:
        """Run one tool call.  Never raises."""
        arguments = arguments if arguments is not None else {}
        _log_request(name, arguments if isinstance(arguments, dict) else {"arguments": arguments})

        try:
            spec = TOOL_SPECS.get(name)
            if spec is None:
                raise UnknownOperation(name)
            try:
                args = spec.args_model.model_validate(arguments)
            except ValidationError as e:
                raise InvalidInput(describe_validation_error(e)) from e
            response = self._handlers[name](args)
        except A2PError as e:
            _log_status(f"{e.code}: {e.message}")
            response = ToolResponse(f"Error: {e.message}", is_error=True, error=e.code)
        except Exception as e:
            logger.exception("Unexpected failure in tool %s", name)
            message = str(e) or type(e).__name__
            response = ToolResponse(f"Error: {message}", is_error=True, error="INTERNAL_ERROR")

        return _log_response(name, response)

    # -------------------------------------------------------------------------
    # Handlers: each returns a ToolResponse or raises an A2PError.
    # -------------------------------------------------------------------------
    def _create_agent(self, args: CreateAgentArgs) -> ToolResponse:
        agent = self.registry.create(args.name, args.capabilities, args.initialBalance)
        _log_status(f"Registered {agent.name} as {agent.id}")
        return ToolResponse(formatting.format_agent_created(agent))

    def _list_agents(self, args: ListAgentsArgs) -> ToolResponse:
        agents = self.registry.list_all()
        _log_status(f"{len(agents)} agents registered")
        return ToolResponse(formatting.format_agent_list(agents))

    def _transfer_funds(self, args: TransferFundsArgs) -> ToolResponse:
        source, destination = self.registry.execute_transfer(
            args.fromAgentId, args.toAgentId, args.amount
        )
        _log_status(f"Moved {args.amount} SOL {source.name} → {destination.name}")
        return ToolResponse(formatting.format_transfer(source, destination, args.amount, args.message))

    def _get_balance(self, args: GetBalanceArgs) -> ToolResponse:
        agent = self.registry.get(args.agentId)
        if agent is None:
            raise NotFound(args.agentId)
        return ToolResponse(formatting.format_balance(agent))

    def _health_check(self, args: HealthCheckArgs) -> ToolResponse:
        report = check_health(self.probe, self.registry, self.network, tool_count=len(TOOL_SPECS))
        if report.healthy:
            _log_status(f"Slot {report.network_status.slot}, {report.stats.count} agents")
            return ToolResponse(formatting.format_health(report))
        return ToolResponse(
            formatting.format_health(report),
            is_error=True,
            error=ExternalUnavailable.code,
        )
