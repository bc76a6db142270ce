# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the five A2P tools over MCP.  Each tool is a thin wrapper around
#   ToolDispatcher.call(): the dispatcher validates, calls the registry and
#   formats the text; this file only adapts the result to FastMCP.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (Claude Desktop, the ADK operator agent, ...) calls a
#      tool by name, e.g. "a2p_transfer_funds"
#   2. FastMCP routes the call to the decorated function below
#   3. The function hands the argument bag to the dispatcher
#   4. Success -> the text is returned as the tool result
#      Failure -> ToolError is raised, which FastMCP reports with isError=true
#
# STATE OWNERSHIP:
#   create_server() builds ONE AgentRegistry per server instance.  There is
#   no module-level registry; two servers never share agents.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server          (stdio transport)
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.config import Settings, load_settings
from core.errors import ConfigurationError
from core.registry import AgentRegistry
from core.solana import NetworkProbe, SolanaRpcClient
from tools.dispatch import TOOL_SPECS, ToolDispatcher
from tools.formatting import SERVER_NAME, SERVER_VERSION
from tools.schemas import (
    AgentId,
    AgentName,
    Amount,
    Capabilities,
    InitialBalance,
    TransferMessage,
)

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Manage A2P agents: create agents with capabilities and a SOL balance, "
    "list them, transfer SOL between them, query balances, and check the "
    "health of the Solana network connection."
)


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to STDERR.

    STDOUT is the MCP stdio transport; anything printed there would corrupt
    the JSON-RPC stream.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _invoke(dispatcher: ToolDispatcher, name: str, arguments: dict) -> str:
    response = dispatcher.call(name, arguments)
    if response.is_error:
        raise ToolError(response.text)
    return response.text


def create_server(
    settings: Optional[Settings] = None,
    registry: Optional[AgentRegistry] = None,
    probe: Optional[NetworkProbe] = None,
) -> FastMCP:
    """Build a FastMCP server with its own registry and network probe.

    Args:
        settings: Server configuration; defaults to Settings().
        registry: Registry to serve; a fresh one is created if omitted.
        probe: Network probe for the health check; defaults to a
            SolanaRpcClient for settings.rpc_url.
    """
    settings = settings or Settings()
    registry = registry if registry is not None else AgentRegistry()
    probe = probe or SolanaRpcClient(settings.rpc_url, timeout=settings.rpc_timeout)
    dispatcher = ToolDispatcher(registry, probe, network=settings.network)

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    # Argument names below are the wire names (camelCase) advertised to clients.
    # Their types come from tools/schemas.py and are strict, so FastMCP rejects
    # "5" for a number before the dispatcher is reached.
    @mcp.tool(name="a2p_create_agent", description=TOOL_SPECS["a2p_create_agent"].description)
    def create_agent(
        name: AgentName,
        capabilities: Capabilities,
        initialBalance: InitialBalance,
    ) -> str:
        """Create a new A2P agent.

        Args:
            name: Name of the agent (non-empty).
            capabilities: Agent capabilities, at least one.
            initialBalance: Initial SOL balance, zero or more.
        """
        return _invoke(dispatcher, "a2p_create_agent", {
            "name": name,
            "capabilities": capabilities,
            "initialBalance": initialBalance,
        })

    @mcp.tool(name="a2p_list_agents", description=TOOL_SPECS["a2p_list_agents"].description)
    def list_agents() -> str:
        return _invoke(dispatcher, "a2p_list_agents", {})

    @mcp.tool(name="a2p_transfer_funds", description=TOOL_SPECS["a2p_transfer_funds"].description)
    def transfer_funds(
        fromAgentId: Annotated[AgentId, Field(description="ID of the source agent")],
        toAgentId: Annotated[AgentId, Field(description="ID of the destination agent")],
        amount: Amount,
        message: TransferMessage = None,
    ) -> str:
        """Transfer SOL between two agents.

        Args:
            fromAgentId: ID of the source agent.
            toAgentId: ID of the destination agent.
            amount: Amount of SOL to transfer, greater than zero.
            message: Optional note echoed in the confirmation.
        """
        arguments = {"fromAgentId": fromAgentId, "toAgentId": toAgentId, "amount": amount}
        if message is not None:
            arguments["message"] = message
        return _invoke(dispatcher, "a2p_transfer_funds", arguments)

    @mcp.tool(name="a2p_get_balance", description=TOOL_SPECS["a2p_get_balance"].description)
    def get_balance(agentId: Annotated[AgentId, Field(description="ID of the agent")]) -> str:
        """Get an agent's SOL balance.

        Args:
            agentId: ID of the agent.
        """
        return _invoke(dispatcher, "a2p_get_balance", {"agentId": agentId})

    @mcp.tool(name="a2p_health_check", description=TOOL_SPECS["a2p_health_check"].description)
    def health_check() -> str:
        return _invoke(dispatcher, "a2p_health_check", {})

    logger.info(
        "%s %s ready on %s with %d tools",
        SERVER_NAME, SERVER_VERSION, settings.network, len(TOOL_SPECS),
    )
    return mcp


def main() -> None:
    """Load .env, read settings once, and serve over stdio."""
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error("Invalid configuration: %s", e.message)
        sys.exit(2)

    configure_logging(settings.log_level)
    create_server(settings).run()


# =============================================================================
# Server entry point
# =============================================================================
# When run directly (python -m tools.mcp_server), start the MCP server.
# MCP clients connect to it via stdio transport.
# =============================================================================
if __name__ == "__main__":
    main()
