# =============================================================================
# agent/a2p_agent.py  -  Google ADK operator agent (with a LiteLlm model)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Configures the operator agent used by main.py.  The agent holds no
#   business logic; it reasons with an LLM and acts only through the MCP
#   tools of tools/mcp_server.py.
#
#   ┌───────────────────────────┐      stdio       ┌──────────────────────┐
#   │  Google ADK Agent          │ ───────────────▶ │  FastMCP Server      │
#   │  prompt + LiteLlm model    │                  │  (tools/mcp_server)  │
#   └───────────────────────────┘                  └──────────┬───────────┘
#                                                              ▼
#                                                   ┌──────────────────────┐
#                                                   │  core/ AgentRegistry │
#                                                   └──────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the MCP server as a subprocess ("uv run python -m
#   tools.mcp_server" from the project root) and talks to it over
#   stdin/stdout.  The registry therefore lives exactly as long as the
#   console session.
#
# MODEL:
#   Any LiteLlm model string works; A2P_AGENT_MODEL overrides the default
#   "openrouter/openai/gpt-4o" (LiteLlm reads OPENROUTER_API_KEY itself).
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_operator_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters() -> StdioServerParameters:
    """How ADK launches the MCP server subprocess."""
    return StdioServerParameters(
        command="uv",
        args=["run", "python", "-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
    )


def create_agent(model: str | None = None) -> Agent:
    """Create the A2P operator agent.

    Args:
        model: LiteLlm model string.  Defaults to $A2P_AGENT_MODEL, then
            DEFAULT_MODEL.

    Returns:
        A configured Google ADK Agent instance.
    """
    model = model or os.environ.get("A2P_AGENT_MODEL") or DEFAULT_MODEL

    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name="a2p_operator",
        model=LiteLlm(model=model),
        instruction=get_operator_prompt(),
        tools=[mcp_tools],
    )
