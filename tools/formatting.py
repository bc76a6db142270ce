# =============================================================================
# tools/formatting.py  -  Human-readable text payloads for tool responses
# =============================================================================
#
# Every successful tool call returns ONE text block.  The line order of each
# block is stable: callers (and LLMs) may parse it, so fields are never
# reordered.
#
# NUMBERS:
#   Balances are printed the way a JSON number would be: 1.0 -> "1",
#   0.6 -> "0.6".  The health check's average balance uses 6 decimals, or a
#   bare "0" when there are no agents.
# =============================================================================

from datetime import datetime
from typing import Optional

from core.models import Agent, HealthReport, format_amount

SERVER_NAME = "A2P Protocol MCP Server"
SERVER_VERSION = "1.0.0"


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-01-02T03:04:05.678Z."""
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_agent_created(agent: Agent) -> str:
    return "\n".join([
        "Agent created successfully:",
        f"ID: {agent.id}",
        f"Name: {agent.name}",
        f"Capabilities: {', '.join(agent.capabilities)}",
        f"Initial Balance: {format_amount(agent.balance)} SOL",
        f"Display Address: {agent.display_address}",
        f"Created At: {format_timestamp(agent.created_at)}",
    ])


def format_agent_list(agents: list[Agent]) -> str:
    if not agents:
        return "No agents found. Create an agent using the a2p_create_agent tool."

    blocks = [
        "\n".join([
            f"ID: {agent.id}",
            f"Name: {agent.name}",
            f"Capabilities: {', '.join(agent.capabilities)}",
            f"Balance: {format_amount(agent.balance)} SOL",
            f"Created: {format_timestamp(agent.created_at)}",
        ])
        for agent in agents
    ]
    return f"Active Agents ({len(agents)}):\n\n" + "\n\n".join(blocks)


def format_transfer(source: Agent, destination: Agent, amount: float, message: Optional[str]) -> str:
    lines = [
        "Transfer successful!",
        f"From: {source.name} ({source.id})",
        f"To: {destination.name} ({destination.id})",
        f"Amount: {format_amount(amount)} SOL",
        f"From Agent Balance: {format_amount(source.balance)} SOL",
        f"To Agent Balance: {format_amount(destination.balance)} SOL",
    ]
    if message:
        lines.append(f"Message: {message}")
    return "\n".join(lines)


def format_balance(agent: Agent) -> str:
    return "\n".join([
        "Agent Balance:",
        f"ID: {agent.id}",
        f"Name: {agent.name}",
        f"Balance: {format_amount(agent.balance)} SOL",
        f"Display Address: {agent.display_address}",
        f"Last Updated: {format_timestamp(agent.updated_at)}",
    ])


def format_health(report: HealthReport) -> str:
    stats = report.stats

    if not report.healthy:
        return "\n".join([
            "Health Check Failed:",
            "Status: ❌ Unhealthy",
            f"Network: {report.network}",
            f"Error: {report.error}",
            "",
            "Please check:",
            "- Network connectivity",
            "- RPC endpoint status",
            "- Environment variables",
        ])

    status = report.network_status
    block_time = format_timestamp(status.block_time) if status.block_time else "N/A"
    average = f"{stats.average_balance:.6f}" if stats.count > 0 else "0"

    return "\n".join([
        "A2P Protocol Health Check:",
        "",
        "System Status: ✅ Healthy",
        f"Network: {report.network}",
        f"Current Slot: {status.slot}",
        f"Block Time: {block_time}",
        *(f"Warning: {warning}" for warning in report.warnings),
        "",
        "Agent Statistics:",
        f"Total Agents: {stats.count}",
        f"Total Balance: {format_amount(stats.total_balance)} SOL",
        f"Average Balance: {average} SOL",
        "",
        "MCP Server: ✅ Running",
        f"Version: {SERVER_VERSION}",
        f"Tools Available: {report.tool_count}",
        "",
        "All systems operational!",
    ])
