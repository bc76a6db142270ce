# =============================================================================
# core/health.py  -  Health check aggregation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Combines ONE external read (current slot + its block time, via a
#   NetworkProbe) with statistics computed from the registry.
#
# STATUS RULES:
#   - get_slot() raises           ->  "unhealthy", error message surfaced
#   - get_block_time() raises     ->  still "healthy", block time shown as N/A
#   - get_block_time() is None    ->  still "healthy", block time shown as N/A
#
# The average balance is total / count, and exactly 0 for an empty registry.
# =============================================================================

import logging
from typing import TYPE_CHECKING, Iterable

from core.models import HEALTHY, UNHEALTHY, Agent, HealthReport, NetworkStatus, RegistryStats

if TYPE_CHECKING:
    from core.registry import AgentRegistry
    from core.solana import NetworkProbe

logger = logging.getLogger(__name__)


def compute_stats(agents: Iterable[Agent]) -> RegistryStats:
    """Return count, sum and mean of the given agents' balances."""
    count = 0
    total = 0.0
    for agent in agents:
        count += 1
        total += agent.balance
    average = total / count if count > 0 else 0.0
    return RegistryStats(count=count, total_balance=total, average_balance=average)


def check_health(
    probe: "NetworkProbe",
    registry: "AgentRegistry",
    network: str,
    tool_count: int,
) -> HealthReport:
    """Probe the cluster and summarize the registry.

    Never raises for probe failures; they are reported in the HealthReport.
    """
    stats = registry.stats()

    try:
        slot = probe.get_slot()
    except Exception as e:
        logger.warning("Health check failed: %s", e)
        return HealthReport(
            status=UNHEALTHY,
            network=network,
            stats=stats,
            tool_count=tool_count,
            error=str(e) or type(e).__name__,
        )

    warnings = []
    try:
        block_time = probe.get_block_time(slot)
    except Exception as e:
        logger.info("Block time for slot %s unavailable: %s", slot, e)
        block_time = None
        warnings.append(f"Block time unavailable: {e}")

    return HealthReport(
        status=HEALTHY,
        network=network,
        stats=stats,
        tool_count=tool_count,
        network_status=NetworkStatus(slot=slot, block_time=block_time),
        warnings=warnings,
    )
