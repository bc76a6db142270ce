# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# between the registry, the health check and the tool layer.  They carry no
# business rules; the registry (core/registry.py) owns all mutation.
#
# TIMESTAMPS:
#   All datetimes are timezone-aware UTC.  The tool layer renders them as
#   ISO-8601 with millisecond precision and a trailing "Z".
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


# Shared by tool output (tools/formatting.py) and error messages (core/errors.py).
def format_amount(value: float) -> str:
    """Render a SOL amount without a trailing ".0" for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# -----------------------------------------------------------------------------
# Agent - one registered entity
# -----------------------------------------------------------------------------
# Created once by AgentRegistry.create(), mutated only through
# AgentRegistry.set_balance() / AgentRegistry.transfer(), never deleted.
# -----------------------------------------------------------------------------
@dataclass
class Agent:
    """A registered agent with a name, capability tags and a SOL balance."""

    id: str                            # Opaque, unique for the registry's lifetime
    name: str                          # Display label, non-empty
    capabilities: list[str]            # Free-text tags, input order preserved
    balance: float                     # SOL, >= 0 on every transfer path
    display_address: str               # Opaque token, display only
    created_at: datetime               # Set once
    updated_at: datetime               # Refreshed on every balance mutation


# -----------------------------------------------------------------------------
# RegistryStats - aggregates reported by the health check
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RegistryStats:
    """Count, sum and mean of all agent balances at one point in time."""

    count: int
    total_balance: float
    average_balance: float             # Exactly 0 when count == 0


# -----------------------------------------------------------------------------
# NetworkStatus - the one external read the server performs
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class NetworkStatus:
    """Current slot of the Solana cluster and the block time of that slot."""

    slot: int
    block_time: Optional[datetime] = None  # None when the node cannot provide it


# -----------------------------------------------------------------------------
# HealthReport - output of core.health.check_health()
# -----------------------------------------------------------------------------
@dataclass
class HealthReport:
    """Combined connectivity probe and registry statistics."""

    status: str                        # "healthy" or "unhealthy"
    network: str                       # e.g. "mainnet-beta"
    stats: RegistryStats
    tool_count: int
    network_status: Optional[NetworkStatus] = None
    error: Optional[str] = None        # Set only when status == "unhealthy"
    warnings: list[str] = field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return self.status == HEALTHY

