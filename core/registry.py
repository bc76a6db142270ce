# =============================================================================
# core/registry.py  -  Agent Registry (create, lookup, balance transfers)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Owns the mapping from agent id to Agent record.  Every read and write of
#   agent state goes through an AgentRegistry instance; nothing else holds a
#   live record.  Lookups hand out COPIES, so a caller that edits the object it
#   got back changes nothing in the registry.
#
# OWNERSHIP:
#   There is no module-level registry.  The MCP server (tools/mcp_server.py)
#   builds one per server instance and passes it to the dispatch facade.
#   State lives for the lifetime of that server process and is lost on exit.
#
# LAYERING OF THE BALANCE OPERATIONS:
#   set_balance()       ->  low-level setter.  Overwrites the balance, no rules.
#   execute_transfer()  ->  business operation.  Enforces existence, a
#                           positive amount and balance >= amount, then debits
#                           and credits in one locked step.  Refusals raise
#                           with the state seen under the lock, and the
#                           returned copies are taken under that same lock.
#   transfer()          ->  the same operation, reporting only True / False.
#   Only the transfer methods guarantee the non-negative balance invariant.
#   Code that moves funds must go through them, never through set_balance().
#
# CONCURRENCY:
#   A single re-entrant lock guards the mapping.  A transfer's debit and
#   credit happen while holding it, so no reader can see one side applied
#   without the other.
# =============================================================================

import logging
import threading
from dataclasses import replace
from typing import Iterable, Optional

from core.errors import InsufficientFunds, InvalidInput, NotFound
from core.health import compute_stats
from core.models import Agent, RegistryStats
from core.tokens import Clock, TokenSource, new_agent_id, new_display_address, utc_now

logger = logging.getLogger(__name__)


def _snapshot(agent: Agent) -> Agent:
    return replace(agent, capabilities=list(agent.capabilities))


class AgentRegistry:
    """In-process store of Agent records.

    Args:
        id_source: Produces a fresh agent id per call.
        address_source: Produces a fresh display address per call.
        clock: Returns the current time as an aware datetime.
    """

    def __init__(
        self,
        id_source: TokenSource = new_agent_id,
        address_source: TokenSource = new_display_address,
        clock: Clock = utc_now,
    ):
        self._id_source = id_source
        self._address_source = address_source
        self._clock = clock
        self._agents: dict[str, Agent] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._agents)

    def create(self, name: str, capabilities: Iterable[str], initial_balance: float) -> Agent:
        """Register a new agent and return a copy of its record.

        Inputs are assumed valid (non-empty name, at least one capability,
        initial_balance >= 0); the tool layer validates them first.

        Raises:
            ValueError: the id source returned an id that is already taken.
        """
        with self._lock:
            agent_id = self._id_source()
            if agent_id in self._agents:
                raise ValueError(f"Generated agent id '{agent_id}' is already registered")

            now = self._clock()
            agent = Agent(
                id=agent_id,
                name=name,
                capabilities=list(capabilities),
                balance=float(initial_balance),
                display_address=self._address_source(),
                created_at=now,
                updated_at=now,
            )
            self._agents[agent_id] = agent
            logger.debug("Registered agent %s (%s)", agent_id, name)
            return _snapshot(agent)

    def get(self, agent_id: str) -> Optional[Agent]:
        """Return a copy of the agent, or None if the id is not registered."""
        with self._lock:
            agent = self._agents.get(agent_id)
            return _snapshot(agent) if agent is not None else None

    def list_all(self) -> list[Agent]:
        """Return copies of every agent, in registration order."""
        with self._lock:
            return [_snapshot(agent) for agent in self._agents.values()]

    def set_balance(self, agent_id: str, new_balance: float) -> bool:
        """Overwrite an agent's balance and refresh its updated_at.

        This is the permissive primitive: it does NOT check that new_balance
        is non-negative.  Use transfer() to move funds between agents.

        Returns:
            True if the agent exists, False (no-op) otherwise.
        """
        with self._lock:
            agent = self._agents.get(agent_id)
            if agent is None:
                return False
            agent.balance = float(new_balance)
            agent.updated_at = self._clock()
            return True

    def execute_transfer(self, from_id: str, to_id: str, amount: float) -> tuple[Agent, Agent]:
        """Move `amount` SOL from one agent to another, all or nothing.

        Succeeds only when both agents exist, amount > 0 and the source
        balance is at least amount.  On success both records share one new
        updated_at.  A self-transfer leaves the balance untouched and
        refreshes updated_at once.

        Returns:
            Copies of the source and destination records, taken under the
            same lock hold as the transfer itself.

        Raises:
            NotFound: either id is not registered (source checked first).
            InvalidInput: amount is not greater than zero.
            InsufficientFunds: the source balance is below amount.
        """
        with self._lock:
            source = self._agents.get(from_id)
            if source is None:
                raise NotFound(from_id)
            destination = self._agents.get(to_id)
            if destination is None:
                raise NotFound(to_id)
            if not amount > 0:
                raise InvalidInput(f"Transfer amount must be greater than 0, got {amount}")
            if source.balance < amount:
                raise InsufficientFunds(source.id, source.name, source.balance, amount)

            now = self._clock()
            if source is not destination:
                source.balance -= amount
                destination.balance += amount
                destination.updated_at = now
            source.updated_at = now
            logger.debug("Transferred %s SOL from %s to %s", amount, from_id, to_id)
            return _snapshot(source), _snapshot(destination)

    def transfer(self, from_id: str, to_id: str, amount: float) -> bool:
        """execute_transfer() reduced to a flag.

        Returns:
            True if the transfer was applied, False if nothing changed.
        """
        try:
            self.execute_transfer(from_id, to_id, amount)
        except (NotFound, InvalidInput, InsufficientFunds):
            return False
        return True

    def stats(self) -> RegistryStats:
        """Count, total and mean balance over one consistent snapshot."""
        with self._lock:
            return compute_stats(self._agents.values())
