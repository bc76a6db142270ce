# =============================================================================
# core/errors.py  -  Error taxonomy for the A2P server
# =============================================================================
#
# Every failure a tool call can report maps to one class below.  The dispatch
# facade (tools/dispatch.py) catches A2PError and turns it into an
# error-flagged text response, so none of these ever terminate the server.
#
# ConfigurationError is the exception: it is raised while reading settings at
# startup, before any tool can run.
# =============================================================================

from core.models import format_amount


class A2PError(Exception):
    """Base class for all A2P errors.

    Attributes:
        message: Human-readable description, safe to show to callers.
        code: Stable machine-readable code (e.g. "NOT_FOUND").
    """

    code = "A2P_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidInput(A2PError):
    """Arguments are malformed or out of their declared constraints."""

    code = "INVALID_INPUT"


class NotFound(A2PError):
    """A referenced agent id is not registered."""

    code = "NOT_FOUND"

    def __init__(self, agent_id: str):
        super().__init__(f"Agent with ID '{agent_id}' not found.")
        self.agent_id = agent_id


class InsufficientFunds(A2PError):
    """The transfer source holds less than the requested amount.

    The balance is the one seen when the transfer was refused, not a later
    re-read.
    """

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, agent_id: str, name: str, balance: float, requested: float):
        super().__init__(
            f"Insufficient balance: agent '{name}' ({agent_id}) has "
            f"{format_amount(balance)} SOL, transfer requires {format_amount(requested)} SOL."
        )
        self.agent_id = agent_id
        self.balance = balance
        self.requested = requested


class UnknownOperation(A2PError):
    """The requested tool name is not one of the registered tools."""

    code = "UNKNOWN_OPERATION"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ExternalUnavailable(A2PError):
    """The Solana RPC endpoint failed, timed out, or returned an error."""

    code = "EXTERNAL_UNAVAILABLE"


class ConfigurationError(A2PError):
    """Startup configuration is invalid."""

    code = "CONFIG_ERROR"
