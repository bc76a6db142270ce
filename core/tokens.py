# =============================================================================
# core/tokens.py  -  Opaque token sources for agent ids and display addresses
# =============================================================================
#
# The registry takes two independent zero-argument callables: one for agent
# ids and one for display addresses.  Tests pass deterministic sources (e.g.
# sequential counters) instead of these defaults.
#
# A display address LOOKS like a Solana public key (44 base58 characters) but
# is just random text.  It is never used as a ledger key.
# =============================================================================

import secrets
import uuid
from datetime import datetime, timezone
from typing import Callable

TokenSource = Callable[[], str]
Clock = Callable[[], datetime]

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
DISPLAY_ADDRESS_LENGTH = 44


def new_agent_id() -> str:
    """Return a fresh UUID4 string."""
    return str(uuid.uuid4())


def new_display_address() -> str:
    """Return a random 44-character base58-alphabet token."""
    return "".join(secrets.choice(BASE58_ALPHABET) for _ in range(DISPLAY_ADDRESS_LENGTH))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
