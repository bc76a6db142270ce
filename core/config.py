# =============================================================================
# core/config.py  -  Process-wide settings
# =============================================================================
#
# Settings are read ONCE at startup from environment variables (a .env file is
# loaded into the environment by the entry points via python-dotenv) and are
# immutable afterwards.
#
#   A2P_NETWORK       mainnet-beta | devnet | testnet   (default mainnet-beta)
#   A2P_RPC_URL       JSON-RPC endpoint; defaults to the network's public node
#   A2P_RPC_TIMEOUT   seconds to wait for one RPC round trip (default 10)
#   A2P_LOG_LEVEL     logging level name (default INFO)
#
# None of these values are ever echoed back in tool responses.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

# Public RPC endpoints per cluster (same table as Solana's clusterApiUrl()).
NETWORK_ENDPOINTS: dict[str, str] = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
}

DEFAULT_NETWORK = "mainnet-beta"
DEFAULT_RPC_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Immutable server configuration."""

    network: str = DEFAULT_NETWORK
    rpc_url: str = NETWORK_ENDPOINTS[DEFAULT_NETWORK]
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Raises:
        ConfigurationError: unknown network, non-positive or non-numeric
            timeout, or an unknown log level name.
    """
    env = os.environ if environ is None else environ

    network = env.get("A2P_NETWORK", "").strip() or DEFAULT_NETWORK
    if network not in NETWORK_ENDPOINTS:
        choices = ", ".join(NETWORK_ENDPOINTS)
        raise ConfigurationError(f"Unknown network '{network}'. Expected one of: {choices}")

    rpc_url = env.get("A2P_RPC_URL", "").strip() or NETWORK_ENDPOINTS[network]

    raw_timeout = env.get("A2P_RPC_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            rpc_timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError("A2P_RPC_TIMEOUT must be a number of seconds") from None
        if not rpc_timeout > 0:
            raise ConfigurationError("A2P_RPC_TIMEOUT must be greater than zero")
    else:
        rpc_timeout = DEFAULT_RPC_TIMEOUT

    log_level = (env.get("A2P_LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown log level '{log_level}'")

    return Settings(
        network=network,
        rpc_url=rpc_url,
        rpc_timeout=rpc_timeout,
        log_level=log_level,
    )
