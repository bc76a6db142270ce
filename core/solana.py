# =============================================================================
# core/solana.py  -  Read-only Solana JSON-RPC probe
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs the single external read the server needs: the cluster's current
#   slot and the block time of that slot.  Nothing here signs or submits
#   transactions.
#
# HOW IT WORKS:
#   JSON-RPC 2.0 over HTTP POST, using urllib with a finite timeout:
#     {"jsonrpc": "2.0", "id": 1, "method": "getSlot",
#      "params": [{"commitment": "confirmed"}]}
#     {"jsonrpc": "2.0", "id": 2, "method": "getBlockTime", "params": [slot]}
#
# FAILURES:
#   Network errors, timeouts, unparseable bodies and JSON-RPC error objects
#   all raise ExternalUnavailable.  Messages describe the method and reason
#   but never the endpoint URL (it may embed an API key).
# =============================================================================

import itertools
import json
import logging
import socket
import urllib.error
import urllib.request
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from core.errors import ExternalUnavailable

logger = logging.getLogger(__name__)


class NetworkProbe(Protocol):
    """Anything that can report the current slot and a slot's block time."""

    def get_slot(self) -> int: ...

    def get_block_time(self, slot: int) -> Optional[datetime]: ...


class SolanaRpcClient:
    """Minimal JSON-RPC client for the two read calls used by the health check.

    Args:
        rpc_url: HTTP(S) JSON-RPC endpoint.
        timeout: Seconds to wait for each request.
        commitment: Commitment level passed to getSlot.
    """

    def __init__(self, rpc_url: str, timeout: float = 10.0, commitment: str = "confirmed"):
        self._rpc_url = rpc_url
        self.timeout = timeout
        self.commitment = commitment
        self._ids = itertools.count(1)

    def get_slot(self) -> int:
        result = self._call("getSlot", [{"commitment": self.commitment}])
        if not isinstance(result, int) or isinstance(result, bool):
            raise ExternalUnavailable(f"getSlot returned an unexpected result: {result!r}")
        return result

    def get_block_time(self, slot: int) -> Optional[datetime]:
        """Return the slot's block time as a UTC datetime, or None if unknown."""
        result = self._call("getBlockTime", [slot])
        if result is None:
            return None
        if not isinstance(result, (int, float)) or isinstance(result, bool):
            raise ExternalUnavailable(f"getBlockTime returned an unexpected result: {result!r}")
        return datetime.fromtimestamp(result, tz=timezone.utc)

    def _call(self, method: str, params: list) -> Any:
        body = json.dumps({
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }).encode()
        req = urllib.request.Request(
            self._rpc_url,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST",
        )

        logger.debug("RPC %s %s", method, params)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                payload = json.loads(response.read().decode())
        except urllib.error.HTTPError as e:
            raise ExternalUnavailable(f"{method} failed: HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise ExternalUnavailable(f"{method} timed out after {self.timeout:g}s") from e
            raise ExternalUnavailable(f"{method} failed: {e.reason}") from e
        except (socket.timeout, TimeoutError) as e:
            raise ExternalUnavailable(f"{method} timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise ExternalUnavailable(f"{method} failed: {e}") from e
        except ValueError as e:
            raise ExternalUnavailable(f"{method} returned a malformed response") from e

        if not isinstance(payload, dict):
            raise ExternalUnavailable(f"{method} returned a malformed response")
        if payload.get("error") is not None:
            error = payload["error"]
            if isinstance(error, dict):
                message = error.get("message", "unknown error")
                code = error.get("code")
                raise ExternalUnavailable(f"{method} error {code}: {message}")
            raise ExternalUnavailable(f"{method} error: {error}")
        if "result" not in payload:
            raise ExternalUnavailable(f"{method} returned no result")
        return payload["result"]
