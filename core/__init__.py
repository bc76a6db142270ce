# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the A2P protocol server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any orchestration
#   framework.  Every module here is plain Python: the registry, the health
#   aggregation and the Solana RPC probe can be exercised in a bare REPL.
#
#   The tools/ layer wraps these modules as MCP tools; the agent/ layer only
#   talks to the tools over MCP.
# =============================================================================
