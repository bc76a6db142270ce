# =============================================================================
# tools/__init__.py
# =============================================================================
# This package exposes the A2P registry as MCP tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/:
#     - schemas.py     argument shapes (pydantic), one model per tool
#     - dispatch.py    name lookup, validation, registry calls, error capture
#     - formatting.py  fixed-order text payloads
#     - mcp_server.py  FastMCP wiring and the stdio entry point
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT hold agent state (the AgentRegistry does)
#   - They do NOT know about Google ADK (they're framework-agnostic)
# =============================================================================
