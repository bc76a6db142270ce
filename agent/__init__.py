# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK operator agent used by main.py.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is a conversational front-end.  It:
#     1. Receives a request ("move 0.5 SOL from alpha to beta")
#     2. Works out which tools to call and with which agent IDs
#     3. Calls them over MCP
#     4. Reports the outcome in plain words
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the registry (that's core/registry.py)
#   - It is NOT the tool implementations (that's tools/)
#   - It never touches agent state except through MCP tool calls
# =============================================================================
