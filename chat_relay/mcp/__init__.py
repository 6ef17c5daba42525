"""
MCP server surface for the relay.
"""
