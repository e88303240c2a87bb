"""MCP tools. Each module registers one tool with @mcp.tool()."""
