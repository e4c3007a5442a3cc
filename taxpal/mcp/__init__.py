"""TaxPal MCP server."""
