"""MCP stdio server exposing the content store as tools."""
