"""Command-line commands for the GitLab MCP server."""
