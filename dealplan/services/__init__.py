"""Plan engine services."""
