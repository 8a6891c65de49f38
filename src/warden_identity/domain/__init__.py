"""Domain layer for identity: users, roles and shared utilities."""
