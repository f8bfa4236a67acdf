"""User service: accounts, workspaces, membership and join requests."""

__version__ = "0.1.0"
