"""Userbase: user accounts, token authentication and role-based access."""

__version__ = "0.1.0"
