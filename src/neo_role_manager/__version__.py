"""Version information for neo-role-manager."""

__version__ = "0.1.0"
