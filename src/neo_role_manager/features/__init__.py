"""Feature modules for neo-role-manager."""
