"""Role and user store implementations.

AsyncPG-backed stores for production and in-memory stores for development
and tests.
"""

from .memory_store import InMemoryRoleStore, InMemoryUserStore
from .role_store import AsyncPGRoleStore
from .user_store import AsyncPGUserStore

__all__ = [
    "InMemoryRoleStore",
    "InMemoryUserStore",
    "AsyncPGRoleStore",
    "AsyncPGUserStore",
]
