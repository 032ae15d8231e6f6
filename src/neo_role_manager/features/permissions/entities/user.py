"""User entity as seen by the role manager (read-only membership view)."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """A user account that belongs to one or more roles."""

    id: str
    user_name: str
    email: Optional[str] = None

    def __str__(self) -> str:
        return self.user_name
