from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object; ``name`` and ``department`` are already decrypted.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    name: Optional[str]
    department: Optional[str]
    is_active: bool = True
    created_at: Optional[datetime] = None

    def label(self) -> dict:
        """Identity fields used to label report rows."""
        return {
            "id": self.user_id,
            "name": self.name,
            "department": self.department,
            "role": self.role.value,
        }

    def profile(self) -> dict:
        return {**self.label(), "username": self.username}
