"""
Acting user passed into every coordinator call.

Authorization is a parameter: the external identity layer authenticates the
caller and hands the core an Actor with an explicit role.

Dependencies: None (pure domain layer)
System role: Capability model for curriculum operations
"""

import enum
from dataclasses import dataclass
from uuid import UUID


class Role(str, enum.Enum):
    """Capabilities a caller can hold."""

    LEARNER = "learner"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller identity and capability."""

    user_id: UUID
    role: Role = Role.LEARNER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
