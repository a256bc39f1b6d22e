"""
User Models
===========

Identity context passed with every command, and the owner profile fields
the workflows read or write.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """Principal roles. ADMIN is the reviewer role."""
    USER = "user"
    ADMIN = "admin"


class VerificationStatus(str, Enum):
    """Owner-facing verification status kept on the user profile."""
    NONE = "none"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Principal:
    """Resolved caller identity (user id and role)."""
    user_id: str
    role: UserRole = UserRole.USER

    @property
    def is_reviewer(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass
class UserProfile:
    """Subset of the owner profile used by the workflows."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: UserRole = UserRole.USER
    verification_status: VerificationStatus = VerificationStatus.NONE

    @property
    def is_reviewer(self) -> bool:
        return self.role == UserRole.ADMIN
