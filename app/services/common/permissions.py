# app/services/common/permissions.py
"""
Permission and authorization utilities.

Roles are coarse (admin, warden, student). Wardens are additionally scoped
to the single block they are assigned to.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from app.models.base.enums import Block, UserRole

from .errors import AuthorizationError


class PermissionDenied(AuthorizationError):
    """Raised when a user lacks required permissions."""

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        role: Optional[UserRole] = None,
        required_permission: Optional[str] = None,
    ) -> None:
        super().__init__(message, required_permission=required_permission)
        self.user_id = user_id
        self.role = role


@dataclass(frozen=True)
class Principal:
    """
    The acting user in the service layer.

    Attributes:
        user_id: Identifier of the acting account
        role: User's role
        block: Assigned block, meaningful for wardens only
    """
    user_id: str
    role: UserRole
    block: Optional[Block] = None

    def has_any_role(self, roles: Iterable[UserRole]) -> bool:
        return self.role in set(roles)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_warden(self) -> bool:
        return self.role == UserRole.WARDEN


def role_in(principal: Principal, allowed_roles: Iterable[UserRole]) -> bool:
    return principal.has_any_role(allowed_roles)


def require_role(
    principal: Principal,
    allowed_roles: Iterable[UserRole],
    *,
    error_message: Optional[str] = None,
) -> None:
    """
    Assert that principal has one of the allowed roles.

    Raises:
        PermissionDenied: If principal lacks required role
    """
    allowed_roles = list(allowed_roles)
    if not role_in(principal, allowed_roles):
        roles_str = ", ".join(r.value for r in allowed_roles)
        msg = error_message or (
            f"User {principal.user_id} with role '{principal.role.value}' "
            f"does not have one of required roles: {roles_str}"
        )
        raise PermissionDenied(msg, user_id=principal.user_id, role=principal.role)


def can_access_block(principal: Principal, block: Block) -> bool:
    """Admins reach every block; wardens only their own; students none."""
    if principal.is_admin:
        return True
    if principal.is_warden:
        return principal.block is not None and principal.block == block
    return False


def require_block_access(
    principal: Principal,
    block: Block,
    *,
    error_message: Optional[str] = None,
) -> None:
    """
    Assert that principal may manage records of block.

    Raises:
        PermissionDenied: If the block is outside the principal's scope
    """
    if not can_access_block(principal, block):
        msg = error_message or (
            f"User {principal.user_id} with role '{principal.role.value}' "
            f"cannot manage block {getattr(block, 'value', block)}"
        )
        raise PermissionDenied(msg, user_id=principal.user_id, role=principal.role)
