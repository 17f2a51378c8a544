"""
Actor resolution.

Authentication happens upstream; the gateway forwards the authenticated user
id and role in headers. Vendor actors are resolved to their vendor row here.
"""
import logging

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db import queries
from marketplace.db.database import get_session
from marketplace.exceptions import NotFoundError, UnauthorizedError
from marketplace.schemas.actor import Actor, Role

logger = logging.getLogger(__name__)


def parse_role(value: str | None) -> Role:
    """Unknown or missing roles resolve to anonymous."""
    if not value:
        return Role.ANONYMOUS
    try:
        role = Role(value.strip().lower())
    except ValueError:
        logger.warning(f"Unknown role header '{value}'")
        return Role.ANONYMOUS
    return role


async def get_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> Actor:
    role = parse_role(x_user_role)
    if x_user_id is None:
        return Actor(role=Role.ANONYMOUS)

    if role == Role.VENDOR:
        vendor = await queries.fetch_vendor_by_user(session, x_user_id)
        if vendor is None:
            raise NotFoundError("Could not find vendor profile")
        return Actor(id=x_user_id, role=role, vendor_id=vendor.id)

    return Actor(id=x_user_id, role=role)


def require_role(*roles: Role):
    """Dependency factory rejecting actors outside `roles` (rendered as 404)."""

    async def _require(actor: Actor = Depends(get_actor)) -> Actor:
        if actor.role not in roles:
            raise UnauthorizedError(f"Role {actor.role.value} not in {[r.value for r in roles]}")
        return actor

    return _require
