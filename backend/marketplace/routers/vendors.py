from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import require_role
from marketplace.clock import utcnow
from marketplace.db.database import get_session
from marketplace.schemas.actor import Actor, Role
from marketplace.schemas.vendor import VendorStats
from marketplace.services.vendor_stats import aggregate

router = APIRouter(prefix="/api/v1", tags=["vendors"])


@router.get("/vendor/dashboard", response_model=VendorStats)
async def vendor_dashboard(
    actor: Actor = Depends(require_role(Role.VENDOR)),
    session: AsyncSession = Depends(get_session),
):
    return await aggregate(session, actor.vendor_id, utcnow())


@router.get("/vendors/{vendor_id}/stats", response_model=VendorStats)
async def vendor_stats(
    vendor_id: str,
    _actor: Actor = Depends(require_role(Role.ADMIN)),
    session: AsyncSession = Depends(get_session),
):
    return await aggregate(session, vendor_id, utcnow())
