from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import require_role
from marketplace.clock import utcnow
from marketplace.db import queries
from marketplace.db.database import get_session
from marketplace.schemas.actor import Actor, Role
from marketplace.schemas.boost import BoostRequestCreate, BoostRequestOut
from marketplace.services.boosts import approve_boost_request, create_boost_request, reject_boost_request

router = APIRouter(prefix="/api/v1/boost-requests", tags=["boosts"])


@router.post("", response_model=BoostRequestOut, status_code=201)
async def request_boost(
    body: BoostRequestCreate,
    actor: Actor = Depends(require_role(Role.VENDOR)),
    session: AsyncSession = Depends(get_session),
):
    return await create_boost_request(session, actor.vendor_id, actor.id, body.product_id, body.plan_id)


@router.get("", response_model=list[BoostRequestOut])
async def list_boost_requests(
    _actor: Actor = Depends(require_role(Role.ADMIN)),
    session: AsyncSession = Depends(get_session),
):
    return await queries.fetch_boost_requests(session)


@router.post("/{request_id}/approve", response_model=BoostRequestOut)
async def approve(
    request_id: str,
    _actor: Actor = Depends(require_role(Role.ADMIN)),
    session: AsyncSession = Depends(get_session),
):
    return await approve_boost_request(session, request_id, utcnow())


@router.post("/{request_id}/reject", response_model=BoostRequestOut)
async def reject(
    request_id: str,
    _actor: Actor = Depends(require_role(Role.ADMIN)),
    session: AsyncSession = Depends(get_session),
):
    return await reject_boost_request(session, request_id, utcnow())
