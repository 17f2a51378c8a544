"""
Boost request lifecycle: a vendor requests a boost against a plan, an admin
approves or rejects it after confirming payment offline.
"""
import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db import queries
from marketplace.exceptions import AlreadyResolvedError, NotFoundError
from marketplace.models import BoostRequest, Product
from marketplace.schemas.boost import BoostRequestStatus

logger = logging.getLogger(__name__)


async def create_boost_request(
    session: AsyncSession,
    vendor_id: str,
    user_id: str | None,
    product_id: str,
    plan_id: str,
) -> BoostRequest:
    """Open a pending boost request, snapshotting the plan's duration and price."""
    plan = await queries.fetch_boost_plan(session, plan_id)
    if plan is None or not plan.is_active:
        raise NotFoundError("Boost plan not found")

    product = await queries.fetch_product(session, product_id)
    if product is None or product.vendor_id != vendor_id:
        raise NotFoundError("Product not found")

    request = BoostRequest(
        product_id=product.id,
        vendor_id=vendor_id,
        user_id=user_id,
        plan_duration_days=plan.duration_days,
        plan_price=plan.price,
        request_status=BoostRequestStatus.PENDING.value,
    )
    session.add(request)
    await session.commit()
    await session.refresh(request)

    logger.info(f"Boost requested: product={product_id} plan={plan_id} days={plan.duration_days}")
    return request


async def _load_pending(session: AsyncSession, request_id: str) -> BoostRequest:
    request = await queries.fetch_boost_request(session, request_id, for_update=True)
    if request is None:
        raise NotFoundError("Boost request not found")
    if request.request_status != BoostRequestStatus.PENDING.value:
        raise AlreadyResolvedError(f"Boost request already {request.request_status}")
    return request


async def approve_boost_request(session: AsyncSession, request_id: str, now: datetime) -> BoostRequest:
    """Approve a pending request and boost its product in one transaction.

    The status write and the product write commit together or not at all.

    Raises:
        NotFoundError: request or its product no longer exists
        AlreadyResolvedError: request is not pending
    """
    try:
        request = await _load_pending(session, request_id)

        product = None
        if request.product_id is not None:
            product = await session.get(Product, request.product_id, with_for_update=True)
        if product is None:
            raise NotFoundError("Boosted product not found")

        request.request_status = BoostRequestStatus.APPROVED.value
        request.updated_at = now
        product.is_boosted = True
        product.boosted_until = now + timedelta(days=request.plan_duration_days)

        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info(f"Boost request {request_id} approved: product {product.id} boosted until {product.boosted_until}")
    return request


async def reject_boost_request(session: AsyncSession, request_id: str, now: datetime) -> BoostRequest:
    """Reject a pending request; the product's boost fields are left alone."""
    try:
        request = await _load_pending(session, request_id)
        request.request_status = BoostRequestStatus.REJECTED.value
        request.updated_at = now
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info(f"Boost request {request_id} rejected")
    return request
