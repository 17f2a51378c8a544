from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.clock import utcnow
from marketplace.db import queries
from marketplace.db.database import get_session
from marketplace.exceptions import NotFoundError
from marketplace.schemas.category import CategoryNode
from marketplace.schemas.product import CatalogBuckets, CatalogEntry, ProductOut
from marketplace.services.catalog import classify, is_browsable
from marketplace.services.category_index import build_index
from marketplace.services.promotion import group_flash_sales, resolve_product_promotion

router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/categories/tree", response_model=list[CategoryNode])
async def category_tree(session: AsyncSession = Depends(get_session)):
    categories = await queries.fetch_categories(session)
    return build_index(categories).visible_tree()


@router.get("/catalog/home", response_model=CatalogBuckets)
async def home(session: AsyncSession = Depends(get_session)):
    now = utcnow()
    categories = await queries.fetch_categories(session)
    products = await queries.fetch_products(session)
    flash_sales = await queries.fetch_flash_sales(session)

    return classify(products, flash_sales, build_index(categories), now)


@router.get("/flash-sales", response_model=list[CatalogEntry])
async def active_flash_sales(session: AsyncSession = Depends(get_session)):
    now = utcnow()
    index = build_index(await queries.fetch_categories(session))
    sales = await queries.fetch_flash_sales_in_window(session, now)

    entries = []
    for product_sales in group_flash_sales(sales).values():
        product = product_sales[0].product
        if product is None or not is_browsable(product, index):
            continue
        promotion = resolve_product_promotion(product, product_sales, now)
        if promotion.flash_sale_active:
            entries.append(CatalogEntry(product=ProductOut.model_validate(product), promotion=promotion))
    return entries


@router.get("/products/{product_id}", response_model=CatalogEntry)
async def product_detail(product_id: str, session: AsyncSession = Depends(get_session)):
    now = utcnow()
    product = await queries.fetch_product(session, product_id)
    if product is None:
        raise NotFoundError("Product not found")

    index = build_index(await queries.fetch_categories(session))
    if not is_browsable(product, index):
        raise NotFoundError("Product not found")

    flash_sales = await queries.fetch_flash_sales(session, [product.id])
    promotion = resolve_product_promotion(product, flash_sales, now)
    return CatalogEntry(product=ProductOut.model_validate(product), promotion=promotion)
