import asyncio
import random
from datetime import timedelta
from decimal import Decimal
from sqlalchemy import select
from marketplace.clock import utcnow
from marketplace.db.database import async_session, db
from marketplace.models import (
    BoostPlan,
    Category,
    FlashSale,
    Order,
    OrderItem,
    Product,
    Vendor,
)


# (name, parent name, visible)
CATEGORIES_DATA = [
    ("Electronics", None, True),
    ("Phones", "Electronics", True),
    ("Laptops", "Electronics", True),
    ("Fashion", None, True),
    ("Shoes", "Fashion", True),
    ("Groceries", None, True),
    ("Seasonal", None, False),
]

# (user id, store name, verified)
VENDORS_DATA = [
    ("user-vendor-accra", "Accra Gadgets", True),
    ("user-vendor-kumasi", "Kumasi Styles", True),
]

# (name, category, vendor store, price, stock)
PRODUCTS_DATA = [
    ("Smartphone X", "Phones", "Accra Gadgets", Decimal("1899.00"), 12),
    ("Budget Phone", "Phones", "Accra Gadgets", Decimal("499.00"), 3),
    ("Ultrabook 14", "Laptops", "Accra Gadgets", Decimal("6499.00"), 4),
    ("Wireless Earbuds", "Electronics", "Accra Gadgets", Decimal("249.99"), 40),
    ("Kente Sneakers", "Shoes", "Kumasi Styles", Decimal("350.00"), 20),
    ("Leather Sandals", "Shoes", "Kumasi Styles", Decimal("120.00"), 2),
    ("Ankara Shirt", "Fashion", "Kumasi Styles", Decimal("180.00"), 15),
    ("Christmas Lights", "Seasonal", "Accra Gadgets", Decimal("60.00"), 50),
    ("Palm Oil 5L", "Groceries", None, Decimal("95.00"), 100),
    ("Rice 25kg", "Groceries", None, Decimal("410.00"), 30),
]

# (name, duration days, price)
BOOST_PLANS_DATA = [
    ("Starter", 3, Decimal("20.00")),
    ("Weekly", 7, Decimal("40.00")),
    ("Monthly", 30, Decimal("120.00")),
]

CUSTOMERS = ["user-customer-ama", "user-customer-kofi", "user-customer-esi"]
STATUSES = ["Pending", "Processing", "Shipped", "Delivered", "Delivered", "Cancelled"]


async def seed_database():
    await db.connect()

    async with async_session() as session:
        # Check if data exists
        result = await session.execute(select(Category).limit(1))
        if result.scalar():
            print("Database already seeded")
            await db.disconnect()
            return

        now = utcnow()

        # Categories: parents first so children can reference them
        category_map = {}
        for name, parent_name, visible in CATEGORIES_DATA:
            parent = category_map.get(parent_name)
            category = Category(name=name, parent_id=parent.id if parent else None, is_visible=visible)
            session.add(category)
            await session.flush()
            category_map[name] = category

        vendor_map = {}
        for user_id, store_name, verified in VENDORS_DATA:
            vendor = Vendor(
                user_id=user_id,
                store_name=store_name,
                is_verified=verified,
                subscription_end_date=now + timedelta(days=180),
            )
            session.add(vendor)
            vendor_map[store_name] = vendor

        for name, days, price in BOOST_PLANS_DATA:
            session.add(BoostPlan(name=name, duration_days=days, price=price, is_active=True))

        await session.flush()  # Get IDs

        products = []
        for name, category_name, store_name, price, stock in PRODUCTS_DATA:
            vendor = vendor_map.get(store_name)
            product = Product(
                name=name,
                price=price,
                stock=stock,
                category_id=category_map[category_name].id,
                vendor_id=vendor.id if vendor else None,
                is_boosted=False,
            )
            products.append(product)
            session.add(product)

        await session.flush()
        product_map = {p.name: p for p in products}

        # One boosted product, one running flash sale, one expired flash sale
        featured = product_map["Ultrabook 14"]
        featured.is_boosted = True
        featured.boosted_until = now + timedelta(days=7)

        session.add(FlashSale(
            product_id=product_map["Kente Sneakers"].id,
            discount_type="percentage",
            discount_value=Decimal("25"),
            start_date=now - timedelta(hours=2),
            end_date=now + timedelta(days=2),
            is_active=True,
            stock_cap=10,
            sales_count=0,
        ))
        session.add(FlashSale(
            product_id=product_map["Wireless Earbuds"].id,
            discount_type="fixed_amount",
            discount_value=Decimal("50"),
            start_date=now - timedelta(days=10),
            end_date=now - timedelta(days=3),
            is_active=True,
        ))

        # Orders that mix vendors
        for _ in range(20):
            picked = random.sample(products, k=random.randint(1, 3))
            placed = now - timedelta(days=random.randint(0, 30))
            order = Order(
                user_id=random.choice(CUSTOMERS),
                status=random.choice(STATUSES),
                order_date=placed,
                updated_at=placed + timedelta(days=random.randint(0, 5)),
                total_amount=Decimal("0.00"),
            )
            total = Decimal("0.00")
            for product in picked:
                quantity = random.randint(1, 3)
                order.items.append(OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=quantity,
                    price_at_purchase=product.price,
                ))
                total += product.price * quantity
            order.total_amount = total
            session.add(order)

        await session.commit()
        print("Database seeded successfully!")

    await db.disconnect()


if __name__ == "__main__":
    asyncio.run(seed_database())
