from datetime import timedelta
from decimal import Decimal

from marketplace.services.vendor_stats import compute_vendor_stats, vendor_revenue


class TestVendorRevenue:
    """Tests for per-vendor revenue attribution."""

    def test_shared_delivered_order_split_by_vendor(self, make_order):
        """Test each vendor only earns their own lines of a shared order."""
        order = make_order("o", status="Delivered", items=[("v1-p", 2, "10.00"), ("v2-p", 1, "20.00")])

        assert order.total_amount == Decimal("40.00")
        assert vendor_revenue([order], {"v1-p"}) == Decimal("20.00")
        assert vendor_revenue([order], {"v2-p"}) == Decimal("20.00")

    def test_undelivered_orders_earn_nothing(self, make_order):
        orders = [
            make_order("o1", status="Shipped", items=[("p", 1, "50.00")]),
            make_order("o2", status="Cancelled", items=[("p", 1, "50.00")]),
        ]
        assert vendor_revenue(orders, {"p"}) == Decimal("0.00")

    def test_uses_price_at_purchase(self, make_order):
        """Test revenue comes from the snapshot, not the live product price."""
        order = make_order("o", status="Delivered", items=[("p", 3, "9.99")])
        assert vendor_revenue([order], {"p"}) == Decimal("29.97")


class TestComputeVendorStats:
    """Tests for dashboard aggregation."""

    def test_full_dashboard(self, make_vendor, make_product, make_order, now):
        vendor = make_vendor("v1")
        products = [
            make_product("p1", vendor_id="v1", stock=3, name="Budget Phone"),
            make_product("p2", vendor_id="v1", stock=40, name="Earbuds"),
            make_product("p3", vendor_id="v1", stock=5, name="Charger"),
        ]
        orders = [
            make_order("o1", status="Pending", items=[("p1", 1, "100.00")], order_date=now - timedelta(days=3)),
            make_order("o2", status="Delivered", items=[("p2", 2, "25.00"), ("other", 1, "999.00")],
                       order_date=now - timedelta(days=1)),
            make_order("o3", status="Pending", items=[("other", 1, "5.00")]),
        ]

        stats = compute_vendor_stats(vendor, products, orders, now)

        assert stats.product_count == 3
        assert stats.total_orders == 2
        assert stats.pending_orders == 1
        assert stats.total_revenue == Decimal("50.00")
        assert [p.id for p in stats.low_stock] == ["p1", "p3"]
        assert [o.id for o in stats.recent_orders] == ["o2", "o1"]
        assert stats.subscription_active is True

    def test_empty_vendor(self, make_vendor, now):
        """Test a vendor with nothing gets zeroed stats, not an error."""
        stats = compute_vendor_stats(make_vendor("v1"), [], [], now)

        assert stats.product_count == 0
        assert stats.total_orders == 0
        assert stats.pending_orders == 0
        assert stats.total_revenue == Decimal("0.00")
        assert stats.low_stock == []
        assert stats.recent_orders == []

    def test_expired_subscription(self, make_vendor, now):
        vendor = make_vendor("v1", subscription_end_date=now - timedelta(days=1))
        assert compute_vendor_stats(vendor, [], [], now).subscription_active is False

    def test_recent_orders_capped(self, make_vendor, make_product, make_order, now):
        products = [make_product("p", vendor_id="v1")]
        orders = [
            make_order(f"o{i}", items=[("p", 1, "1.00")], order_date=now - timedelta(hours=i))
            for i in range(8)
        ]

        stats = compute_vendor_stats(make_vendor("v1"), products, orders, now, recent_count=5)

        assert [o.id for o in stats.recent_orders] == ["o0", "o1", "o2", "o3", "o4"]

    def test_recent_orders_show_own_subtotal(self, make_vendor, make_product, make_order, now):
        """Test a shared order's dashboard row carries only this vendor's lines."""
        products = [make_product("p", vendor_id="v1")]
        orders = [make_order("o", items=[("p", 2, "25.00"), ("other", 1, "999.00")])]

        stats = compute_vendor_stats(make_vendor("v1"), products, orders, now)

        assert orders[0].total_amount == Decimal("1049.00")
        assert stats.recent_orders[0].total_amount == Decimal("50.00")
