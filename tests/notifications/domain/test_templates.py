"""Tests for notification templates."""

import pytest
from notifications.templates import get_template
from notifications.templates.product_status import ProductStatusTemplate
from notifications.templates.shop_status import ShopStatusTemplate


class TestShopStatusTemplate:
    def test_approval(self):
        content = ShopStatusTemplate.render({"status": "active", "shop_name": "Paro Greens", "owner_name": "Dema"})
        assert content["subject"] == "Shop Approved"
        assert "Hi Dema" in content["body"]
        assert '"Paro Greens" has been approved' in content["body"]

    def test_rejection_with_message(self):
        content = ShopStatusTemplate.render(
            {"status": "rejected", "shop_name": "Paro Greens", "message": "Address could not be verified"}
        )
        assert content["subject"] == "Shop Rejected"
        assert "Address could not be verified" in content["body"]

    def test_other_status_uses_default_message(self):
        content = ShopStatusTemplate.render({"status": "suspended", "shop_name": "Paro Greens"})
        assert content["subject"] == "Shop Status Updated"
        assert "Shop suspended by admin" in content["body"]


class TestProductStatusTemplate:
    def test_subject_names_product(self):
        content = ProductStatusTemplate.render({"status": "active", "product_name": "Red Rice"})
        assert content["subject"] == "Product Active: Red Rice"
        assert "now active" in content["body"]

    def test_note_is_optional(self):
        content = ProductStatusTemplate.render({"status": "rejected", "product_name": "Red Rice"})
        assert "Note:" not in content["body"]


class TestRegistry:
    def test_lookup(self):
        assert get_template("ShopStatusChanged") is ShopStatusTemplate
        assert get_template("ProductStatusChanged") is ProductStatusTemplate

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            get_template("Newsletter")
