"""Tests for Product aggregate creation, attributes and invariants."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.product.events import ProductAdded, ProductRated
from storefront.catalogue.product.product import AttributeAxis, Product


def _tee(**overrides):
    defaults = {
        "name": "Classic Tee",
        "base_price": 100.0,
        "attributes": [
            {"axis": "size", "value": "M"},
            {"axis": "size", "value": "XL", "price": 120.0, "stock": 3},
            {"axis": "color", "value": "black"},
        ],
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_sets_defaults(self):
        product = Product.create(name="Mug", base_price=12.5)
        assert product.discount_percentage == 0.0
        assert product.rating == 0.0
        assert product.stock == 0
        assert len(product.attributes) == 0
        assert product.created_at is not None

    def test_create_raises_product_added(self):
        product = _tee(discount_percentage=10.0)
        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].base_price == 100.0
        assert events[0].discount_percentage == 10.0

    def test_gallery_list_is_stored_as_json(self):
        product = Product.create(name="Mug", base_price=12.5, gallery=["a", "b"])
        assert product.gallery_entries() == ["a", "b"]

    def test_discount_above_hundred_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Mug", base_price=12.5, discount_percentage=150.0)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Mug", base_price=-1.0)


class TestProductAttributes:
    def test_attributes_on_axis(self):
        product = _tee()
        assert [a.value for a in product.attributes_on(AttributeAxis.SIZE)] == ["M", "XL"]
        assert [a.value for a in product.attributes_on(AttributeAxis.COLOR)] == ["black"]

    def test_attribute_for_matching_value(self):
        attribute = _tee().attribute_for(AttributeAxis.SIZE, "XL")
        assert attribute.price == 120.0
        assert attribute.stock == 3

    def test_attribute_for_unknown_value(self):
        assert _tee().attribute_for(AttributeAxis.SIZE, "XXL") is None

    def test_attribute_for_empty_selection(self):
        assert _tee().attribute_for(AttributeAxis.SIZE, None) is None

    def test_duplicate_value_on_axis_rejected(self):
        with pytest.raises(ValidationError):
            _tee(attributes=[{"axis": "size", "value": "M"}, {"axis": "size", "value": "M"}])

    def test_same_value_on_different_axes_allowed(self):
        product = _tee(attributes=[{"axis": "size", "value": "one"}, {"axis": "color", "value": "one"}])
        assert len(product.attributes) == 2


class TestProductRating:
    def test_update_rating(self):
        product = _tee()
        product.update_rating(4.5)
        assert product.rating == 4.5
        assert any(isinstance(e, ProductRated) for e in product._events)
