"""Product aggregate root with its purchasable attribute options."""

import json
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from storefront.catalogue.product.events import ProductAdded, ProductRated
from storefront.domain import storefront
from storefront.utils.clock import utcnow


class AttributeAxis(Enum):
    """The axes a product can be configured along."""

    SIZE = "size"
    COLOR = "color"


@storefront.entity(part_of="Product")
class ProductAttribute:
    """One selectable value on an axis, optionally overriding the product price."""

    axis: String(required=True, choices=AttributeAxis)
    value: String(required=True, max_length=100)
    price: Float(min_value=0.0)
    stock: Integer(min_value=0, default=0)


@storefront.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    file_id: String(max_length=255)
    gallery: Text()
    base_price: Float(required=True, min_value=0.0)
    discount_percentage: Float(min_value=0.0, max_value=100.0, default=0.0)
    stock: Integer(min_value=0, default=0)
    rating: Float(min_value=0.0, max_value=5.0, default=0.0)
    attributes: HasMany(ProductAttribute)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @invariant.post
    def attribute_values_are_unique_per_axis(self):
        seen = set()
        for attribute in self.attributes:
            key = (attribute.axis, attribute.value)
            if key in seen:
                raise ValidationError(
                    {"attributes": [f"Duplicate {attribute.axis} value '{attribute.value}'"]}
                )
            seen.add(key)

    @invariant.post
    def gallery_must_be_a_json_list(self):
        if not self.gallery:
            return
        try:
            entries = json.loads(self.gallery)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"gallery": ["Gallery must be valid JSON"]}) from None
        if not isinstance(entries, list):
            raise ValidationError({"gallery": ["Gallery must be a JSON list"]})

    @classmethod
    def create(
        cls,
        name,
        base_price,
        description=None,
        category=None,
        file_id=None,
        gallery=None,
        discount_percentage=0.0,
        stock=0,
        attributes=None,
    ):
        now = utcnow()
        product = cls(
            name=name,
            description=description,
            category=category,
            file_id=file_id,
            gallery=json.dumps(gallery) if isinstance(gallery, list) else gallery,
            base_price=base_price,
            discount_percentage=discount_percentage or 0.0,
            stock=stock or 0,
            attributes=[ProductAttribute(**attribute) for attribute in attributes or []],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                base_price=base_price,
                discount_percentage=product.discount_percentage,
                created_at=now,
            )
        )
        return product

    def attributes_on(self, axis: AttributeAxis) -> list:
        return [a for a in self.attributes if a.axis == axis.value]

    def attribute_for(self, axis: AttributeAxis, value):
        """The declared attribute matching ``value`` on ``axis``, or None."""
        if not value:
            return None
        return next((a for a in self.attributes_on(axis) if a.value == value), None)

    def gallery_entries(self) -> list:
        return json.loads(self.gallery) if self.gallery else []

    def update_rating(self, rating: float):
        self.rating = rating
        self.updated_at = utcnow()
        self.raise_(ProductRated(product_id=self.id, rating=rating))
