"""Product creation — command and handler."""

import json

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    file_id: String(max_length=255)
    gallery: Text()  # JSON list of file ids
    base_price: Float(required=True, min_value=0.0)
    discount_percentage: Float(min_value=0.0, max_value=100.0, default=0.0)
    stock: Integer(min_value=0, default=0)
    attributes: Text()  # JSON list of {"axis", "value", "price", "stock"}


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            base_price=command.base_price,
            description=command.description,
            category=command.category,
            file_id=command.file_id,
            gallery=command.gallery,
            discount_percentage=command.discount_percentage,
            stock=command.stock,
            attributes=json.loads(command.attributes) if command.attributes else [],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
