"""Unit price resolution for a configured product.

The same rules price both the catalogue display and the order total, so a
shopper never sees one price and pays another:

* start from the product's base price;
* a selected size that declares a price replaces it;
* a selected color that declares a price replaces it again (color wins);
* the product-level discount percentage is applied last.
"""

from decimal import ROUND_HALF_UP, Decimal

from storefront.catalogue.product.product import AttributeAxis, Product

CENTS = Decimal("0.01")


def resolve_price(product: Product, size: str | None = None, color: str | None = None) -> float:
    """Return the pre-discount unit price for the selected size and color.

    Selections that do not match a declared attribute leave the price alone;
    rejecting them is the order aggregator's job.
    """
    price = product.base_price

    for axis, selection in ((AttributeAxis.SIZE, size), (AttributeAxis.COLOR, color)):
        attribute = product.attribute_for(axis, selection)
        if attribute is not None and attribute.price is not None:
            price = attribute.price

    return price


def apply_discount(unit_price, discount_percentage):
    """Reduce ``unit_price`` by ``discount_percentage`` percent.

    Works on floats and Decimals alike; the result keeps the input's type.
    """
    return unit_price * (1 - discount_percentage / 100)


def round_money(amount) -> float:
    """Round half-up to two decimals, the way the gateway expects amounts."""
    return float(Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP))


def quote_price(product: Product, size: str | None = None, color: str | None = None) -> dict:
    """Price a single unit for display."""
    unit_price = Decimal(str(resolve_price(product, size, color)))
    discounted = apply_discount(unit_price, Decimal(str(product.discount_percentage or 0)))
    return {
        "unit_price": round_money(unit_price),
        "discount_percentage": product.discount_percentage or 0.0,
        "discounted_price": round_money(discounted),
    }
