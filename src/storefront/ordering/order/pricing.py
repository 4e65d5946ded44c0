"""Server-side order total.

Every line is re-priced from the catalogue; whatever total the client shows
is ignored. Arithmetic runs in Decimal and is rounded once, half-up, to two
places at the end.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.catalogue.product.pricing import apply_discount, resolve_price, round_money
from storefront.catalogue.product.product import AttributeAxis, Product
from storefront.errors import InvalidLineItem, InvalidQuantity


@dataclass(frozen=True)
class CartLine:
    """One line as submitted by the shopper."""

    product_id: str
    quantity: int | None = None
    size: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    quantity: int
    size: str | None
    color: str | None
    discounted_unit_price: float
    line_total: float

    def as_item(self) -> dict:
        """The persisted order line; prices stay on the computed result."""
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "size": self.size,
            "color": self.color,
        }


@dataclass(frozen=True)
class OrderTotal:
    total: float
    lines: list[PricedLine]


def _quantity_of(line: CartLine) -> int:
    # A missing quantity means one unit; an explicit non-positive one is an error
    if line.quantity is None:
        return 1
    if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity < 1:
        raise InvalidQuantity(f"Quantity for product {line.product_id} must be a positive integer")
    return line.quantity


def _check_selection(product: Product, axis: AttributeAxis, selection: str | None):
    declared = product.attributes_on(axis)
    if not declared:
        return
    if not selection:
        raise InvalidLineItem(f"Product {product.id} requires a {axis.value}")
    if product.attribute_for(axis, selection) is None:
        raise InvalidLineItem(f"Product {product.id} has no {axis.value} '{selection}'")


def compute_order_total(lines: Iterable[CartLine], lookup: Callable[[str], Product]) -> OrderTotal:
    """Price ``lines`` against the catalogue.

    ``lookup`` returns the product for an id or raises ``ProductNotFound``.
    """
    lines = list(lines)
    if not lines:
        raise InvalidLineItem("No items provided")

    total = Decimal("0")
    priced = []
    for line in lines:
        if not line.product_id:
            raise InvalidLineItem("Each item requires a productId")

        quantity = _quantity_of(line)
        product = lookup(line.product_id)
        _check_selection(product, AttributeAxis.SIZE, line.size)
        _check_selection(product, AttributeAxis.COLOR, line.color)

        unit_price = Decimal(str(resolve_price(product, line.size, line.color)))
        discounted = apply_discount(unit_price, Decimal(str(product.discount_percentage or 0)))
        line_total = discounted * quantity
        total += line_total

        priced.append(
            PricedLine(
                product_id=line.product_id,
                quantity=quantity,
                size=line.size or None,
                color=line.color or None,
                discounted_unit_price=round_money(discounted),
                line_total=round_money(line_total),
            )
        )

    return OrderTotal(total=round_money(total), lines=priced)
