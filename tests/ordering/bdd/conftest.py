"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import load_order


@pytest.fixture()
def catalogue():
    """The product under test and the attributes declared on it."""
    return {"product": None, "attributes": []}


@pytest.fixture()
def outcome():
    return {"order_id": None, "total": None, "error": None}


@given(parsers.cfparse('a product "{name}" priced {price:f} with a {discount:d} percent discount'))
def _(catalogue, name, price, discount):
    catalogue["product"] = {"name": name, "base_price": price, "discount_percentage": float(discount)}


@given(parsers.cfparse('the product offers {axis} "{value}" at {price:f}'))
def _(catalogue, axis, value, price):
    catalogue["attributes"].append({"axis": axis, "value": value, "price": price})


@given(parsers.re(r'the product offers (?P<axis>size|color) "(?P<value>[^"]+)"$'))
def _(catalogue, axis, value):
    catalogue["attributes"].append({"axis": axis, "value": value})


@pytest.fixture()
def product_id(catalogue, add_product):
    return add_product(attributes=catalogue["attributes"], **catalogue["product"])


@then(parsers.cfparse("the order total is {total:f}"))
def _(outcome, total):
    assert outcome["error"] is None
    assert outcome["total"] == total
    assert load_order(outcome["order_id"]).total_amount == total


@then(parsers.cfparse('the order status is "{status}"'))
def _(outcome, status):
    assert load_order(outcome["order_id"]).status == status


@then("no order was created")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().items == []
