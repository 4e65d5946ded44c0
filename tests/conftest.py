import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred
    to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import init_domain

    init_domain().domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
ADMIN_PASSWORD = "letmein"


@pytest.fixture()
def settings():
    from storefront.config import Settings

    return Settings(admin_password=ADMIN_PASSWORD, public_base_url="https://shop.example.com")


@pytest.fixture()
def gateway():
    from storefront.payments.gateway.fake_adapter import FakeGateway

    return FakeGateway()


@pytest.fixture()
def mailer():
    from storefront.notifications.channel.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


@pytest.fixture()
def checkout_service(gateway, mailer, settings):
    from storefront.ordering.checkout.service import CheckoutService

    return CheckoutService(gateway=gateway, mailer=mailer, settings=settings)


@pytest.fixture()
def make_client(settings, gateway, mailer):
    """Build a TestClient over a bare app with the given routers, like the real app wires them."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from storefront.shared.http import register_error_handlers

    def _make(*routers):
        app = FastAPI()
        app.state.settings = settings
        app.state.gateway = gateway
        app.state.mailer = mailer
        for router in routers:
            app.include_router(router)
        register_error_handlers(app)
        return TestClient(app)

    return _make


@pytest.fixture()
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}


# ---------------------------------------------------------------------------
# Catalogue data
# ---------------------------------------------------------------------------
@pytest.fixture()
def add_product():
    """Add a product through the AddProduct command and return its id."""
    from protean import current_domain

    from storefront.catalogue.product.creation import AddProduct

    def _add(name="Classic Tee", base_price=100.0, discount_percentage=0.0, attributes=None, **overrides):
        command = AddProduct(
            name=name,
            base_price=base_price,
            discount_percentage=discount_percentage,
            attributes=json.dumps(attributes or []),
            **overrides,
        )
        return current_domain.process(command, asynchronous=False)

    return _add
