"""Domain initialization and configuration.

A single Protean domain hosts every storefront context (catalogue, ordering,
payments, notifications, support). Providers, brokers and the event store are
configured in ``domain.toml``; ``PROTEAN_ENV`` selects the overlay.

Protean's traversal only loads modules in this directory and its immediate
subdirectories, while storefront elements live one level deeper
(``ordering/order/order.py``). ``init_domain()`` imports them explicitly and
then initializes the domain; every entry point goes through it.
"""

import importlib

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

ELEMENT_MODULES = (
    "storefront.catalogue.product.events",
    "storefront.catalogue.product.product",
    "storefront.catalogue.product.creation",
    "storefront.catalogue.review.review",
    "storefront.catalogue.review.submission",
    "storefront.ordering.order.events",
    "storefront.ordering.order.order",
    "storefront.ordering.order.placement",
    "storefront.ordering.order.webhook",
    "storefront.ordering.order.abandonment",
    "storefront.notifications.verification.verification",
    "storefront.notifications.verification.issuance",
    "storefront.notifications.verification.confirmation",
    "storefront.notifications.verification.purge",
    "storefront.support.ticket.events",
    "storefront.support.ticket.ticket",
    "storefront.support.ticket.management",
)

_initialized = False


def register_elements() -> None:
    """Import every module that declares aggregates, entities, events, commands or handlers."""
    for module in ELEMENT_MODULES:
        importlib.import_module(module)


def init_domain() -> Domain:
    """Register all elements and initialize the domain once per process."""
    global _initialized

    if not _initialized:
        register_elements()
        storefront.init(traverse=False)
        _initialized = True
        logger.info(
            "Domain initialized",
            aggregates=len(storefront.registry.aggregates),
            events=len(storefront.registry.events),
            commands=len(storefront.registry.commands),
        )
    return storefront
