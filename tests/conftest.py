import os
from pathlib import Path
from uuid import uuid4

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay from domain.toml before the domain is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()

    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)
    yield bed
    drop_db(storefront)

    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Catalogue fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def session_id():
    return f"sess-{uuid4()}"


@pytest.fixture()
def color():
    from protean import current_domain
    from storefront.catalogue.color.management import CreateColor

    color_id = current_domain.process(CreateColor(name="Indigo", hex_code="#3F51B5"), asynchronous=False)
    return color_id


@pytest.fixture()
def category():
    from protean import current_domain
    from storefront.catalogue.category.management import CreateCategory

    return current_domain.process(CreateCategory(name="Shirts", slug="shirts"), asynchronous=False)


@pytest.fixture()
def make_product(category, color):
    """Factory creating a product priced from a decimal string, e.g. ``"10.00"``."""
    from protean import current_domain
    from storefront.catalogue.product.management import CreateProduct
    from storefront.shared.money import to_cents

    def _make(price="10.00", name="Linen Shirt", sku=None, stock=10):
        command = CreateProduct(
            name=name,
            price_cents=to_cents(price),
            sku=sku or f"SKU-{uuid4().hex[:8]}",
            stock=stock,
            category_id=category,
            color_id=color,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_package(make_product):
    """Factory creating a package bundling freshly created products."""
    import json

    from protean import current_domain
    from storefront.catalogue.package.management import CreatePackage
    from storefront.shared.money import to_cents

    def _make(price="25.50", name="Weekend Bundle", product_ids=None):
        product_ids = product_ids or [make_product(price="5.00")]
        command = CreatePackage(
            name=name,
            price_cents=to_cents(price),
            items=json.dumps([{"product_id": pid, "quantity": 1} for pid in product_ids]),
        )
        return current_domain.process(command, asynchronous=False)

    return _make
