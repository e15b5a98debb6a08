from datetime import UTC, datetime

import pytest


@pytest.fixture(scope="session")
def _warehouse_domain(request):
    """Initialize the warehouse domain once per session."""
    from warehouse.domain import warehouse

    warehouse.init()
    return warehouse


@pytest.fixture(scope="session", autouse=True)
def setup_db(_warehouse_domain):
    from warehouse.utils.db import drop_db, setup_db

    setup_db(_warehouse_domain)

    yield

    drop_db(_warehouse_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_warehouse_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _warehouse_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def end_time():
    return datetime(2026, 3, 2, 17, 30, tzinfo=UTC)


@pytest.fixture()
def make_product():
    from warehouse.product.management import CreateProduct
    from protean import current_domain

    def _make(**overrides):
        defaults = {
            "title": "Steel bolt M8",
            "unit_of_measurement": "unit",
            "material_type": "steel",
        }
        defaults.update(overrides)
        return current_domain.process(CreateProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def make_supplier():
    from warehouse.supplier.registration import RegisterSupplier
    from protean import current_domain

    def _make(**overrides):
        defaults = {"name": "Aceros del Sur", "ruc": "20123456789", "district": "Ate"}
        defaults.update(overrides)
        return current_domain.process(RegisterSupplier(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def receive(make_supplier):
    """Record an entry of ``quantity`` units for a product, registering the supplier on first use."""
    from warehouse.entry.receiving import RecordEntry
    from warehouse.supplier.supplier import Supplier
    from protean import current_domain

    def _receive(product_id, quantity, ruc="20123456789", price=1.5, start_time=None):
        if current_domain.repository_for(Supplier).find_by_ruc(ruc) is None:
            make_supplier(ruc=ruc)
        command = RecordEntry(
            product_id=product_id,
            ruc=ruc,
            quantity=quantity,
            price=price,
            start_time=start_time or datetime.now(UTC),
        )
        return current_domain.process(command, asynchronous=False)

    return _receive
