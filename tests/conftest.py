import os
from pathlib import Path

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
    """Select the configuration overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.pop("PAYMENT_GATEWAY", None)
    os.environ.pop("STRIPE_SECRET_KEY", None)


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
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    bed = DomainFixture(storefront)
    bed.setup()
    setup_db(storefront)
    yield bed
    drop_db(storefront)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Start every test from an empty store holding only the demo catalogue."""
    from storefront.catalogue.seed import seed_catalogue
    from storefront.domain import storefront
    from storefront.payments.gateway import reset_gateway
    from storefront.utils.db import reset_data
    from storefront.utils.logging import clear_context

    reset_data(storefront)
    seed_catalogue()

    yield

    reset_gateway()
    clear_context()


@pytest.fixture()
def app():
    from storefront.api import create_app

    return create_app()


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture()
def fake_gateway():
    from storefront.payments.gateway import set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


@pytest.fixture()
def user_id():
    """A registered user, created through the domain."""
    from protean import current_domain
    from storefront.identity.passwords import hash_password
    from storefront.identity.registration import RegisterUser

    return current_domain.process(
        RegisterUser(
            email="jane.doe@example.com",
            password_hash=hash_password("secret123"),
            first_name="Jane",
            last_name="Doe",
        ),
        asynchronous=False,
    )


@pytest.fixture()
def signed_in(client):
    """A TestClient whose cookie jar holds a session of a freshly registered user."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": "shopper@example.com",
            "password": "secret123",
            "firstName": "Sam",
            "lastName": "Shopper",
        },
    )
    assert response.status_code == 200
    return client
