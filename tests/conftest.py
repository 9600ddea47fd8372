import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain

TEST_SESSION_SECRET = "storefront-test-session-secret-0123456789abcdef"


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before any test module imports the domain."""
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
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def settings():
    from storefront.settings import Settings

    return Settings(environment="test", session_secret=TEST_SESSION_SECRET)


@pytest.fixture()
def identity_provider():
    from storefront.identity.provider import FakeIdentityProvider

    return FakeIdentityProvider()


@pytest.fixture()
def app(settings, identity_provider):
    from storefront.app import create_app

    return create_app(settings=settings, identity_provider=identity_provider)


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def signed_in(app, identity_provider):
    """Factory: a TestClient holding a session for the given identity."""
    from storefront.identity.roles import ChangeRole

    def _sign_in(uid="uid-shopper", email="shopper@example.com", admin=False):
        user_client = TestClient(app)
        token = identity_provider.issue_id_token(uid=uid, email=email)
        response = user_client.post("/auth", json={"id_token": token})
        assert response.status_code == 200, response.text
        user_client.account_id = response.json()["user"]["id"]

        if admin:
            current_domain.process(ChangeRole(email=email, role="admin"), asynchronous=False)
        return user_client

    return _sign_in
