from unittest.mock import MagicMock

import pytest
from django.core.cache import cache
from django.test import Client

from dashboard.page_cache import PageCache
from dashboard.validation.errors import PersistenceError
from tests.factories import DEFAULT_PASSWORD, UserFactory



class RecordingRepository:
    """Stands in for the SQL repositories and records every statement request."""

    def __init__(self, table, fail=False, rowcount=1):
        self.table = table
        self.fail = fail
        self.rowcount = rowcount
        self.calls = []

    def _record(self, operation, args):
        self.calls.append((operation, args))
        if self.fail:
            raise PersistenceError(operation, self.table)
        return self.rowcount

    def insert(self, *args):
        return self._record("insert", args)

    def update(self, *args):
        return self._record("update", args)

    def delete(self, *args):
        return self._record("delete", args)


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def invoice_repository():
    return RecordingRepository("invoices")


@pytest.fixture
def failing_invoice_repository():
    return RecordingRepository("invoices", fail=True)


@pytest.fixture
def user_repository():
    return RecordingRepository("users")


@pytest.fixture
def failing_user_repository():
    return RecordingRepository("users", fail=True)


@pytest.fixture
def page_cache_double():
    return MagicMock(spec=PageCache)


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def user(db):
    return UserFactory(name="testuser", email="test@example.com")


@pytest.fixture
def user_password():
    return DEFAULT_PASSWORD


@pytest.fixture
def authenticated_client(client, user):
    client.force_login(user)
    return client
