import pytest
from fastapi.testclient import TestClient

from api import create_app
from library import Library


@pytest.fixture
def lib():
    # Fresh seeded store for every test
    return Library()


@pytest.fixture
def empty_lib():
    return Library(seed=False)


@pytest.fixture
def client(lib):
    with TestClient(create_app(lib)) as test_client:
        yield test_client
