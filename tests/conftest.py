import pytest

from dls_api import store


@pytest.fixture(autouse=True)
def clean_store():
    store.clear()
    yield
    store.clear()
