import pytest

from turismoflow.infrastructure.repository import InMemoryCrmRepository


@pytest.fixture
def repository():
    return InMemoryCrmRepository()
