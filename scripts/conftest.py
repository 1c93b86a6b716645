import pytest

from fakes import FakeSearchProvider


@pytest.fixture
def provider():
    return FakeSearchProvider()
