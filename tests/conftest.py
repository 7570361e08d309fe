import pytest
from aptkey_core.context import BaseContext
from tests.fakes import LISTING


@pytest.fixture
def context():
    return BaseContext()


@pytest.fixture
def listing():
    return LISTING
