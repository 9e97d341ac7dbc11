import pytest

from stablepay.config import Settings
from tests.fakes import FakeEndpoint, make_djed_endpoint, make_gluon_endpoint


@pytest.fixture
def djed_endpoint() -> FakeEndpoint:
    return make_djed_endpoint()


@pytest.fixture
def gluon_endpoint() -> FakeEndpoint:
    return make_gluon_endpoint()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(log_level="DEBUG", rpc_timeout_seconds=5.0)
