"""
Pytest configuration for the offline test run
Contract suites use the in-process fake unless --live is given
"""

import pytest

from user_contract.config import TestConfig, get_config
from user_contract.core.rest_client import RestClient
from user_contract.core.test_orchestrator import UserContractOrchestrator
from user_contract.errors import ConfigurationError
from tests.fake_api import FAKE_APP_ID, FAKE_BASE_URL, FakeUserApi

SEED_USERS = 57


@pytest.fixture(scope="session")
def session_fake_api() -> FakeUserApi:
    return FakeUserApi(seed=SEED_USERS)


@pytest.fixture(scope="session")
def contract_config(request) -> TestConfig:
    if request.config.getoption("--live"):
        try:
            return get_config()
        except ConfigurationError as e:
            pytest.skip(f"User API not configured: {e}")
    return TestConfig(api_base_url=FAKE_BASE_URL, app_id=FAKE_APP_ID)


@pytest.fixture(scope="session")
def contract_transport(request, session_fake_api):
    if request.config.getoption("--live"):
        return None
    return session_fake_api.transport


# === UNIT TEST FIXTURES ===

@pytest.fixture
def offline_config() -> TestConfig:
    return TestConfig(api_base_url=FAKE_BASE_URL, app_id=FAKE_APP_ID, max_concurrent_cleanups=3)


@pytest.fixture
def fake_api() -> FakeUserApi:
    """Fresh fake per test"""
    return FakeUserApi(seed=SEED_USERS)


@pytest.fixture
def rest_client(offline_config, fake_api) -> RestClient:
    return RestClient(offline_config, transport=fake_api.transport)


@pytest.fixture
def orchestrator(offline_config, rest_client) -> UserContractOrchestrator:
    return UserContractOrchestrator(offline_config, rest_client=rest_client)
