"""
Pytest fixtures and hooks for User API contract testing
Every test gets its own orchestrator whose teardown drains the created users
"""

import os
from typing import AsyncGenerator, Optional

import httpx
import pytest

from user_contract.config import TestConfig, get_config
from user_contract.core.rest_client import RestClient
from user_contract.core.test_orchestrator import UserContractOrchestrator
from user_contract.errors import ConfigurationError


# === CONFIGURATION ===

@pytest.fixture(scope="session")
def contract_config() -> TestConfig:
    """Validated configuration; skips the session when the API is not configured"""
    try:
        return get_config()
    except ConfigurationError as e:
        pytest.skip(f"User API not configured: {e}")


@pytest.fixture(scope="session")
def contract_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport override for the REST client; None means the real network"""
    return None


@pytest.fixture(scope="session")
def shared_rest_client(contract_config, contract_transport) -> RestClient:
    """Shared REST client; it holds no per-test state"""
    return RestClient(contract_config, transport=contract_transport)


@pytest.fixture(scope="function")
async def clean_orchestrator(contract_config, shared_rest_client) -> AsyncGenerator[UserContractOrchestrator, None]:
    """Per-test orchestrator with its own resource tracker, drained at teardown"""
    orch = UserContractOrchestrator(contract_config, rest_client=shared_rest_client)

    await orch.setup()
    yield orch
    await orch.teardown()


# === OPTIONS AND MARKERS ===

def pytest_addoption(parser):
    """Add custom command line options"""
    group = parser.getgroup("user-contract")
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run contract suites against the configured remote API"
    )
    group.addoption(
        "--smoke-only",
        action="store_true",
        default=False,
        help="Run only smoke tests"
    )


def pytest_configure(config):
    for marker, description in (
        ("smoke", "critical contract checks only"),
        ("crud", "create/read/update/delete contract checks"),
        ("pagination", "list paging boundary checks"),
        ("contract", "scenarios issued against the User API"),
        ("regression", "full regression coverage"),
    ):
        config.addinivalue_line("markers", f"{marker}: {description}")

    if os.getenv("CI"):
        config.option.tb = "short"


def pytest_collection_modifyitems(config, items):
    """Add markers based on test names"""
    for item in items:
        name = item.name.lower()
        if any(word in name for word in ("crud_cycle", "create_user", "duplicate")):
            item.add_marker(pytest.mark.smoke)
        if any(word in name for word in ("create", "read", "get", "update", "delete")):
            item.add_marker(pytest.mark.crud)
        if any(word in name for word in ("page", "pagination", "limit")):
            item.add_marker(pytest.mark.pagination)
        item.add_marker(pytest.mark.regression)


def pytest_runtest_setup(item):
    if item.config.getoption("--smoke-only") and not item.get_closest_marker("smoke"):
        pytest.skip("Skipping non-smoke test")
