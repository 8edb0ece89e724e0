"""
Lightweight API-only testing configuration
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

from user_contract.errors import ConfigurationError

# Load environment variables
load_dotenv()


@dataclass
class TestConfig:
    """User API contract testing configuration"""

    # Remote API
    api_base_url: str = field(default_factory=lambda: os.getenv('USER_API_BASE_URL', 'https://dummyapi.io/data/v1'))
    app_id: str = field(default_factory=lambda: os.getenv('USER_API_APP_ID', ''))
    request_timeout: float = field(default_factory=lambda: float(os.getenv('USER_API_TIMEOUT', '30')))

    # Test data marking
    test_data_prefix: str = field(default_factory=lambda: os.getenv('TEST_DATA_PREFIX', 'CONTRACT_TEST'))
    email_domain: str = field(default_factory=lambda: os.getenv('TEST_EMAIL_DOMAIN', 'example.com'))

    # Concurrency Control
    max_concurrent_cleanups: int = field(default_factory=lambda: int(os.getenv('MAX_CONCURRENT_CLEANUPS', '5')))

    # Performance reporting thresholds (seconds)
    create_operation_threshold: float = field(default_factory=lambda: float(os.getenv('PERF_THRESHOLD_CREATE_OPERATION', '3.0')))
    read_operation_threshold: float = field(default_factory=lambda: float(os.getenv('PERF_THRESHOLD_READ_OPERATION', '2.0')))

    __test__ = False

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if not self.api_base_url:
            errors.append("USER_API_BASE_URL is required")
        elif not self.api_base_url.startswith(("http://", "https://")):
            errors.append(f"USER_API_BASE_URL must be an http(s) URL, got {self.api_base_url!r}")

        if not self.app_id:
            errors.append("USER_API_APP_ID is required for the app-id header")

        if self.request_timeout <= 0:
            errors.append("USER_API_TIMEOUT must be positive")

        if self.max_concurrent_cleanups < 1:
            errors.append("MAX_CONCURRENT_CLEANUPS must be at least 1")

        return errors

    @property
    def is_live(self) -> bool:
        """Whether an app id is configured for the remote API"""
        return bool(self.app_id)


def get_config(**overrides) -> TestConfig:
    """Get validated test configuration"""
    config = TestConfig(**overrides)
    errors = config.validate()

    if errors:
        raise ConfigurationError(f"Configuration errors: {', '.join(errors)}")

    return config
