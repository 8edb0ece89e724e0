"""
Error taxonomy for contract verification
"""

from typing import Any, List, Optional


class ContractViolation(AssertionError):
    """A response did not match its expected contract"""


class UnexpectedStatusError(ContractViolation):
    """HTTP call returned a status the caller did not tolerate"""

    def __init__(self, method: str, url: str, status_code: int, body: Any = None):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"{method} {url} returned unexpected status {status_code}: {body}")


class CleanupError(ContractViolation):
    """One or more teardown deletions ended outside the tolerated statuses"""

    def __init__(self, failures: List[Any]):
        self.failures = failures
        details = "; ".join(str(failure) for failure in failures)
        super().__init__(f"Cleanup failed for {len(failures)} resource(s): {details}")


class PaginationPreconditionError(RuntimeError):
    """The collection is too small for the page-size assertion being attempted"""

    def __init__(self, total: int, limit: int, message: Optional[str] = None):
        self.total = total
        self.limit = limit
        super().__init__(message or f"Collection holds {total} users, need at least {limit} for an exact-length page")


class ConfigurationError(ValueError):
    """Harness configuration is missing or invalid"""
