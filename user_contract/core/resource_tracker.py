"""
Resource lifecycle tracking
Records every user created during a test and deletes them all at teardown
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from user_contract.errors import CleanupError

logger = logging.getLogger(__name__)


@dataclass
class CleanupFailure:
    """A single teardown deletion that did not end in a tolerated status"""
    resource_id: str
    status_code: Optional[int] = None
    error: Optional[str] = None

    def __str__(self) -> str:
        if self.error:
            return f"{self.resource_id}: {self.error}"
        return f"{self.resource_id}: HTTP {self.status_code}"


@dataclass
class CleanupReport:
    """Outcome of one drain() call"""
    attempted: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    already_absent: List[str] = field(default_factory=list)
    failures: List[CleanupFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise CleanupError(self.failures)


class ResourceTracker:
    """Ordered set of created resource ids, scoped to one test"""

    def __init__(self, ok_statuses: Tuple[int, ...] = (200, 404), max_concurrency: int = 5):
        self._ids: List[str] = []
        self.ok_statuses = ok_statuses
        self.max_concurrency = max_concurrency

    def record(self, resource_id: str) -> None:
        """Track an id for cleanup; duplicates are harmless to re-delete"""
        self._ids.append(str(resource_id))

    def record_multiple(self, resource_ids: List[str]) -> None:
        for resource_id in resource_ids:
            self.record(resource_id)

    @property
    def tracked(self) -> List[str]:
        return list(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, resource_id: object) -> bool:
        return str(resource_id) in self._ids

    async def _delete_one(self, rest_client, resource_id: str, semaphore: asyncio.Semaphore):
        async with semaphore:
            return await rest_client.delete_user(resource_id, fail_on_status_code=False)

    async def drain(self, rest_client) -> CleanupReport:
        """Delete every tracked id, then reset the set regardless of outcomes"""
        ids = list(self._ids)
        report = CleanupReport(attempted=ids)
        if not ids:
            return report

        logger.info("🧹 Cleaning up %d tracked user(s)", len(ids))
        semaphore = asyncio.Semaphore(self.max_concurrency)

        try:
            outcomes = await asyncio.gather(
                *(self._delete_one(rest_client, resource_id, semaphore) for resource_id in ids),
                return_exceptions=True,
            )
        finally:
            self._ids = []

        for resource_id, outcome in zip(ids, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                report.failures.append(CleanupFailure(resource_id, error=f"{type(outcome).__name__}: {outcome}"))
                logger.error("❌ Cleanup of %s raised %s", resource_id, outcome)
            elif outcome.status_code not in self.ok_statuses:
                report.failures.append(CleanupFailure(resource_id, status_code=outcome.status_code))
                logger.error("❌ Cleanup of %s returned HTTP %s", resource_id, outcome.status_code)
            elif outcome.status_code == 200:
                report.deleted.append(resource_id)
            else:
                report.already_absent.append(resource_id)

        logger.info("   deleted=%d already_absent=%d failed=%d",
                    len(report.deleted), len(report.already_absent), len(report.failures))
        return report
