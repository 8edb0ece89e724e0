#!/usr/bin/env python3
"""
User API Contract Testing Suite - Command line runner
"""

import argparse
import asyncio
import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional

from user_contract.config import get_config
from user_contract.core.resource_tracker import ResourceTracker
from user_contract.core.rest_client import RestClient
from user_contract.core.test_orchestrator import UserContractOrchestrator
from user_contract.errors import ConfigurationError, ContractViolation

logger = logging.getLogger("user_contract")

# Relative to the working directory; the suite ships with the source checkout, not the package
DEFAULT_SUITE_PATH = Path("tests") / "contract"


async def run_connectivity_test() -> int:
    """Test basic connectivity and app-id acceptance"""
    print("🔍 Testing Connectivity...")

    config = get_config()
    print(f"   API Base URL: {config.api_base_url}")

    client = RestClient(config)
    response = await client.list_users(limit=5, fail_on_status_code=False)

    if not response.success:
        print(f"   ❌ List returned HTTP {response.status_code}: {response.body}")
        return 1

    print(f"   ✅ API reachable ({response.duration:.2f}s), total users: {response.json_field('total')}")
    return 0


async def run_crud_cycle(strict_not_found: bool = False) -> int:
    """Run one full CRUD cycle and print timings"""
    print("\n🧪 Running CRUD Cycle...")

    config = get_config()
    orch = UserContractOrchestrator(config, rest_client=RestClient(config))
    await orch.setup()

    try:
        cycle = await orch.execute_crud_cycle(strict_not_found=strict_not_found)
        print(f"   ✅ CRUD cycle passed ({cycle.total_duration:.2f}s)")
        print(f"   Read after delete returned HTTP {cycle.verify_delete_status}")
        status = 0
    except ContractViolation as e:
        print(f"   ❌ CRUD cycle failed: {e}")
        status = 1
    finally:
        report = await orch.drain()
        if not report.success:
            for failure in report.failures:
                print(f"   ❌ Cleanup failed: {failure}")

    print("\n📊 Performance Summary:")
    for operation, stats in orch.get_performance_summary().items():
        if not isinstance(stats, dict):
            continue
        threshold = config.create_operation_threshold if operation == "CREATE" else config.read_operation_threshold
        flag = "✅" if stats["max_duration"] <= threshold else "⚠️ "
        print(f"   {flag} {operation}: {stats['count']} call(s), avg {stats['avg_duration']:.2f}s, "
              f"max {stats['max_duration']:.2f}s")

    return status if report.success else 1


async def run_cleanup(ids: List[str]) -> int:
    """Delete users left behind by an aborted run"""
    config = get_config()
    client = RestClient(config)
    tracker = ResourceTracker(ok_statuses=client.resource.cleanup_ok_statuses,
                              max_concurrency=config.max_concurrent_cleanups)
    tracker.record_multiple(ids)

    report = await tracker.drain(client)

    print("\n📊 Cleanup Summary:")
    print(f"   Deleted: {len(report.deleted)}")
    print(f"   Already absent: {len(report.already_absent)}")
    if report.failures:
        print(f"   ⚠️  Errors: {len(report.failures)}")
        for failure in report.failures:
            print(f"      • {failure}")
        return 1

    print("   ✅ No errors")
    return 0


def run_suite(suite: Path, smoke_only: bool, extra: List[str]) -> int:
    """Run the contract suite under pytest against the live API"""
    if not suite.exists():
        print(f"❌ Contract suite not found at {suite}; run from a source checkout or pass --suite")
        return 2

    command = [sys.executable, "-m", "pytest", str(suite), "--live", "-v"]
    if smoke_only:
        command.append("--smoke-only")
    command.extend(extra)

    print(f"🚀 {' '.join(command)}")
    return subprocess.call(command)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog="user-contract",
        description="User API contract verification harness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  user-contract check                      # Connectivity probe
  user-contract cycle                      # One CRUD cycle with timings
  user-contract cleanup 60d0fe4f5311236168a109ca
  user-contract run --smoke-only           # Live pytest suite (from a checkout), smoke only
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Verify the API is reachable with the configured app-id")
    cycle = subparsers.add_parser("cycle", help="Run a full create/read/update/delete cycle")
    cycle.add_argument("--strict", action="store_true",
                       help="Require the read after delete to answer the observed GET not-found status")

    cleanup = subparsers.add_parser("cleanup", help="Delete users by id (200 and 404 both count as done)")
    cleanup.add_argument("ids", nargs="+", help="User ids to delete")

    run = subparsers.add_parser("run", help="Run the live contract suite under pytest")
    run.add_argument("--smoke-only", action="store_true", help="Run only smoke tests")
    run.add_argument("--suite", type=Path, default=DEFAULT_SUITE_PATH,
                     help="Contract suite directory (default: %(default)s)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_argument_parser()
    args, extra = parser.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if extra and args.command != "run":
        parser.error(f"unrecognized arguments: {' '.join(extra)}")

    start_time = time.time()
    try:
        if args.command == "check":
            return asyncio.run(run_connectivity_test())
        if args.command == "cycle":
            return asyncio.run(run_crud_cycle(args.strict))
        if args.command == "cleanup":
            return asyncio.run(run_cleanup(args.ids))
        return run_suite(args.suite, args.smoke_only, extra)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 2
    finally:
        logger.debug("Finished in %.2fs", time.time() - start_time)


if __name__ == "__main__":
    sys.exit(main())
