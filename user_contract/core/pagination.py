"""
Pagination boundary calculation

Expected page counts are never hard-coded: ``total`` changes as other runs
create and delete users, so every boundary is derived from a freshly observed
total.
"""

from typing import Any, Dict

from user_contract.errors import PaginationPreconditionError
from user_contract.core.contract_verifier import ValidationResult

DEFAULT_PAGE = 0
DEFAULT_LIMIT = 20


def last_page(total: int, limit: int) -> int:
    """Zero-based index of the last page that can contain data"""
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    if total < 0:
        raise ValueError(f"total must not be negative, got {total}")
    return total // limit


def first_empty_page(total: int, limit: int) -> int:
    return last_page(total, limit) + 1


def require_population(total: int, limit: int) -> None:
    """Exact-length page assertions need at least ``limit`` users to exist"""
    if total < limit:
        raise PaginationPreconditionError(total, limit)


def verify_page_echo(body: Dict[str, Any], page: int, limit: int) -> ValidationResult:
    result = ValidationResult()

    if not isinstance(body, dict):
        result.add_error(f"List response is not an object: {body!r}")
        return result

    for key, expected in (("page", page), ("limit", limit)):
        if key not in body:
            result.add_error(f"Missing pagination field: {key}")
        elif body[key] != expected:
            result.add_error(f"{key} = {body[key]!r}, expected {expected!r}")

    if "total" not in body:
        result.add_warning("Missing pagination field: total")

    return result


def verify_empty_beyond_last_page(body: Dict[str, Any], page: int, limit: int) -> ValidationResult:
    """A page past the last one must be empty while still echoing page and limit"""
    result = verify_page_echo(body, page, limit)

    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        result.add_error(f"data should be a list, got {type(data).__name__}")
    elif data:
        result.add_error(f"Expected empty data beyond last page {page - 1}, got {len(data)} item(s)")

    return result


def verify_page_size(body: Dict[str, Any], limit: int) -> ValidationResult:
    """Caller must have confirmed the population with require_population first"""
    result = ValidationResult()

    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        result.add_error(f"data should be a list, got {type(data).__name__}")
    elif len(data) != limit:
        result.add_error(f"Expected {limit} item(s) on page, got {len(data)}")

    return result
