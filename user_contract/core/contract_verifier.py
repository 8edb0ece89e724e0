"""
Response contract verification
Reusable shape predicates for success and error responses of the User API
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from user_contract.errors import ContractViolation
from user_contract.models import ErrorResponse, PaginatedListResponse, User
from user_contract.resources import EMAIL_ALREADY_USED, ResourceConfig, get_resource_config


@dataclass
class ValidationResult:
    """Outcome of one contract check"""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)
        return self

    def raise_if_invalid(self, context: str = "Contract") -> None:
        if not self.valid:
            raise ContractViolation(f"{context} validation failed: {'; '.join(self.errors)}")


class ContractVerifier:
    """Shape and field predicates applied to response bodies"""

    def __init__(self, resource: Optional[ResourceConfig] = None):
        self.resource = resource or get_resource_config("user")

    @staticmethod
    def verify_model(body: Any, model, label: str) -> ValidationResult:
        """Field types of the body against a pydantic model"""
        result = ValidationResult()
        try:
            model.model_validate(body)
        except ValidationError as e:
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"]) or "body"
                result.add_error(f"{label} {location}: {error['msg']}")
        return result

    @staticmethod
    def verify_status(status_code: int, expected: Iterable[int]) -> ValidationResult:
        result = ValidationResult()
        expected = tuple(expected)
        if status_code not in expected:
            result.add_error(f"HTTP {status_code}, expected one of {list(expected)}")
        return result

    @staticmethod
    def verify_contains(body: Any, expected: Dict[str, Any]) -> ValidationResult:
        """Structural containment: every expected field present with an equal value"""
        result = ValidationResult()

        if not isinstance(body, dict):
            result.add_error(f"Response body is not an object: {body!r}")
            return result

        for key, expected_value in expected.items():
            if key not in body:
                result.add_error(f"Missing field: {key}")
            elif body[key] != expected_value:
                result.add_error(f"{key} = {body[key]!r}, expected {expected_value!r}")

        return result

    def verify_list_shape(self, body: Any) -> ValidationResult:
        """Every element of an unfiltered list exposes exactly the preview keys"""
        result = ValidationResult()
        expected_keys = self.resource.list_item_keys

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            result.add_error(f"data should be a list, got {type(data).__name__}")
            return result

        if not data:
            result.add_warning("List is empty, item shape not checked")

        for index, item in enumerate(data):
            if not isinstance(item, dict):
                result.add_error(f"data[{index}] is not an object")
                continue
            keys = set(item)
            missing = expected_keys - keys
            extra = keys - expected_keys
            if missing:
                result.add_error(f"data[{index}] missing keys: {sorted(missing)}")
            if extra:
                result.add_error(f"data[{index}] unexpected keys: {sorted(extra)}")

        return result

    def verify_list_envelope(self, body: Any) -> ValidationResult:
        return self.verify_model(body, PaginatedListResponse, "List")

    def verify_created(self, body: Any, submitted: Dict[str, Any]) -> ValidationResult:
        result = self.verify_contains(body, submitted)
        if not isinstance(body, dict) or not body.get("id"):
            result.add_error("No id assigned on create")
            return result
        return result.merge(self.verify_model(body, User, "User"))

    def verify_read_agrees(self, body: Any, known: Dict[str, Any]) -> ValidationResult:
        """A read must contain every field of the last known local representation"""
        return self.verify_contains(body, known)

    def verify_deleted(self, body: Any, resource_id: str) -> ValidationResult:
        return self.verify_contains(body, {"id": resource_id})

    @staticmethod
    def verify_error_shape(body: Any, field_errors: Optional[Dict[str, str]] = None) -> ValidationResult:
        result = ValidationResult()

        if not isinstance(body, dict) or "error" not in body:
            result.add_error(f"Missing error marker in body: {body!r}")
            return result
        result.merge(ContractVerifier.verify_model(body, ErrorResponse, "Error"))

        for field_name, message in (field_errors or {}).items():
            data = body.get("data")
            if not isinstance(data, dict) or field_name not in data:
                result.add_error(f"Missing field-level error: data.{field_name}")
            elif data[field_name] != message:
                result.add_error(f"data.{field_name} = {data[field_name]!r}, expected {message!r}")

        return result

    def verify_duplicate_email(self, status_code: int, body: Any) -> ValidationResult:
        result = self.verify_status(status_code, (400,))
        return result.merge(self.verify_error_shape(body, {"email": EMAIL_ALREADY_USED}))

    def verify_not_found_on_read(self, status_code: int) -> ValidationResult:
        """GET of a missing id answers the API's own not-found status (400), not 404"""
        return self.verify_status(status_code, (self.resource.get_not_found_status,))

    @staticmethod
    def verify_read_fails(status_code: int) -> ValidationResult:
        """A read of a deleted id must not succeed"""
        result = ValidationResult()
        if 200 <= status_code < 300:
            result.add_error(f"Read succeeded with HTTP {status_code}, resource should be gone")
        return result

    def verify_not_found_on_delete(self, status_code: int) -> ValidationResult:
        return self.verify_status(status_code, (self.resource.delete_not_found_status,))
