"""
User-related Pydantic models
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    firstName: str
    lastName: str
    email: str
    title: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class UserUpdate(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    title: Optional[str] = None
    picture: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    picture: Optional[str] = None


class PaginatedListResponse(BaseModel):
    """One page of users"""
    model_config = ConfigDict(extra="allow")

    data: List[Dict[str, Any]]
    total: int
    page: int
    limit: int


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    error: Any
    data: Optional[Dict[str, Any]] = None
