"""Dashboard schemas."""

from enum import Enum

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Record counts for the admin dashboard."""

    students: int
    parents: int
    teachers: int
    requests: int
    pending_requests: int
    users: int
    updates: int


class SearchType(str, Enum):
    ALL = "all"
    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"
    DOCUMENT = "document"


class SearchResult(BaseModel):
    """One search hit. Which optional fields are set depends on ``type``."""

    type: SearchType
    id: str
    name: str
    email: str | None = None
    class_name: str | None = None
    class_level: str | None = None
    parent_name: str | None = None
    subject: str | None = None
    phone: str | None = None
    uploaded_by: str | None = None


class SearchResponse(BaseModel):
    results: list[SearchResult]
