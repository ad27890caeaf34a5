"""Outcome of looking up a git ref on the platform."""

from enum import Enum

from pydantic import BaseModel


class RefStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


class RefLookup(BaseModel):
    """Result of a ref lookup: status, target SHA when found, observed HTTP status."""

    ref: str
    status: RefStatus
    sha: str | None = None
    http_status: int | None = None
