"""Data models for refs, pull requests, comments and versions (Pydantic)."""

from verbranch.models.comment import Comment
from verbranch.models.pr import PR, PRState
from verbranch.models.ref import RefLookup, RefStatus
from verbranch.models.version import BumpLevel, ReleaseType, ResolvedVersion

__all__ = [
    "BumpLevel",
    "Comment",
    "PR",
    "PRState",
    "RefLookup",
    "RefStatus",
    "ReleaseType",
    "ResolvedVersion",
]
