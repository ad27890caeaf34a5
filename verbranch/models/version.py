"""Bump directives and the resolved target version."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BumpLevel(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"


class ReleaseType(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PREMAJOR = "premajor"
    PREMINOR = "preminor"
    PREPATCH = "prepatch"
    PRERELEASE = "prerelease"


class ResolvedVersion(BaseModel):
    """Target version computed from a base version and a bump directive.

    pre_id is the non-incremental part of the pre-release (e.g. "beta" in
    2.0.0-beta.3) and pre_inc its trailing numeric part ("3"). Both are empty
    for a release.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    major: int
    minor: int
    patch: int
    pre_id: str = ""
    pre_inc: str = ""
    release_type: ReleaseType | None = None
    is_prerelease: bool = False
