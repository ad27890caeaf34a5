"""Versioning branch names: <prefix><version> and refs/heads/<name>."""

from verbranch.errors import InvalidInputError, InvalidVersionError
from verbranch.services.version import is_valid_version

REF_HEADS = "refs/heads/"


def branch_name(prefix: str, version: str) -> str:
    """Build the head branch name; the prefix is used as is (may be empty)."""
    if not version:
        raise InvalidInputError("Version is required to name the versioning branch.")
    return f"{prefix or ''}{version}"


def branch_ref(branch: str) -> str:
    """Fully qualified ref of a branch: main -> refs/heads/main."""
    return f"{REF_HEADS}{branch}"


def version_from_branch(prefix: str, branch: str) -> str:
    """Recover the version from a versioning branch name (inverse of branch_name).

    Raises:
        InvalidInputError: branch does not start with prefix.
        InvalidVersionError: the remainder is not a semantic version.
    """
    prefix = prefix or ""
    if not branch.startswith(prefix):
        raise InvalidInputError(f"Branch: {branch}, does not start with prefix: {prefix}.")
    version = branch[len(prefix) :]
    if not is_valid_version(version):
        raise InvalidVersionError(f"Head version: {version}, is invalid.")
    return version
