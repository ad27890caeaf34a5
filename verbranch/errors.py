"""Error taxonomy for the versioning pipeline.

Remote call failures are not listed here: adapters raise GitPlatformError
and it is passed through unchanged.
"""


class VerbranchError(Exception):
    """Base class for errors raised by the versioning pipeline."""

    pass


class InvalidInputError(VerbranchError):
    """Raised when a configuration value is missing or not recognized."""

    pass


class InvalidVersionError(VerbranchError):
    """Raised when a base or custom version is not a valid semantic version."""

    pass


class BaseBranchNotFoundError(VerbranchError):
    """Raised when the base branch does not exist on the remote."""

    def __init__(self, branch: str) -> None:
        super().__init__(f"Base branch: {branch}, not found.")
        self.branch = branch


class UnexpectedRefStateError(VerbranchError):
    """Raised when a ref lookup is neither found nor not-found."""

    def __init__(self, ref: str, status: int | None) -> None:
        super().__init__(f"Unhandled status: {status}, in attempting to get ref: {ref}.")
        self.ref = ref
        self.status = status


class DuplicatePullRequestError(VerbranchError):
    """Raised when an open pull request exists and duplicates are not allowed."""

    def __init__(self, number: int, url: str | None = None) -> None:
        where = f" ({url})" if url else ""
        super().__init__(f"An open pull request #{number}{where} already exists.")
        self.number = number
        self.url = url
