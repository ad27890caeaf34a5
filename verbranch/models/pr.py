"""Pull request model."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class PRState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class PR(BaseModel):
    """Pull request."""

    number: int
    title: str
    body: str = ""
    head_branch: str
    base_branch: str
    state: PRState
    draft: bool = False
    html_url: str | None = None
    updated_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.state is PRState.OPEN
