"""Data models for one git-pr run (Pydantic).

Nothing here is persisted; every value lives for a single invocation.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


class PullRequestOptions(BaseModel):
    """Parsed command line."""

    base: str | None = None
    yes: bool = False
    commit_message: bool = False
    browse: bool = False
    title: str | None = None
    body: str | None = None
    config: str | None = None
    verbose: bool = False


class BranchContext(BaseModel):
    """Repository and branch state the pull request is built from."""

    repo: str
    branch: str
    base: str
    base_ref: str
    commit_count: int = Field(ge=0)


class Credentials(BaseModel):
    """Username and password or token from the git credential store."""

    username: str
    password: str = Field(repr=False)


class PullRequestMessage(BaseModel):
    """Title and description of the pull request."""

    title: str = Field(min_length=1)
    body: str = ""


class PullRequestCreated(BaseModel):
    """API accepted the request; html_url is None for unexpected shapes."""

    kind: Literal["created"] = "created"
    html_url: str | None = None
    raw: str = ""


class ApiError(BaseModel):
    """API rejected the request with an error status."""

    kind: Literal["api_error"] = "api_error"
    status: int
    code: str | None = None
    field: str | None = None
    message: str | None = None
    raw: str = ""


class AuthError(BaseModel):
    """API rejected the credentials (HTTP 401)."""

    kind: Literal["auth_error"] = "auth_error"
    raw: str = ""


class NetworkError(BaseModel):
    """Request never produced an HTTP response."""

    kind: Literal["network_error"] = "network_error"
    reason: str


PullRequestResult = Union[PullRequestCreated, ApiError, AuthError, NetworkError]
