"""Pydantic models for the issue and pull request nodes of the crawl graph.

These models hold the subset of GitHub's issue/pull request data the crawler
needs to place a node and discover its neighbours.
API Reference: https://docs.github.com/en/rest/issues
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

NAME_PATTERN = r"^[-A-Za-z0-9_]+$"


class Identity(BaseModel):
    """Address of one issue or pull request on GitHub.

    Immutable and hashable, so it can be used directly as a dictionary key.
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(
        ..., pattern=NAME_PATTERN, description="Repository owner login (string)"
    )
    repo: str = Field(..., pattern=NAME_PATTERN, description="Repository name")
    number: PositiveInt = Field(
        ..., description="Issue or pull request number within the repository"
    )

    @property
    def key(self) -> str:
        """Stable dedup key in ``owner/repo#number`` form."""
        return f"{self.owner}/{self.repo}#{self.number}"

    def html_url(self, is_pull_request: bool = False) -> str:
        """Build the github.com URL of this issue or pull request."""
        kind = "pull" if is_pull_request else "issues"
        return f"https://github.com/{self.owner}/{self.repo}/{kind}/{self.number}"

    def __str__(self) -> str:
        return self.key


class NodeState(str, Enum):
    """Lifecycle state of an issue or pull request."""

    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class NodeData(BaseModel):
    """Snapshot of one fetched issue or pull request.

    Comments and timeline sources keep the order GitHub returned them in.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title of the issue or pull request")
    body: str = Field(
        "", description="Markdown body; empty when the author left it blank"
    )
    author: str | None = Field(
        None, description="Login of the author, None for deleted accounts"
    )
    state: NodeState = Field(..., description="open, closed or merged")
    is_pull_request: bool = Field(False, description="True for pull requests")
    is_draft: bool = Field(False, description="True for draft pull requests")
    url: str | None = Field(None, description="html_url of the issue or PR")
    comments: list[str] = Field(
        default_factory=list, description="Comment bodies in creation order"
    )
    timeline_sources: list[Identity] = Field(
        default_factory=list,
        description="Issues and PRs GitHub detected as cross-referencing this one",
    )

    @property
    def status(self) -> str:
        """Presentation status: ``draft`` for draft PRs, otherwise the state."""
        if self.is_pull_request and self.is_draft:
            return "draft"
        return self.state.value
