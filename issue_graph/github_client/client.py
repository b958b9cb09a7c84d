"""GitHub API client using PyGitHub."""

import asyncio
import logging
import os

from github import Github
from github.GithubException import UnknownObjectException
from github.Issue import Issue
from github.Repository import Repository
from github.TimelineEvent import TimelineEvent

from ..exceptions import MalformedUrlError
from .models import Identity, NodeData, NodeState
from .urls import parse_github_url

logger = logging.getLogger(__name__)

CROSS_REFERENCED_EVENT = "cross-referenced"


class GitHubClient:
    """GitHub API client that fetches crawl graph nodes."""

    def __init__(self, token: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.github = Github(self.token)

    def _convert_state(self, github_issue: Issue) -> tuple[NodeState, bool, bool]:
        """Work out state, pull request and draft flags for an issue."""
        if github_issue.pull_request is None:
            return NodeState(github_issue.state), False, False

        pull_request = github_issue.as_pull_request()
        if pull_request.merged:
            state = NodeState.MERGED
        else:
            state = NodeState(pull_request.state)
        return state, True, bool(pull_request.draft)

    def _convert_timeline_source(self, event: TimelineEvent) -> Identity | None:
        """Extract the referencing issue/PR of a cross-referenced event."""
        if event.event != CROSS_REFERENCED_EVENT or event.source is None:
            return None
        source_issue = event.source.issue
        if source_issue is None:
            return None
        try:
            return parse_github_url(source_issue.html_url)
        except MalformedUrlError:
            logger.debug(f"Skipping timeline source {source_issue.html_url}")
            return None

    def _convert_node(self, github_issue: Issue) -> NodeData:
        """Convert PyGitHub issue (or PR) to our model."""
        state, is_pull_request, is_draft = self._convert_state(github_issue)

        comments = [comment.body or "" for comment in github_issue.get_comments()]

        timeline_sources = []
        for event in github_issue.get_timeline():
            identity = self._convert_timeline_source(event)
            if identity is not None:
                timeline_sources.append(identity)

        return NodeData(
            title=github_issue.title,
            body=github_issue.body or "",
            author=github_issue.user.login if github_issue.user else None,
            state=state,
            is_pull_request=is_pull_request,
            is_draft=is_draft,
            url=github_issue.html_url,
            comments=comments,
            timeline_sources=timeline_sources,
        )

    def get_repository(self, owner: str, repo: str) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(f"{owner}/{repo}")
        except UnknownObjectException:
            raise ValueError(f"Repository {owner}/{repo} not found")

    def get_node(self, owner: str, repo: str, number: int) -> NodeData:
        """Get an issue or pull request with its comments and timeline."""
        repository = self.get_repository(owner, repo)
        github_issue = repository.get_issue(number)
        node = self._convert_node(github_issue)
        logger.debug(
            f"Fetched {owner}/{repo}#{number} with {len(node.comments)} comments "
            f"and {len(node.timeline_sources)} cross-references"
        )
        return node

    async def fetch_node(self, owner: str, repo: str, number: int) -> NodeData:
        """Fetch a node without blocking the event loop."""
        return await asyncio.to_thread(self.get_node, owner, repo, number)
