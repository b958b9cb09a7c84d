"""Tests for GitHub client."""

import os
from unittest.mock import Mock, patch

import pytest
from github.GithubException import UnknownObjectException

from issue_graph.github_client.client import GitHubClient
from issue_graph.github_client.models import Identity, NodeState


def _mock_issue(
    html_url: str = "https://github.com/o/r/issues/1",
    pull_request: Mock | None = None,
    body: str | None = "requires #2",
) -> Mock:
    issue = Mock()
    issue.title = "Test issue"
    issue.body = body
    issue.state = "open"
    issue.html_url = html_url
    issue.user.login = "octocat"
    issue.pull_request = pull_request
    issue.get_comments.return_value = []
    issue.get_timeline.return_value = []
    return issue


def _timeline_event(event: str, html_url: str | None) -> Mock:
    timeline_event = Mock()
    timeline_event.event = event
    if html_url is None:
        timeline_event.source = None
    else:
        timeline_event.source.issue.html_url = html_url
    return timeline_event


class TestGitHubClient:
    """Test GitHubClient class."""

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    def test_init_with_env_token(self) -> None:
        """Test initialization with environment token."""
        with patch("issue_graph.github_client.client.Github") as mock_github:
            GitHubClient()
            mock_github.assert_called_once_with("test_token")

    def test_init_with_explicit_token(self) -> None:
        """Test initialization with explicit token."""
        with patch("issue_graph.github_client.client.Github") as mock_github:
            GitHubClient(token="explicit_token")
            mock_github.assert_called_once_with("explicit_token")

    @patch.dict(os.environ, {}, clear=True)
    def test_init_without_token(self) -> None:
        """Test initialization without token raises error."""
        with pytest.raises(ValueError, match="GitHub token is required"):
            GitHubClient()

    @patch("issue_graph.github_client.client.Github")
    def test_get_repository_success(self, mock_github_class: Mock) -> None:
        """Test successful repository retrieval."""
        mock_repo = Mock()
        mock_github = Mock()
        mock_github.get_repo.return_value = mock_repo
        mock_github_class.return_value = mock_github

        client = GitHubClient(token="test_token")
        result = client.get_repository("testorg", "testrepo")

        assert result == mock_repo
        mock_github.get_repo.assert_called_once_with("testorg/testrepo")

    @patch("issue_graph.github_client.client.Github")
    def test_get_repository_not_found(self, mock_github_class: Mock) -> None:
        """Test repository not found error."""
        mock_github = Mock()
        mock_github.get_repo.side_effect = UnknownObjectException(
            404, "Not Found", None
        )
        mock_github_class.return_value = mock_github

        client = GitHubClient(token="test_token")

        with pytest.raises(ValueError, match="Repository testorg/testrepo not found"):
            client.get_repository("testorg", "testrepo")


class TestNodeConversion:
    """Test conversion of PyGitHub objects to NodeData."""

    @patch("issue_graph.github_client.client.Github")
    def test_convert_issue(self, mock_github_class: Mock) -> None:
        """Test converting a plain issue."""
        client = GitHubClient(token="test_token")
        issue = _mock_issue()
        comment = Mock()
        comment.body = "part of o/r#3"
        empty_comment = Mock()
        empty_comment.body = None
        issue.get_comments.return_value = [comment, empty_comment]

        node = client._convert_node(issue)

        assert node.title == "Test issue"
        assert node.body == "requires #2"
        assert node.author == "octocat"
        assert node.state == NodeState.OPEN
        assert node.is_pull_request is False
        assert node.is_draft is False
        assert node.url == "https://github.com/o/r/issues/1"
        assert node.comments == ["part of o/r#3", ""]
        assert node.status == "open"

    @patch("issue_graph.github_client.client.Github")
    def test_convert_issue_without_body_or_author(
        self, mock_github_class: Mock
    ) -> None:
        """Test missing body and deleted author."""
        client = GitHubClient(token="test_token")
        issue = _mock_issue(body=None)
        issue.user = None

        node = client._convert_node(issue)

        assert node.body == ""
        assert node.author is None

    @patch("issue_graph.github_client.client.Github")
    def test_convert_merged_pull_request(self, mock_github_class: Mock) -> None:
        """Test merged pull requests report the merged state."""
        client = GitHubClient(token="test_token")
        issue = _mock_issue(
            html_url="https://github.com/o/r/pull/4", pull_request=Mock()
        )
        issue.as_pull_request.return_value.merged = True
        issue.as_pull_request.return_value.state = "closed"
        issue.as_pull_request.return_value.draft = False

        node = client._convert_node(issue)

        assert node.state == NodeState.MERGED
        assert node.is_pull_request is True
        assert node.status == "merged"

    @patch("issue_graph.github_client.client.Github")
    def test_convert_draft_pull_request(self, mock_github_class: Mock) -> None:
        """Test draft pull requests."""
        client = GitHubClient(token="test_token")
        issue = _mock_issue(
            html_url="https://github.com/o/r/pull/4", pull_request=Mock()
        )
        issue.as_pull_request.return_value.merged = False
        issue.as_pull_request.return_value.state = "open"
        issue.as_pull_request.return_value.draft = True

        node = client._convert_node(issue)

        assert node.state == NodeState.OPEN
        assert node.is_draft is True
        assert node.status == "draft"

    @patch("issue_graph.github_client.client.Github")
    def test_convert_timeline(self, mock_github_class: Mock) -> None:
        """Test only cross-referenced events become timeline sources."""
        client = GitHubClient(token="test_token")
        issue = _mock_issue()
        issue.get_timeline.return_value = [
            _timeline_event("cross-referenced", "https://github.com/x/y/pull/8"),
            _timeline_event("labeled", "https://github.com/x/y/issues/9"),
            _timeline_event("cross-referenced", None),
            _timeline_event("cross-referenced", "https://github.com/x/y/issues/10"),
        ]

        node = client._convert_node(issue)

        assert node.timeline_sources == [
            Identity(owner="x", repo="y", number=8),
            Identity(owner="x", repo="y", number=10),
        ]

    @patch("issue_graph.github_client.client.Github")
    def test_convert_timeline_source_without_issue(
        self, mock_github_class: Mock
    ) -> None:
        """Test cross-references from non-issue sources are skipped."""
        client = GitHubClient(token="test_token")
        event = _timeline_event("cross-referenced", "https://github.com/x/y/pull/8")
        event.source.issue = None

        assert client._convert_timeline_source(event) is None

    @patch("issue_graph.github_client.client.Github")
    def test_get_node(self, mock_github_class: Mock) -> None:
        """Test fetching a node by identity."""
        issue = _mock_issue()
        mock_github = Mock()
        mock_github.get_repo.return_value.get_issue.return_value = issue
        mock_github_class.return_value = mock_github

        client = GitHubClient(token="test_token")
        node = client.get_node("o", "r", 1)

        mock_github.get_repo.assert_called_once_with("o/r")
        mock_github.get_repo.return_value.get_issue.assert_called_once_with(1)
        assert node.title == "Test issue"

    @pytest.mark.asyncio
    @patch("issue_graph.github_client.client.Github")
    async def test_fetch_node(self, mock_github_class: Mock) -> None:
        """Test the async fetch wrapper returns the converted node."""
        mock_github = Mock()
        mock_github.get_repo.return_value.get_issue.return_value = _mock_issue()
        mock_github_class.return_value = mock_github

        client = GitHubClient(token="test_token")
        node = await client.fetch_node("o", "r", 1)

        assert node.url == "https://github.com/o/r/issues/1"

    @pytest.mark.asyncio
    @patch("issue_graph.github_client.client.Github")
    async def test_fetch_node_propagates_errors(self, mock_github_class: Mock) -> None:
        """Test missing issues raise to the caller."""
        mock_github = Mock()
        mock_github.get_repo.return_value.get_issue.side_effect = (
            UnknownObjectException(404, "Not Found", None)
        )
        mock_github_class.return_value = mock_github

        client = GitHubClient(token="test_token")

        with pytest.raises(UnknownObjectException):
            await client.fetch_node("o", "r", 999)
