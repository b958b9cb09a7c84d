"""Exceptions raised by issue-graph."""


class IssueGraphError(Exception):
    """Base class for issue-graph errors."""


class MalformedUrlError(IssueGraphError, ValueError):
    """Raised when a URL does not address a GitHub issue or pull request."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"Not a GitHub issue or pull request URL: {url!r} "
            "(expected https://github.com/OWNER/REPO/issues/NUMBER "
            "or https://github.com/OWNER/REPO/pull/NUMBER)"
        )


class TaxonomyError(IssueGraphError, ValueError):
    """Raised when a reference taxonomy cannot be resolved."""
