"""Configuration for crawl runs."""

import os
from typing import Optional

DEFAULT_CONCURRENCY = 4


class CrawlConfig:
    """Crawl settings read from environment variables."""

    def __init__(self) -> None:
        """Initialize crawl configuration from environment variables."""
        self.token: Optional[str] = os.getenv("GITHUB_TOKEN")
        self.concurrency_raw: str = os.getenv(
            "ISSUE_GRAPH_CONCURRENCY", str(DEFAULT_CONCURRENCY)
        )
        self.max_depth_raw: Optional[str] = os.getenv("ISSUE_GRAPH_MAX_DEPTH")
        self.taxonomy_path: Optional[str] = os.getenv("ISSUE_GRAPH_TAXONOMY")

    @property
    def concurrency(self) -> int:
        return int(self.concurrency_raw)

    @property
    def max_depth(self) -> Optional[int]:
        if not self.max_depth_raw:
            return None
        return int(self.max_depth_raw)

    def is_configured(self) -> bool:
        """Check if a GitHub token is available."""
        return self.token is not None

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        problems = []
        if not self.token:
            problems.append("GITHUB_TOKEN is required")
        if not self.concurrency_raw.isdigit() or int(self.concurrency_raw) < 1:
            problems.append(
                f"ISSUE_GRAPH_CONCURRENCY must be a positive integer, "
                f"got {self.concurrency_raw!r}"
            )
        if self.max_depth_raw and not self.max_depth_raw.isdigit():
            problems.append(
                f"ISSUE_GRAPH_MAX_DEPTH must be a non-negative integer, "
                f"got {self.max_depth_raw!r}"
            )

        if problems:
            raise ValueError(f"Invalid crawl configuration: {'; '.join(problems)}")
