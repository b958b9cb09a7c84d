"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import Identity, NodeData, NodeState

__all__ = [
    "GitHubClient",
    "Identity",
    "NodeData",
    "NodeState",
]
