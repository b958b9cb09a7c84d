"""Explore the graph of GitHub issues and pull requests linked by references."""

__version__ = "0.1.0"
