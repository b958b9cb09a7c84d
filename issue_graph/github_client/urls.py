"""Parse github.com issue and pull request URLs."""

import re

from ..exceptions import MalformedUrlError
from .models import Identity

# https://github.com/owner/repo/issues/number
# https://github.com/owner/repo/pull/number
REFERENCE_URL_PATTERN = (
    r"https://github\.com/(?P<url_owner>[-a-zA-Z0-9_]+)/(?P<url_repo>[-a-zA-Z0-9_]+)"
    r"/(?P<url_type>issues|pull)/(?P<url_number>\d+)"
)

_URL_REGEX = re.compile(REFERENCE_URL_PATTERN, re.IGNORECASE | re.ASCII)


def parse_github_url(url: str) -> Identity:
    """Parse an issue or pull request URL into an Identity.

    Args:
        url: URL such as https://github.com/owner/repo/issues/12

    Returns:
        Identity addressed by the URL

    Raises:
        MalformedUrlError: If the URL is not an issue or pull request URL
    """
    match = _URL_REGEX.search(url) if url else None
    if match is None or int(match.group("url_number")) < 1:
        raise MalformedUrlError(url)
    return Identity(
        owner=match.group("url_owner"),
        repo=match.group("url_repo"),
        number=int(match.group("url_number")),
    )
