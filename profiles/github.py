"""
profiles/github.py -- GitHub repository lookup for profile pages.

Returns the five oldest-created public repos for a GitHub username, exactly
as GitHub returns them (the web client renders name, description, stars,
watchers and forks). Returns None on any failure -- ProfileService turns that
into UpstreamUnavailable.

GITHUB_TOKEN is optional. Unauthenticated calls are limited to 60 req/hour
per IP; a token raises that to 5000.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger("devconnector.github")

_USER_REPOS_PATH = "/users/{username}/repos"

# Module-level session shared across calls for connection pooling.
# max_redirects=3 replaces the requests default of 30 -- api.github.com is a
# known endpoint and does not need long redirect chains.
_session = requests.Session()
_session.max_redirects = 3
_session.headers.update({"User-Agent": "devconnector", "Accept": "application/vnd.github+json"})


def fetch_github_repos(
    username: str,
    api_url: str = "https://api.github.com",
    token: Optional[str] = None,
) -> Optional[list[dict[str, Any]]]:
    """Fetch up to five repos for username, oldest first.

    Args:
        username: GitHub login as stored on the profile.
        api_url:  Base URL, overridable for GitHub Enterprise.
        token:    Optional personal access token sent as a bearer token.
    """
    url = api_url.rstrip("/") + _USER_REPOS_PATH.format(username=quote(username, safe=""))
    params = {"per_page": "5", "sort": "created", "direction": "asc"}
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    try:
        resp = _session.get(url, params=params, headers=headers, timeout=10)
        resp.raise_for_status()
        repos = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("GitHub repo fetch failed for %s: %s", username, e)
        return None
    if not isinstance(repos, list):
        logger.warning("GitHub returned unexpected payload for %s", username)
        return None
    return repos
