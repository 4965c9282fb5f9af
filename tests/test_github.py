"""
tests/test_github.py -- Unit tests for profiles.github.fetch_github_repos.

The module-level requests Session is patched; no network calls are made.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import requests

from profiles.github import fetch_github_repos


def _response(payload=None, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


def test_returns_repo_list():
    repos = [{"name": "one"}, {"name": "two"}]
    with patch("profiles.github._session.get", return_value=_response(repos)) as get:
        assert fetch_github_repos("ada") == repos
    url = get.call_args.args[0]
    assert url == "https://api.github.com/users/ada/repos"
    assert get.call_args.kwargs["params"] == {"per_page": "5", "sort": "created", "direction": "asc"}
    assert get.call_args.kwargs["headers"] == {}


def test_token_sent_as_bearer():
    with patch("profiles.github._session.get", return_value=_response([])) as get:
        fetch_github_repos("ada", api_url="https://ghe.example.org/api/v3/", token="tok")
    assert get.call_args.args[0] == "https://ghe.example.org/api/v3/users/ada/repos"
    assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}


def test_username_is_path_escaped():
    with patch("profiles.github._session.get", return_value=_response([])) as get:
        fetch_github_repos("../orgs/x")
    assert get.call_args.args[0] == "https://api.github.com/users/..%2Forgs%2Fx/repos"


def test_http_error_returns_none():
    with patch("profiles.github._session.get", return_value=_response({"message": "Not Found"}, status=404)):
        assert fetch_github_repos("nobody") is None


def test_network_error_returns_none():
    with patch("profiles.github._session.get", side_effect=requests.ConnectionError("down")):
        assert fetch_github_repos("ada") is None


def test_non_list_payload_returns_none():
    with patch("profiles.github._session.get", return_value=_response({"message": "weird"})):
        assert fetch_github_repos("ada") is None


def test_invalid_json_returns_none():
    resp = _response()
    resp.json.side_effect = ValueError("no json")
    with patch("profiles.github._session.get", return_value=resp):
        assert fetch_github_repos("ada") is None
