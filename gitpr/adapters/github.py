"""GitHub API adapter."""

import logging
from typing import Any, Dict

import requests

from gitpr.adapters.base import GitPlatformAdapter
from gitpr.models import ApiError, AuthError, NetworkError, PullRequestCreated, PullRequestResult

GITHUB_MEDIA_TYPE = "application/vnd.github.v3+json"


def _json_or_empty(resp: requests.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _created_from_api(resp: requests.Response) -> PullRequestCreated:
    data = _json_or_empty(resp)
    url = data.get("html_url")
    return PullRequestCreated(html_url=url if isinstance(url, str) and url else None, raw=resp.text or "")


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _error_from_api(resp: requests.Response) -> ApiError:
    data = _json_or_empty(resp)
    errors = data.get("errors") or []
    first = errors[0] if isinstance(errors, list) and errors and isinstance(errors[0], dict) else {}
    return ApiError(
        status=resp.status_code,
        code=_str_or_none(first.get("code")),
        field=_str_or_none(first.get("field")),
        message=_str_or_none(first.get("message")),
        raw=resp.text or "",
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation with Basic authentication."""

    def __init__(
        self,
        username: str,
        password: str,
        api_url: str = "https://api.github.com",
        timeout: float | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._log = log or logging.getLogger("gitpr.adapters.github")
        self._session = requests.Session()
        self._session.auth = (username, password)
        self._session.headers["Accept"] = GITHUB_MEDIA_TYPE

    def create_pr(
        self,
        repo: str,
        title: str,
        body: str,
        head: str,
        base: str,
    ) -> PullRequestResult:
        """POST to /repos/{repo}/pulls.

        Never raises for HTTP or transport failures; those come back as
        AuthError, ApiError or NetworkError.
        """
        url = f"{self._api_url}/repos/{repo}/pulls"
        payload = {"title": title, "body": body, "head": head, "base": base}
        try:
            resp = self._session.request("POST", url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            self._log.debug("POST %s failed: %s", url, e)
            return NetworkError(reason=str(e) or e.__class__.__name__)
        self._log.debug("POST %s -> %s", url, resp.status_code)
        if resp.status_code == 401:
            return AuthError(raw=resp.text or "")
        if resp.status_code >= 400:
            return _error_from_api(resp)
        return _created_from_api(resp)
