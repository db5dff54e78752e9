"""GitHub pull-request client."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import requests

from gdrivesync.errors import ForgeError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"

# GitHub answers these transiently right after a force push
_RETRY_STATUSES: frozenset[int] = frozenset({403, 404, 422})


@dataclass(slots=True, frozen=True)
class PullRequest:
    number: int
    url: str
    created: bool


class GitHubForge:
    """Minimal GitHub REST client for the proposal step."""

    def __init__(
        self,
        repo: str,
        token: Optional[str],
        *,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        max_retries: int = 3,
        retry_delay_sec: float = 5.0,
        timeout: float = 30.0,
    ) -> None:
        owner, _, name = repo.partition("/")
        if not owner or not name:
            raise ForgeError("repo must look like 'owner/name'", details={"repo": repo})
        self.owner = owner
        self.name = name
        self._api_url = api_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/vnd.github+json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})
        self._max_retries = max_retries
        self._retry_delay_sec = retry_delay_sec
        self._timeout = timeout

    @property
    def _repo_url(self) -> str:
        return f"{self._api_url}/repos/{self.owner}/{self.name}"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise ForgeError(f"GitHub request failed: {exc}", cause=exc) from exc

    def get_default_branch(self) -> str:
        response = self._request("GET", self._repo_url)
        if response.status_code != 200:
            raise ForgeError(
                "Could not read repository metadata",
                details={"status_code": response.status_code},
            )
        branch = response.json().get("default_branch")
        if not branch:
            raise ForgeError("GitHub did not return a default branch")
        return branch

    def create_or_update_pull_request(
        self,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> Optional[PullRequest]:
        """
        Update the open PR for head->base, or open a new one.

        Retries with exponential backoff on 403/404/422. Returns None when
        GitHub reports there is nothing to merge.
        """
        delay = self._retry_delay_sec
        for attempt in range(self._max_retries + 1):
            response = self._try_create_or_update(head, base, title, body)
            if isinstance(response, PullRequest):
                return response

            message = _error_message(response)
            if "No commits between" in message:
                logger.info("No commits between %s and %s; no pull request needed", base, head)
                return None

            if response.status_code in _RETRY_STATUSES and attempt < self._max_retries:
                logger.warning(
                    "Pull request call returned %d (%s); retrying in %.0fs",
                    response.status_code,
                    message,
                    delay,
                )
                time.sleep(delay)
                delay *= 2
                continue

            raise ForgeError(
                f"Failed to create or update pull request: {message}",
                details={"status_code": response.status_code, "head": head, "base": base},
            )

        raise ForgeError("Unexpected retry loop termination")

    def _try_create_or_update(
        self, head: str, base: str, title: str, body: str
    ) -> PullRequest | requests.Response:
        listing = self._request(
            "GET",
            f"{self._repo_url}/pulls",
            params={"head": f"{self.owner}:{head}", "base": base, "state": "open"},
        )
        if listing.status_code != 200:
            return listing

        existing = listing.json()
        if existing:
            number = existing[0]["number"]
            updated = self._request(
                "PATCH",
                f"{self._repo_url}/pulls/{number}",
                json={"title": title, "body": body},
            )
            if updated.status_code != 200:
                return updated
            data = updated.json()
            logger.info("Updated pull request #%d", number)
            return PullRequest(number=number, url=data.get("html_url", ""), created=False)

        created = self._request(
            "POST",
            f"{self._repo_url}/pulls",
            json={"title": title, "head": head, "base": base, "body": body},
        )
        if created.status_code != 201:
            return created
        data = created.json()
        logger.info("Created pull request #%d", data["number"])
        return PullRequest(number=data["number"], url=data.get("html_url", ""), created=True)


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if not isinstance(payload, dict):
        return f"HTTP {response.status_code}"
    parts = [str(payload.get("message", ""))]
    for err in payload.get("errors", []) or []:
        if isinstance(err, dict) and err.get("message"):
            parts.append(str(err["message"]))
    return "; ".join(p for p in parts if p) or f"HTTP {response.status_code}"
