from __future__ import annotations

import logging
import time

import requests
from github import Auth, Github, GithubException

from ackamoto_core.gh.base import BaseFetcher, FetchError
from ackamoto_core.models import Comment, ReviewRequest, as_utc

logger = logging.getLogger(__name__)

PER_PAGE = 100
_GHOST_LOGIN = "ghost"
_GHOST_URL = "https://github.com/ghost"


def get_client(token: str | None = None) -> Github:
    if token:
        return Github(auth=Auth.Token(token), per_page=PER_PAGE)
    return Github(per_page=PER_PAGE)


def get_repo(repo_name: str, token: str | None = None):
    return get_client(token).get_repo(repo_name)


def to_review_request(pr) -> ReviewRequest:
    return ReviewRequest(number=pr.number, title=pr.title or "", url=pr.html_url)


def to_comment(c) -> Comment:
    user = c.user
    return Comment(
        body=c.body or "",
        author=user.login if user is not None else _GHOST_LOGIN,
        author_url=user.html_url if user is not None else _GHOST_URL,
        created_at=as_utc(c.created_at),
        url=c.html_url,
    )


class GithubFetcher(BaseFetcher):
    """Lists pull requests and their issue comments through PyGithub.

    ``limit`` is the ceiling on pull requests per run; callers pick it from
    token presence (see ``ackamoto_core.config.resolve_pr_limit``).
    """

    def __init__(
        self,
        repo_name: str,
        token: str | None = None,
        limit: int = 50,
        state: str = "all",
        request_delay: float = 0.2,
        repo_obj=None,
    ):
        self._repo_name = repo_name
        self._token = token
        self._limit = limit
        self._state = state
        self._request_delay = request_delay
        self._repo = repo_obj
        self._pulls: dict[int, object] = {}
        self._last_call: float | None = None

    def _get_repo(self):
        if self._repo is None:
            self._repo = get_repo(self._repo_name, token=self._token)
        return self._repo

    def _throttle(self) -> None:
        if self._last_call is not None and self._request_delay > 0:
            elapsed = time.monotonic() - self._last_call
            if elapsed < self._request_delay:
                time.sleep(self._request_delay - elapsed)
        self._last_call = time.monotonic()

    def list_review_requests(self) -> list[ReviewRequest]:
        results: list[ReviewRequest] = []
        try:
            pulls = self._get_repo().get_pulls(state=self._state)
            for pr in pulls:
                self._pulls[pr.number] = pr
                results.append(to_review_request(pr))
                # Stop before PyGithub requests a page we will not use.
                if len(results) >= self._limit:
                    break
        except (GithubException, requests.RequestException) as e:
            if not results:
                raise FetchError(f"Could not list pull requests for {self._repo_name}: {e}") from e
            # A later page failed (usually rate limiting): keep what we have.
            logger.warning("Stopped listing pull requests after %d: %s", len(results), e)
        return results

    def list_comments(self, pr_number: int) -> list[Comment]:
        self._throttle()
        try:
            pr = self._pulls.get(pr_number)
            if pr is not None:
                raw = pr.get_issue_comments()
            else:
                raw = self._get_repo().get_issue(pr_number).get_comments()
            return [to_comment(c) for c in raw]
        except (GithubException, requests.RequestException) as e:
            logger.warning("Failed to fetch comments for PR #%d: %s", pr_number, e)
            return []
