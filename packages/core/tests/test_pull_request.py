"""Tests for the PyGithub-backed fetcher."""

import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from github import GithubException

from ackamoto_core.gh.base import FetchError
from ackamoto_core.gh.pull_request import GithubFetcher, to_comment, to_review_request


def _pr(number, title="Some change"):
    pr = MagicMock()
    pr.number = number
    pr.title = title
    pr.html_url = f"https://github.com/o/r/pull/{number}"
    return pr


def _gh_comment(body="ACK", login="alice", created_at=None):
    c = MagicMock()
    c.body = body
    c.user.login = login
    c.user.html_url = f"https://github.com/{login}"
    c.created_at = created_at or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    c.html_url = "https://github.com/o/r/pull/1#issuecomment-1"
    return c


class FailingIterable:
    """Yields the given items, then raises — like a paginated list hitting a rate limit."""

    def __init__(self, items, exc):
        self._items = items
        self._exc = exc

    def __iter__(self):
        yield from self._items
        raise self._exc


def _fetcher(repo, **kwargs):
    kwargs.setdefault("request_delay", 0)
    return GithubFetcher("o/r", repo_obj=repo, **kwargs)


class TestConversions:
    def test_to_review_request(self):
        request = to_review_request(_pr(7, "Fix bug"))
        assert request.number == 7
        assert request.title == "Fix bug"
        assert request.url == "https://github.com/o/r/pull/7"

    def test_to_comment_normalises_naive_timestamp(self):
        comment = to_comment(_gh_comment(created_at=datetime(2024, 5, 1, 12, 0)))
        assert comment.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert comment.author == "alice"
        assert comment.author_url == "https://github.com/alice"

    def test_to_comment_handles_deleted_user_and_empty_body(self):
        raw = _gh_comment()
        raw.user = None
        raw.body = None
        comment = to_comment(raw)
        assert comment.author == "ghost"
        assert comment.body == ""


class TestListReviewRequests:
    def test_requests_all_states_by_default(self):
        repo = MagicMock()
        repo.get_pulls.return_value = [_pr(1)]
        _fetcher(repo).list_review_requests()
        repo.get_pulls.assert_called_once_with(state="all")

    def test_respects_limit(self):
        repo = MagicMock()
        repo.get_pulls.return_value = [_pr(n) for n in range(10, 0, -1)]
        results = _fetcher(repo, limit=3).list_review_requests()
        assert [r.number for r in results] == [10, 9, 8]

    def test_returns_fewer_when_source_exhausted(self):
        repo = MagicMock()
        repo.get_pulls.return_value = [_pr(2), _pr(1)]
        assert len(_fetcher(repo, limit=50).list_review_requests()) == 2

    def test_raises_fetch_error_when_nothing_retrieved(self):
        repo = MagicMock()
        repo.get_pulls.side_effect = GithubException(403, {"message": "rate limited"}, None)
        with pytest.raises(FetchError):
            _fetcher(repo).list_review_requests()

    def test_network_error_is_fetch_error(self):
        repo = MagicMock()
        repo.get_pulls.return_value = FailingIterable([], requests.ConnectionError("down"))
        with pytest.raises(FetchError):
            _fetcher(repo).list_review_requests()

    def test_keeps_partial_results_when_later_page_fails(self):
        repo = MagicMock()
        repo.get_pulls.return_value = FailingIterable(
            [_pr(3), _pr(2)], GithubException(403, {"message": "rate limited"}, None)
        )
        results = _fetcher(repo, limit=10).list_review_requests()
        assert [r.number for r in results] == [3, 2]

    def test_partial_listing_logs_warning(self, caplog):
        repo = MagicMock()
        repo.get_pulls.return_value = FailingIterable([_pr(3)], GithubException(403, {"message": "rate limited"}, None))
        with caplog.at_level(logging.WARNING, logger="ackamoto_core.gh.pull_request"):
            _fetcher(repo, limit=10).list_review_requests()
        assert [r.levelno for r in caplog.records] == [logging.WARNING]

    def test_stops_consuming_once_limit_reached(self):
        consumed = []

        def pulls():
            for n in range(200, 0, -1):
                consumed.append(n)
                yield _pr(n)

        repo = MagicMock()
        repo.get_pulls.return_value = pulls()
        results = _fetcher(repo, limit=100).list_review_requests()

        assert len(results) == 100
        assert len(consumed) == 100


class TestListComments:
    def test_uses_listed_pull_request(self):
        pr = _pr(5)
        pr.get_issue_comments.return_value = [_gh_comment("Concept ACK")]
        repo = MagicMock()
        repo.get_pulls.return_value = [pr]
        fetcher = _fetcher(repo)
        fetcher.list_review_requests()

        comments = fetcher.list_comments(5)

        assert [c.body for c in comments] == ["Concept ACK"]
        repo.get_issue.assert_not_called()

    def test_falls_back_to_issue_lookup(self):
        repo = MagicMock()
        repo.get_issue.return_value.get_comments.return_value = [_gh_comment("NACK")]
        comments = _fetcher(repo).list_comments(9)
        repo.get_issue.assert_called_once_with(9)
        assert [c.body for c in comments] == ["NACK"]

    def test_failure_returns_empty_list(self):
        repo = MagicMock()
        repo.get_issue.side_effect = GithubException(404, {"message": "Not Found"}, None)
        assert _fetcher(repo).list_comments(9) == []

    def test_failure_mid_iteration_returns_empty_list(self):
        pr = _pr(5)
        pr.get_issue_comments.return_value = FailingIterable([_gh_comment()], requests.Timeout("slow"))
        repo = MagicMock()
        repo.get_pulls.return_value = [pr]
        fetcher = _fetcher(repo)
        fetcher.list_review_requests()
        assert fetcher.list_comments(5) == []

    def test_comment_failure_logged_as_warning(self, caplog):
        repo = MagicMock()
        repo.get_issue.side_effect = GithubException(500, {"message": "Server Error"}, None)
        with caplog.at_level(logging.WARNING, logger="ackamoto_core.gh.pull_request"):
            _fetcher(repo).list_comments(9)
        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert "#9" in record.getMessage()

    def test_throttles_between_comment_fetches(self, mocker):
        sleep = mocker.patch("ackamoto_core.gh.pull_request.time.sleep")
        repo = MagicMock()
        repo.get_issue.return_value.get_comments.return_value = []
        fetcher = _fetcher(repo, request_delay=5)

        fetcher.list_comments(1)
        sleep.assert_not_called()
        fetcher.list_comments(2)
        sleep.assert_called_once()
