"""Abstract source of pull requests and their comments.

The pipeline depends on BaseFetcher, not on GitHub, so tests and alternative
sources can supply a snapshot without any network access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ackamoto_core.models import Comment, ReviewRequest


class FetchError(Exception):
    """Raised when the list of pull requests cannot be retrieved at all."""


class BaseFetcher(ABC):
    """Read-only provider of review requests and comment threads.

    Retries, rate limiting and timeouts are the fetcher's business; the
    pipeline calls these methods once each, sequentially.
    """

    @abstractmethod
    def list_review_requests(self) -> list[ReviewRequest]:
        """Return up to the configured number of pull requests.

        May return fewer when the source runs dry. Raises FetchError when
        nothing at all can be retrieved.
        """

    @abstractmethod
    def list_comments(self, pr_number: int) -> list[Comment]:
        """Return the discussion comments of one pull request.

        Returns an empty list if the comments cannot be fetched — never raises.
        """

    def close(self) -> None:
        """Release any held resources. Default is a no-op."""
