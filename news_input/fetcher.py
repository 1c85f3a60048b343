"""
URL fetching for news input.

Downloads a page with a browser-like User-Agent, extracts the article body and
retries with linear backoff when either the transport fails or the extracted
article is too short.
"""

import logging
import time
from typing import Callable, Optional

import requests

from .config import FetchConfig
from .errors import ContentQualityError, NetworkError
from .html_extractor import HTMLArticleExtractor
from .retry import RetryState, linear_backoff, retry_with_backoff

logger = logging.getLogger(__name__)

MIN_ARTICLE_LENGTH = 50
SHORT_ARTICLE_MESSAGE = "Article content too short or not found"


class URLFetcher:
    """Fetch a news article from a URL and return its plain text."""

    def __init__(self,
                 config: Optional[FetchConfig] = None,
                 session: Optional[requests.Session] = None,
                 extractor: Optional[HTMLArticleExtractor] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 on_attempt: Optional[Callable[[str], None]] = None):
        """
        Initialize URL fetcher.

        Args:
            config: Timeout, User-Agent and retry policy
            session: requests-compatible session (a fake one in tests)
            extractor: HTML article extractor
            sleep: Blocking wait used between attempts
            on_attempt: Called with "success", "network" or "content" per attempt
        """
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.extractor = extractor or HTMLArticleExtractor()
        self.sleep = sleep
        self.on_attempt = on_attempt

    def fetch(self, url: str) -> str:
        """
        Fetch ``url`` and return the extracted article text.

        Raises:
            ContentQualityError: If the last attempt produced too little text
            NetworkError: If the last attempt failed at the transport level
        """
        logger.info(f"Fetching article from URL: {url}")

        retry_on = (requests.RequestException, ContentQualityError)
        if not self.config.retry_on_short_content:
            retry_on = (requests.RequestException,)

        try:
            text = retry_with_backoff(
                lambda: self._fetch_once(url),
                max_attempts=self.config.max_attempts,
                delay=linear_backoff(self.config.backoff_step),
                retry_on=retry_on,
                sleep=self.sleep,
                on_retry=self._record_failure,
                description=f"Fetch {url}",
            )
        except ContentQualityError as e:
            raise ContentQualityError(SHORT_ARTICLE_MESSAGE, minimum=MIN_ARTICLE_LENGTH) from e
        except requests.RequestException as e:
            raise NetworkError("URL unreachable") from e

        self._record("success")
        logger.info(f"Fetched {len(text)} chars of article text from {url}")
        return text

    def _fetch_once(self, url: str) -> str:
        response = self.session.get(
            url,
            headers={'User-Agent': self.config.user_agent},
            timeout=self.config.timeout,
            allow_redirects=True,
        )
        response.raise_for_status()

        text = self.extractor.extract(_page_markup(response))
        if len(text) < MIN_ARTICLE_LENGTH:
            raise ContentQualityError(SHORT_ARTICLE_MESSAGE, minimum=MIN_ARTICLE_LENGTH)
        return text

    def _record_failure(self, state: RetryState) -> None:
        if isinstance(state.last_error, ContentQualityError):
            self._record("content")
        else:
            self._record("network")

    def _record(self, outcome: str) -> None:
        if self.on_attempt:
            self.on_attempt(outcome)


def _page_markup(response):
    """Decoded text when the server names a charset, else raw bytes for BeautifulSoup to sniff."""
    content_type = response.headers.get('Content-Type', '')
    if 'charset=' in content_type.lower():
        return response.text
    # requests falls back to ISO-8859-1 here; the page's <meta charset> knows better
    return response.content
