"""
HTML article extraction module for news input.

This module isolates the main article body from a fetched web page:
- Boilerplate removal (scripts, navigation, ads, cookie banners)
- Ordered content selectors, first non-empty match wins
- Whole-body fallback when no content container is found
"""

import logging
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from .sanitizer import clean_extracted_text

logger = logging.getLogger(__name__)

BOILERPLATE_SELECTORS = (
    'script',
    'style',
    'noscript',
    'nav',
    'header',
    'footer',
    'aside',
    '.advertisement',
    '.ads',
    '.cookie-banner',
)

ARTICLE_SELECTORS = (
    'article',
    '[role="main"]',
    '.article-content',
    '.post-content',
    '.entry-content',
    '.main-content',
    '#main-content',
    '.content',
    'main',
)


def first_non_empty_match(soup, selectors: Sequence[str]) -> Optional[str]:
    """Return the joined text of the first selector whose matches contain text."""
    for selector in selectors:
        elements = soup.select(selector)
        if not elements:
            continue
        text = ' '.join(element.get_text(' ', strip=True) for element in elements).strip()
        if text:
            logger.debug(f"Article content matched selector {selector!r}")
            return text
    return None


class HTMLArticleExtractor:
    """Extract the readable article text from an HTML page."""

    def __init__(self,
                 article_selectors: Sequence[str] = ARTICLE_SELECTORS,
                 boilerplate_selectors: Sequence[str] = BOILERPLATE_SELECTORS,
                 parser: str = 'html.parser'):
        """
        Initialize HTML article extractor.

        Args:
            article_selectors: CSS selectors tried in priority order
            boilerplate_selectors: CSS selectors removed before extraction
            parser: BeautifulSoup parser name
        """
        self.article_selectors = tuple(article_selectors)
        self.boilerplate_selectors = tuple(boilerplate_selectors)
        self.parser = parser

    def extract(self, html) -> str:
        """
        Extract article text from HTML content.

        Args:
            html: Raw HTML as text, or bytes whose encoding BeautifulSoup detects

        Returns:
            Whitespace-collapsed article text (may be empty)
        """
        if not html:
            return ''

        soup = BeautifulSoup(html, self.parser)
        self._remove_boilerplate(soup)

        text = first_non_empty_match(soup, self.article_selectors)
        if not text:
            logger.debug("No article container found, falling back to page body")
            root = soup.body or soup
            text = root.get_text(' ', strip=True)

        return clean_extracted_text(text)

    def _remove_boilerplate(self, soup) -> None:
        for selector in self.boilerplate_selectors:
            for element in soup.select(selector):
                # nested matches are already gone with their ancestor
                if not element.decomposed:
                    element.decompose()
