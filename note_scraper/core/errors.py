#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Error Types Module

Exceptions raised while fetching and extracting note pages. Only FetchError
is allowed to escape the extraction pipeline; the others are absorbed and
turned into empty or default fields.
"""

from typing import Optional


class ScraperError(RuntimeError):
    """Base class for all note_scraper errors."""


class FetchError(ScraperError):
    """Raised when a page cannot be retrieved (network, timeout, HTTP status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NotFoundError(ScraperError):
    """Raised when an expected piece of page data is simply absent."""


class ParseError(ScraperError):
    """Raised when embedded page data is malformed or has an unexpected shape."""


class ConfigError(ScraperError):
    """Raised when configuration is missing or invalid."""
