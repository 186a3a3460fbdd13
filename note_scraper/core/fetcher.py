#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Document Fetcher Module

Retrieves the raw HTML of a note page. Any transport problem (connection,
TLS, timeout, non-2xx status) is raised as FetchError; a partially received
body is never returned.
"""

import logging
from typing import Dict, Optional

import requests

from ..middlewares.host_throttle import HostThrottle
from ..utils.http_utils import create_headers, decode_response_text, is_success_response
from ..utils.url_utils import get_domain, is_valid_url
from .errors import FetchError

logger = logging.getLogger('fetcher')


class DocumentFetcher:
    """
    Thin wrapper around a requests session that fetches HTML pages.
    """

    def __init__(
        self,
        timeout: float = 30,
        user_agent: Optional[str] = None,
        accept_language: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        proxy: Optional[str] = None,
        verify_ssl: bool = True,
        throttle: Optional[HostThrottle] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Timeout for requests in seconds
            user_agent: User-Agent string (a common browser one if None)
            accept_language: Accept-Language header value
            headers: Additional headers to send with every request
            proxy: Proxy URL used for both http and https
            verify_ssl: Whether to verify SSL certificates
            throttle: Optional per-host throttle shared across threads
            session: Session to use instead of a new one
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.throttle = throttle
        self.proxies = {'http': proxy, 'https': proxy} if proxy else None

        header_kwargs = {'user_agent': user_agent, 'custom_headers': headers}
        if accept_language:
            header_kwargs['accept_language'] = accept_language
        self.headers = create_headers(**header_kwargs)

        self.session = session or requests.Session()
        self.session.headers.update(self.headers)

    def fetch(self, url: str) -> str:
        """
        Fetch the HTML text of a page.

        Args:
            url: URL to fetch

        Returns:
            Response body as text

        Raises:
            FetchError: If the URL is not http(s), the request fails or the status is not 2xx
        """
        if not is_valid_url(url):
            raise FetchError(url, f"Invalid URL: {url!r}")

        if self.throttle is not None:
            with self.throttle.slot(get_domain(url)):
                return self._get(url)
        return self._get(url)

    def close(self) -> None:
        self.session.close()

    def _get(self, url: str) -> str:
        logger.debug(f"Fetching URL: {url}")

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                proxies=self.proxies,
                verify=self.verify_ssl,
                allow_redirects=True
            )
        except requests.exceptions.SSLError as e:
            raise FetchError(url, f"SSL Error: {e}") from e
        except requests.exceptions.ConnectionError as e:
            raise FetchError(url, f"Connection Error: {e}") from e
        except requests.exceptions.Timeout as e:
            raise FetchError(url, f"Timeout Error: {e}") from e
        except requests.exceptions.RequestException as e:
            raise FetchError(url, f"Request Error: {e}") from e

        if not is_success_response(response):
            raise FetchError(
                url,
                f"HTTP Error: {response.status_code}",
                status_code=response.status_code
            )

        try:
            text = decode_response_text(response)
        except requests.exceptions.RequestException as e:
            raise FetchError(url, f"Failed to read response body: {e}") from e

        logger.debug(f"Fetched {len(text)} characters from {response.url}")
        return text
