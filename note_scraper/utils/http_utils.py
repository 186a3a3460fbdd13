#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HTTP Utilities Module

Provides utilities for HTTP operations:
- Browser-like request headers
- Response validation
- Response text decoding
"""

import random
from typing import Dict, Optional

from requests.models import Response

# Common user agent strings for popular browsers
USER_AGENTS = [
    # Chrome
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",

    # Firefox
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:125.0) Gecko/20100101 Firefox/125.0",

    # Safari
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",

    # Edge
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36 Edg/124.0.0.0",
]

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8"


def get_random_user_agent() -> str:
    """
    Get a random user agent string from common browsers.

    Returns:
        Random user agent string
    """
    return random.choice(USER_AGENTS)


def create_headers(
    user_agent: Optional[str] = None,
    accept_language: str = "zh-CN,zh;q=0.9,en;q=0.8",
    custom_headers: Optional[Dict[str, str]] = None
) -> Dict[str, str]:
    """
    Create HTTP headers for fetching an HTML page.

    Args:
        user_agent: User-Agent string (random if None)
        accept_language: Accept-Language header value
        custom_headers: Additional custom headers

    Returns:
        Dictionary of headers
    """
    headers = {
        "User-Agent": user_agent or get_random_user_agent(),
        "Accept": HTML_ACCEPT,
        "Accept-Language": accept_language,
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }

    if custom_headers:
        headers.update(custom_headers)

    return headers


def is_success_response(response: Response) -> bool:
    """
    Check if response indicates success (2xx status code).

    Args:
        response: HTTP response object

    Returns:
        True if successful
    """
    return 200 <= response.status_code < 300


def decode_response_text(response: Response) -> str:
    """
    Decode a response body, assuming UTF-8 when no charset was declared.

    requests would otherwise fall back to ISO-8859-1 for text/* responses.

    Args:
        response: HTTP response object

    Returns:
        Response body as text
    """
    content_type = response.headers.get('Content-Type', '').lower()
    if 'charset=' not in content_type:
        response.encoding = 'utf-8'
    return response.text
