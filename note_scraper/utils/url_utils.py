#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
URL Utilities Module

Provides small helpers for URLs typed or pasted by users:
- Scheme normalization
- Domain extraction
- URL validation
"""

import re
from urllib.parse import urlparse

DEFAULT_SCHEME = 'https'

_SCHEME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*://')


def ensure_scheme(url: str, scheme: str = DEFAULT_SCHEME) -> str:
    """
    Prepend a scheme to a URL that has none.

    Args:
        url: URL as entered by a user, e.g. "www.example.com"
        scheme: Scheme to prepend when missing

    Returns:
        Trimmed URL that starts with a scheme
    """
    url = (url or '').strip()
    if not url or _SCHEME_PATTERN.match(url):
        return url

    # Protocol-relative URLs already carry the authority
    if url.startswith('//'):
        return f"{scheme}:{url}"

    return f"{scheme}://{url}"


def get_domain(url: str) -> str:
    """
    Extract the domain from a URL.

    Args:
        url: URL to extract domain from

    Returns:
        Domain name without port
    """
    parsed = urlparse(url)
    domain = parsed.netloc.lower()

    # Remove port if present
    if ':' in domain:
        domain = domain.split(':', 1)[0]

    return domain


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is a fetchable http(s) URL.

    Args:
        url: URL to validate

    Returns:
        True if URL has an http(s) scheme and a host
    """
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return result.scheme in ('http', 'https') and bool(result.netloc)
