"""
Utility functions for the extraction pipeline.
"""

from .url_utils import (
    ensure_scheme,
    get_domain,
    is_valid_url
)

from .http_utils import (
    get_random_user_agent,
    create_headers,
    is_success_response,
    decode_response_text
)

from .config_loader import (
    DEFAULT_CONFIG,
    load_config,
    build_config
)

__all__ = [
    # URL utilities
    'ensure_scheme', 'get_domain', 'is_valid_url',

    # HTTP utilities
    'get_random_user_agent', 'create_headers', 'is_success_response',
    'decode_response_text',

    # Configuration
    'DEFAULT_CONFIG', 'load_config', 'build_config'
]
