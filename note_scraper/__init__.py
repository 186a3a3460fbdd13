"""
note_scraper - structured records from social media note pages.
"""

from .core.errors import ConfigError, FetchError, NotFoundError, ParseError, ScraperError
from .core.models import ImageMergePolicy, ImageRef, MediaType, PostRecord
from .core.pipeline import NotePipeline

__version__ = "0.1.0"

__all__ = [
    'ConfigError',
    'FetchError',
    'ImageMergePolicy',
    'ImageRef',
    'MediaType',
    'NotFoundError',
    'NotePipeline',
    'ParseError',
    'PostRecord',
    'ScraperError',
]
