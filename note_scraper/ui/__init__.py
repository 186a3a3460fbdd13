"""
User-facing helpers that sit next to the extraction pipeline.
"""

from .collector import CollectedItem, UrlCollector

__all__ = ['CollectedItem', 'UrlCollector']
