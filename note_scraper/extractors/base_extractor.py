#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Base Extractor Module

Provides the base class for note extractors together with the meta tag
helpers every extractor relies on:
- Meta tag scanning into a case-insensitive key/content map
- Preview image harvesting from og:image / twitter:image tags
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List

from bs4 import BeautifulSoup, Tag

# Meta keys that carry preview images
IMAGE_META_KEYS = ('og:image', 'twitter:image')


class BaseExtractor(ABC):
    """
    Base class for all note extractors.

    Subclasses implement `extract` to turn a parsed page into a record and
    `can_extract` to tell whether a page carries the data they read.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the extractor with optional configuration.

        Args:
            config: Configuration dictionary for customizing extraction behavior
        """
        self.config = dict(config or {})
        self.config.setdefault('parser', 'lxml')

    @abstractmethod
    def extract(self, soup: BeautifulSoup, url: str) -> Any:
        """
        Extract data from a web page.

        Args:
            soup: BeautifulSoup object representing the parsed HTML
            url: URL of the page being processed

        Returns:
            Extracted record
        """
        pass

    @abstractmethod
    def can_extract(self, soup: BeautifulSoup, url: str) -> bool:
        """
        Check if this extractor can extract data from a given page.

        Args:
            soup: BeautifulSoup object representing the parsed HTML
            url: URL of the page being processed

        Returns:
            True if the extractor can process this page
        """
        pass

    def make_soup(self, html: str) -> BeautifulSoup:
        """Parse raw HTML with the configured parser."""
        return BeautifulSoup(html or '', self.config['parser'])

    def clean_text(self, text: Optional[str]) -> str:
        """
        Clean and normalize a text string.

        Args:
            text: Text to clean

        Returns:
            Cleaned text
        """
        if not text:
            return ""

        return text.strip()

    def extract_meta_tags(self, soup: BeautifulSoup) -> Dict[str, str]:
        """
        Extract meta tags from a web page.

        The key is read from `property` first and `name` second and is
        lowercased; later tags overwrite earlier ones with the same key.

        Args:
            soup: BeautifulSoup object representing the parsed HTML

        Returns:
            Dictionary of lowercase meta tag key to content
        """
        meta_tags = {}

        for meta in soup.find_all('meta'):
            key = self._meta_key(meta)
            content = meta.get('content')
            if not key or content is None:
                continue
            meta_tags[key] = content

        return meta_tags

    def extract_meta_images(self, soup: BeautifulSoup) -> List[str]:
        """
        Extract preview image URLs from og:image and twitter:image tags.

        A plain key/content map keeps only one value per key, so pages that
        list several images need this separate pass.

        Args:
            soup: BeautifulSoup object representing the parsed HTML

        Returns:
            Image URLs in document order without duplicates
        """
        images = []
        seen = set()

        for meta in soup.find_all('meta'):
            if self._meta_key(meta) not in IMAGE_META_KEYS:
                continue

            content = (meta.get('content') or '').strip()
            if not content or content in seen:
                continue

            seen.add(content)
            images.append(content)

        return images

    @staticmethod
    def _meta_key(meta: Tag) -> Optional[str]:
        for attr in ('property', 'name'):
            value = meta.get(attr)
            if value and value.strip():
                return value.strip().lower()
        return None
