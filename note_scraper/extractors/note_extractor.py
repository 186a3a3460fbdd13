#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Note Extractor Module

Builds the final PostRecord for a note page by reconciling two sources:
- The embedded state blob (primary, richest data)
- OpenGraph / Twitter card meta tags (fallback)

Text fields from the embedded state always win; meta tags fill in a record
when the state is unusable and backfill the video URL. Where the image list
comes from is decided by the configured ImageMergePolicy.
"""

import logging
from typing import Dict, Any, List, Optional

from bs4 import BeautifulSoup

from ..core.models import ImageMergePolicy, ImageRef, MediaType, PostRecord
from .base_extractor import BaseExtractor
from .state_extractor import EmbeddedStateExtractor

logger = logging.getLogger('note_extractor')

# Suffix the platform appends to every og:title
DEFAULT_TITLE_SUFFIX = ' - 小红书'

TITLE_KEYS = ('og:title', 'twitter:title')
DESCRIPTION_KEYS = ('description', 'og:description', 'twitter:description')
VIDEO_KEYS = ('og:video', 'twitter:video')


class NoteExtractor(BaseExtractor):
    """
    Extractor producing one PostRecord per note page.

    Configuration keys:
    - image_policy: 'prefer_primary' (default) or 'always_meta'
    - title_suffix: site suffix stripped from meta titles
    - parser: BeautifulSoup parser name
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the note extractor with optional configuration.

        Args:
            config: Configuration dictionary with extraction settings
        """
        super().__init__(config)

        if 'image_policy' not in self.config:
            logger.debug(f"No image policy given, using {ImageMergePolicy.PREFER_PRIMARY_IMAGES.value}")
        self.config.setdefault('image_policy', ImageMergePolicy.PREFER_PRIMARY_IMAGES)
        self.config.setdefault('title_suffix', DEFAULT_TITLE_SUFFIX)

        self.image_policy = ImageMergePolicy.from_value(self.config['image_policy'])
        self.state_extractor = EmbeddedStateExtractor(self.config)

    def can_extract(self, soup: BeautifulSoup, url: str) -> bool:
        """
        Check if the page carries either the embedded state or preview meta tags.

        Args:
            soup: BeautifulSoup object representing the parsed HTML
            url: URL of the page being processed

        Returns:
            True if at least one data source is present
        """
        if self.state_extractor.can_extract(soup, url):
            return True
        meta_tags = self.extract_meta_tags(soup)
        return any(key in meta_tags for key in TITLE_KEYS + DESCRIPTION_KEYS)

    def extract(self, soup: BeautifulSoup, url: str) -> PostRecord:
        """
        Extract a note record from an already parsed page.

        Args:
            soup: BeautifulSoup object representing the parsed HTML
            url: URL of the page being processed

        Returns:
            PostRecord for the page
        """
        primary = self.state_extractor.extract(soup, url)
        return self.compose(
            url,
            primary,
            self.extract_meta_tags(soup),
            self.extract_meta_images(soup),
        )

    def extract_html(self, url: str, html: str) -> PostRecord:
        """
        Extract a note record from raw HTML.

        Never raises for any page content; missing data leaves fields at
        their defaults.

        Args:
            url: URL of the page being processed
            html: Raw HTML text

        Returns:
            PostRecord for the page
        """
        primary = self.state_extractor.parse(url, html)
        soup = self.make_soup(html)
        return self.compose(
            url,
            primary,
            self.extract_meta_tags(soup),
            self.extract_meta_images(soup),
        )

    def compose(
        self,
        url: str,
        primary: Optional[PostRecord],
        meta_tags: Dict[str, str],
        meta_images: List[str]
    ) -> PostRecord:
        """
        Merge the primary record with meta tag data.

        Args:
            url: URL of the page being processed
            primary: Record from the embedded state, or None
            meta_tags: Lowercase meta key to content map
            meta_images: Harvested preview image URLs

        Returns:
            The reconciled PostRecord
        """
        if primary is not None:
            record = primary
        else:
            logger.info(f"Falling back to meta tags for {url}")
            record = self.record_from_meta(url, meta_tags)

        if record.type is MediaType.VIDEO and not record.video:
            video = self._first_meta(meta_tags, VIDEO_KEYS)
            if video:
                record = record.with_changes(video=video)

        return record.with_changes(images=self._merge_images(primary, meta_images))

    def record_from_meta(self, url: str, meta_tags: Dict[str, str]) -> PostRecord:
        """Build a record from meta tags alone."""
        title = self.strip_title_suffix(self._first_meta(meta_tags, TITLE_KEYS))
        is_video = meta_tags.get('og:type', '').strip() == 'video'

        return PostRecord(
            url=url,
            type=MediaType.VIDEO if is_video else MediaType.NORMAL,
            title=title,
            desc=self._first_meta(meta_tags, DESCRIPTION_KEYS),
        )

    def strip_title_suffix(self, title: str) -> str:
        """
        Remove the platform suffix from a meta title.

        Args:
            title: Raw og:title or twitter:title value

        Returns:
            Title without the suffix and surrounding whitespace
        """
        title = self.clean_text(title)
        suffix = (self.config.get('title_suffix') or '').strip()
        if suffix and title.endswith(suffix):
            title = title[:-len(suffix)]
        return title.strip()

    def _merge_images(self, primary: Optional[PostRecord], meta_images: List[str]) -> List[ImageRef]:
        if (self.image_policy is ImageMergePolicy.PREFER_PRIMARY_IMAGES
                and primary is not None and primary.images):
            return primary.images

        # Meta tags never describe live photos
        return [ImageRef(image=url) for url in meta_images]

    @staticmethod
    def _first_meta(meta_tags: Dict[str, str], keys) -> str:
        for key in keys:
            value = (meta_tags.get(key) or '').strip()
            if value:
                return value
        return ''
