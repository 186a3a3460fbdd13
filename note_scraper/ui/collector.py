#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
URL Collector Module

Keeps the list of links a user has queued for later viewing. The list only
grows until it is cleared, and is shown newest first. Opening an entry hands
it to the system browser; the collector never runs the extraction pipeline.
"""

import logging
import webbrowser
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..utils.url_utils import ensure_scheme

logger = logging.getLogger('collector')


@dataclass(frozen=True)
class CollectedItem:
    url: str


class UrlCollector:
    """
    In-memory queue of user-entered URLs owned by one UI session.
    """

    def __init__(self, opener: Optional[Callable[[str], bool]] = None):
        """
        Initialize an empty collector.

        Args:
            opener: Callable that opens a URL; webbrowser.open if None
        """
        self._items: List[CollectedItem] = []
        self._opener = opener or webbrowser.open

    def __len__(self) -> int:
        return len(self._items)

    def add(self, raw_url: str) -> Optional[CollectedItem]:
        """
        Queue a URL as typed by the user.

        Args:
            raw_url: User input; surrounding whitespace is removed

        Returns:
            The stored item, or None if the input was blank
        """
        url = (raw_url or '').strip()
        if not url:
            return None

        item = CollectedItem(url)
        self._items.append(item)
        logger.debug(f"Collected {url} ({len(self._items)} total)")
        return item

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> List[CollectedItem]:
        """Collected items, newest first."""
        return list(reversed(self._items))

    def open(self, index: int) -> str:
        """
        Open the item at `index` of the newest-first listing.

        A missing scheme is replaced with https:// before navigation.

        Args:
            index: Position in `items()`

        Returns:
            The URL that was opened

        Raises:
            IndexError: If there is no item at `index`
        """
        items = self.items()
        if not 0 <= index < len(items):
            raise IndexError(f"No collected item at position {index}")

        url = ensure_scheme(items[index].url)
        logger.info(f"Opening {url}")
        self._opener(url)
        return url
