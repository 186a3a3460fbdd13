#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Extraction Pipeline Module

Ties the fetcher and the note extractor together:
- Single page extraction (fetch, then synchronous parsing)
- Parallel extraction of many pages with configurable workers
- Per-host throttling of in-flight fetches
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from tqdm import tqdm

from ..extractors.note_extractor import NoteExtractor
from ..middlewares.host_throttle import HostThrottle
from ..utils.config_loader import DEFAULT_CONFIG
from .errors import FetchError
from .fetcher import DocumentFetcher
from .models import PostRecord

logger = logging.getLogger('pipeline')

FetchFn = Callable[[str], str]


class NotePipeline:
    """
    Fetches note pages and extracts a PostRecord from each.

    Calls share nothing but the HTTP session and the host throttle, so
    `extract` is safe to run from several threads at once.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        fetch: Optional[FetchFn] = None,
        extractor: Optional[NoteExtractor] = None
    ):
        """
        Initialize the pipeline.

        Args:
            config: Configuration dictionary (see utils.config_loader.DEFAULT_CONFIG)
            fetch: Callable returning the HTML of a URL; a DocumentFetcher is used if None
            extractor: Note extractor to use instead of one built from config
        """
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})

        self.fetcher: Optional[DocumentFetcher] = None
        if fetch is None:
            self.fetcher = DocumentFetcher(
                timeout=self.config['timeout'],
                user_agent=self.config['user_agent'],
                accept_language=self.config['accept_language'],
                proxy=self.config['proxy'],
                verify_ssl=self.config['verify_ssl'],
                throttle=HostThrottle(
                    max_per_host=self.config['max_per_host'],
                    min_delay=self.config['min_host_delay'],
                    per_host_delays=self.config['host_delays']
                )
            )
            fetch = self.fetcher.fetch

        self.fetch = fetch
        self.extractor = extractor or NoteExtractor({
            'image_policy': self.config['image_policy'],
            'title_suffix': self.config['title_suffix'],
            'parser': self.config['parser'],
        })

    def extract(self, url: str) -> PostRecord:
        """
        Fetch a page and extract its note record.

        Args:
            url: URL of the note page

        Returns:
            PostRecord, with default fields where the page lacked data

        Raises:
            FetchError: If the page could not be retrieved
        """
        html = self.fetch(url)
        return self.extract_html(url, html)

    def extract_html(self, url: str, html: str) -> PostRecord:
        """
        Extract a note record from HTML that was already retrieved.

        Args:
            url: URL the HTML came from
            html: Raw HTML text

        Returns:
            PostRecord for the page
        """
        return self.extractor.extract_html(url, html)

    def extract_many(
        self,
        urls: Sequence[str],
        max_workers: Optional[int] = None,
        show_progress: bool = False
    ) -> List[Dict[str, Any]]:
        """
        Extract several pages in parallel.

        A page that fails to fetch yields an error entry and does not affect
        the others.

        Args:
            urls: URLs to process
            max_workers: Number of worker threads (config value if None)
            show_progress: Whether to display a progress bar

        Returns:
            One result dictionary per URL, in input order
        """
        workers = max(1, max_workers or self.config['max_workers'])
        start_time = time.time()
        logger.info(f"Extracting {len(urls)} URLs with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = executor.map(self._extract_result, urls)
            if show_progress:
                results = tqdm(results, total=len(urls), desc="Extracting", unit="page")
            results = list(results)

        failed = sum(1 for r in results if r['status'] == 'error')
        elapsed_time = time.time() - start_time
        logger.info(f"Extraction completed in {elapsed_time:.2f} seconds. {len(results) - failed} succeeded, {failed} failed.")

        return results

    def close(self) -> None:
        if self.fetcher is not None:
            self.fetcher.close()

    def __enter__(self) -> 'NotePipeline':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _extract_result(self, url: str) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'url': url,
            'crawl_time': datetime.now().isoformat(),
        }

        try:
            record = self.extract(url)
        except FetchError as e:
            logger.error(f"Failed to fetch {url}: {e}")
            result['status'] = 'error'
            result['error'] = str(e)
            return result

        result['status'] = 'success'
        result['data'] = record.to_dict()
        return result
