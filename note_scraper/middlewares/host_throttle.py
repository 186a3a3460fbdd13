#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Host Throttle Middleware

Keeps concurrent fetches from overloading a single host. Supports:
- A cap on in-flight requests per host
- A minimum spacing between request starts to the same host
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

logger = logging.getLogger('host_throttle')


class HostThrottle:
    """
    Per-host concurrency and pacing control shared by all fetch threads.
    """

    def __init__(
        self,
        max_per_host: int = 2,
        min_delay: float = 0.0,
        per_host_delays: Optional[Dict[str, float]] = None
    ):
        """
        Initialize the throttle.

        Args:
            max_per_host: Maximum number of in-flight requests per host
            min_delay: Minimum seconds between request starts to one host
            per_host_delays: Dictionary mapping hosts to specific delays
        """
        if max_per_host < 1:
            raise ValueError("max_per_host must be at least 1")

        self.max_per_host = max_per_host
        self.min_delay = max(0.0, min_delay)
        self.per_host_delays = dict(per_host_delays or {})

        self._semaphores: Dict[str, threading.BoundedSemaphore] = {}
        self._next_start: Dict[str, float] = {}

        # Thread synchronization
        self.lock = threading.Lock()

        logger.debug(f"Host throttle initialized: {max_per_host} per host, {self.min_delay}s spacing")

    @contextmanager
    def slot(self, host: str) -> Iterator[None]:
        """
        Hold one request slot for `host` for the duration of the block.

        Args:
            host: Host the request goes to
        """
        semaphore = self._semaphore_for(host)
        semaphore.acquire()
        try:
            self._wait_for_turn(host)
            yield
        finally:
            semaphore.release()

    def delay_for(self, host: str) -> float:
        return max(0.0, self.per_host_delays.get(host, self.min_delay))

    def _semaphore_for(self, host: str) -> threading.BoundedSemaphore:
        with self.lock:
            semaphore = self._semaphores.get(host)
            if semaphore is None:
                semaphore = threading.BoundedSemaphore(self.max_per_host)
                self._semaphores[host] = semaphore
            return semaphore

    def _wait_for_turn(self, host: str) -> None:
        delay = self.delay_for(host)
        if delay <= 0:
            return

        with self.lock:
            now = time.monotonic()
            start_at = max(now, self._next_start.get(host, now))
            self._next_start[host] = start_at + delay

        # Wait outside the lock to allow other threads to proceed
        wait_time = start_at - now
        if wait_time > 0:
            logger.debug(f"Throttling: waiting {wait_time:.2f}s for {host}")
            time.sleep(wait_time)
