"""
Middleware components for the fetcher.
"""

from .host_throttle import HostThrottle

__all__ = ['HostThrottle']
