"""
Data extractors for note pages.
"""

from .base_extractor import BaseExtractor
from .note_extractor import NoteExtractor
from .state_extractor import EmbeddedStateExtractor

__all__ = [
    'BaseExtractor',
    'EmbeddedStateExtractor',
    'NoteExtractor'
]
