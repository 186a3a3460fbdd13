#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Embedded State Extractor Module

Primary extraction path for note pages. Locates the JSON state assigned to
`window.__INITIAL_STATE__` inside a script tag, decodes it into the typed
schema and turns the current note into a PostRecord, including live photo
and video stream URLs that the meta tags never expose.
"""

import json
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from ..core.errors import NotFoundError, ParseError
from ..core.models import ImageRef, MediaType, PostRecord
from .base_extractor import BaseExtractor
from .state_schema import INITIAL_STATE_SCHEMA, ImageItem, InitialState, NoteInfo

logger = logging.getLogger('state_extractor')

STATE_MARKER = '__INITIAL_STATE__'
STATE_PATTERN = re.compile(
    r'window\.__INITIAL_STATE__\s*=\s*(.*?)\s*;?\s*</script>',
    re.DOTALL
)

# A JSON string literal or a bare `undefined`; strings are matched first so
# that the word is only rewritten outside of them
_UNDEFINED_PATTERN = re.compile(r'"(?:[^"\\]|\\.)*"|\bundefined\b')

# Image scene tags in order of preference after urlDefault
PREFERRED_IMAGE_SCENES = ('WB_DFT', 'WB_PRV')

VIDEO_NOTE_TYPE = 'video'

_STATE_VALIDATOR = Draft7Validator(INITIAL_STATE_SCHEMA)


class EmbeddedStateExtractor(BaseExtractor):
    """
    Extractor for the client-side state blob of a note page.

    `parse` never raises: a missing marker, an unknown note id or a broken
    JSON payload all result in None so the caller can fall back to the
    meta tags.
    """

    def can_extract(self, soup: BeautifulSoup, url: str) -> bool:
        """
        Check whether the page has a script assigning the initial state.

        Args:
            soup: BeautifulSoup object representing the parsed HTML
            url: URL of the page being processed

        Returns:
            True if a state assignment script is present
        """
        for script in soup.find_all('script'):
            if STATE_MARKER in (script.string or ''):
                return True
        return False

    def extract(self, soup: BeautifulSoup, url: str) -> Optional[PostRecord]:
        """
        Extract the note record from an already parsed page.

        Args:
            soup: BeautifulSoup object representing the parsed HTML
            url: URL of the page being processed

        Returns:
            PostRecord or None if the state is missing or unusable
        """
        return self.parse(url, str(soup))

    def parse(self, url: str, html: str) -> Optional[PostRecord]:
        """
        Extract the note record from raw HTML.

        Args:
            url: URL of the page being processed
            html: Raw HTML text

        Returns:
            PostRecord or None if the state is missing or unusable
        """
        try:
            payload = self.find_state_payload(html)
            state = self.decode_state(payload)
            note = self.resolve_note(state)
        except NotFoundError as e:
            logger.debug(f"No embedded state for {url}: {e}")
            return None
        except ParseError as e:
            logger.warning(f"Failed to parse embedded state for {url}: {e}")
            return None

        return self.build_record(url, note)

    def find_state_payload(self, html: str) -> str:
        """Return the raw text assigned to the initial state."""
        match = STATE_PATTERN.search(html or '')
        if not match or not match.group(1):
            raise NotFoundError(f"{STATE_MARKER} assignment not found in page")
        return match.group(1)

    def decode_state(self, payload: str) -> InitialState:
        """
        Decode the state payload into the typed schema.

        Raises:
            ParseError: If the payload is not JSON or lacks the note section
        """
        try:
            data = json.loads(replace_undefined(payload))
        except (ValueError, RecursionError) as e:
            raise ParseError(f"Invalid state JSON: {e}") from e

        error = best_match(_STATE_VALIDATOR.iter_errors(data))
        if error is not None:
            path = '.'.join(str(part) for part in error.absolute_path) or '<root>'
            raise ParseError(f"Unexpected state shape at {path}: {error.message}")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Decoded note state:\n%s", json.dumps(
                data.get('note'), ensure_ascii=False, indent=2
            ))

        return InitialState.from_dict(data)

    def resolve_note(self, state: InitialState) -> NoteInfo:
        """
        Look up the current note in the note detail map.

        Raises:
            NotFoundError: If the current note id has no usable detail entry
        """
        note_id = state.note.current_note_id
        detail = state.note.note_detail_map.get(note_id) if note_id else None
        if detail is None or detail.note is None:
            raise NotFoundError(f"Note details not found for id {note_id!r}")
        return detail.note

    def build_record(self, url: str, note: NoteInfo) -> PostRecord:
        is_video = note.type == VIDEO_NOTE_TYPE
        return PostRecord(
            url=url,
            type=MediaType.VIDEO if is_video else MediaType.NORMAL,
            title=note.title or '',
            desc=note.desc or '',
            video=self.resolve_video(note) if is_video else None,
            images=self.build_images(note),
        )

    def build_images(self, note: NoteInfo) -> List[ImageRef]:
        return [
            ImageRef(
                image=self.resolve_image_url(item),
                live_photo=self.resolve_live_photo(item),
            )
            for item in note.image_list or []
        ]

    @staticmethod
    def resolve_image_url(item: ImageItem) -> str:
        """
        Pick the display URL of an image.

        Order: urlDefault, then the WB_DFT and WB_PRV alternates, then urlPre.
        """
        if item.url_default:
            return item.url_default
        for scene in PREFERRED_IMAGE_SCENES:
            url = item.scene_url(scene)
            if url:
                return url
        return item.url_pre or ''

    @staticmethod
    def resolve_live_photo(item: ImageItem) -> Optional[str]:
        if item.live_photo is not True or item.stream is None:
            return None
        return item.stream.first_master_url()

    @staticmethod
    def resolve_video(note: NoteInfo) -> Optional[str]:
        if note.video is None:
            return None
        return note.video.master_url()


def replace_undefined(payload: str) -> str:
    """Rewrite bare JavaScript `undefined` values as JSON `null`."""

    def _sub(match: 're.Match[str]') -> str:
        token = match.group(0)
        return token if token.startswith('"') else 'null'

    return _UNDEFINED_PATTERN.sub(_sub, payload)
