#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data Models Module

Records produced by the extraction pipeline.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class MediaType(Enum):
    """Kind of note a page describes."""

    NORMAL = 'normal'
    VIDEO = 'video'


class ImageMergePolicy(Enum):
    """
    How the final image list is chosen.

    PREFER_PRIMARY_IMAGES keeps the images decoded from the embedded state
    (with live photos) and only uses the meta-tag images when that path gave
    nothing. ALWAYS_USE_META_IMAGES always replaces them with the meta-tag
    images.
    """

    PREFER_PRIMARY_IMAGES = 'prefer_primary'
    ALWAYS_USE_META_IMAGES = 'always_meta'

    @classmethod
    def from_value(cls, value: Any) -> 'ImageMergePolicy':
        if isinstance(value, cls):
            return value
        for policy in cls:
            if value in (policy.value, policy.name, policy.name.lower()):
                return policy
        raise ValueError(f"Unknown image merge policy: {value!r}")


@dataclass(frozen=True)
class ImageRef:
    image: str
    live_photo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'image': self.image, 'live_photo': self.live_photo}


@dataclass(frozen=True)
class PostRecord:
    """
    Final structured record for one note page.

    `video` is only ever set for VIDEO notes, and `images` never holds the
    same image URL twice.
    """

    url: str
    type: MediaType = MediaType.NORMAL
    title: str = ''
    desc: str = ''
    video: Optional[str] = None
    images: List[ImageRef] = field(default_factory=list)

    def __post_init__(self):
        if self.type is not MediaType.VIDEO and self.video is not None:
            object.__setattr__(self, 'video', None)
        object.__setattr__(self, 'images', dedupe_images(self.images))

    def with_changes(self, **changes: Any) -> 'PostRecord':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'type': self.type.value,
            'title': self.title,
            'desc': self.desc,
            'video': self.video,
            'images': [image.to_dict() for image in self.images],
        }


def dedupe_images(images: Iterable[ImageRef]) -> List[ImageRef]:
    """Drop repeated image URLs, keeping the first occurrence."""
    seen = set()
    unique = []
    for image in images:
        if image.image in seen:
            continue
        seen.add(image.image)
        unique.append(image)
    return unique
