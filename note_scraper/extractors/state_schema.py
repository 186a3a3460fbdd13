#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Embedded State Schema Module

Typed view of the `window.__INITIAL_STATE__` document injected into note
pages. Every field is optional: `from_dict` accepts anything and falls back
to an absent value whenever a key is missing or holds the wrong type, and
unknown keys are ignored.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Minimal shape required before the note can be resolved at all
INITIAL_STATE_SCHEMA = {
    'type': 'object',
    'required': ['note'],
    'properties': {
        'note': {
            'type': 'object',
            'required': ['currentNoteId', 'noteDetailMap'],
            'properties': {
                'currentNoteId': {'type': 'string'},
                'noteDetailMap': {'type': 'object'},
            },
        },
    },
}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> Optional[List[Any]]:
    return value if isinstance(value, list) else None


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_count(value: Any) -> Optional[str]:
    # Counters show up both as "1.2万" style strings and as plain numbers
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return _as_str(value)


@dataclass(frozen=True)
class EncodedVariant:
    """One transcoded rendition of a video or motion stream."""

    master_url: Optional[str] = None
    backup_urls: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: Any) -> 'EncodedVariant':
        data = _as_dict(obj)
        backups = _as_list(data.get('backupUrls')) or []
        return cls(
            master_url=_as_str(data.get('masterUrl')),
            backup_urls=[url for url in backups if isinstance(url, str)],
        )


@dataclass(frozen=True)
class Stream:
    h264: Optional[List[EncodedVariant]] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['Stream']:
        if not isinstance(obj, dict):
            return None
        variants = _as_list(obj.get('h264'))
        return cls(
            h264=[EncodedVariant.from_dict(item) for item in variants]
            if variants is not None else None
        )

    def first_master_url(self) -> Optional[str]:
        if not self.h264:
            return None
        return self.h264[0].master_url


@dataclass(frozen=True)
class Media:
    stream: Optional[Stream] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['Media']:
        if not isinstance(obj, dict):
            return None
        return cls(stream=Stream.from_dict(obj.get('stream')))


@dataclass(frozen=True)
class VideoDescriptor:
    media: Optional[Media] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['VideoDescriptor']:
        if not isinstance(obj, dict):
            return None
        return cls(media=Media.from_dict(obj.get('media')))

    def master_url(self) -> Optional[str]:
        if self.media is None or self.media.stream is None:
            return None
        return self.media.stream.first_master_url()


@dataclass(frozen=True)
class ImageInfo:
    image_scene: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, obj: Any) -> 'ImageInfo':
        data = _as_dict(obj)
        return cls(
            image_scene=_as_str(data.get('imageScene')),
            url=_as_str(data.get('url')),
        )


@dataclass(frozen=True)
class ImageItem:
    url_default: Optional[str] = None
    url_pre: Optional[str] = None
    live_photo: Optional[bool] = None
    info_list: Optional[List[ImageInfo]] = None
    stream: Optional[Stream] = None

    @classmethod
    def from_dict(cls, obj: Any) -> 'ImageItem':
        data = _as_dict(obj)
        infos = _as_list(data.get('infoList'))
        live_photo = data.get('livePhoto')
        return cls(
            url_default=_as_str(data.get('urlDefault')),
            url_pre=_as_str(data.get('urlPre')),
            live_photo=live_photo if isinstance(live_photo, bool) else None,
            info_list=[ImageInfo.from_dict(item) for item in infos]
            if infos is not None else None,
            stream=Stream.from_dict(data.get('stream')),
        )

    def scene_url(self, scene: str) -> Optional[str]:
        """URL of the first alternate tagged with `scene`, if any."""
        for info in self.info_list or []:
            if info.image_scene == scene:
                return info.url
        return None


@dataclass(frozen=True)
class UserInfo:
    user_id: Optional[str] = None
    nickname: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['UserInfo']:
        if not isinstance(obj, dict):
            return None
        return cls(
            user_id=_as_str(obj.get('userId')),
            nickname=_as_str(obj.get('nickname')),
            avatar=_as_str(obj.get('avatar')),
        )


@dataclass(frozen=True)
class InteractInfo:
    liked_count: Optional[str] = None
    comment_count: Optional[str] = None
    collected_count: Optional[str] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['InteractInfo']:
        if not isinstance(obj, dict):
            return None
        return cls(
            liked_count=_as_count(obj.get('likedCount')),
            comment_count=_as_count(obj.get('commentCount')),
            collected_count=_as_count(obj.get('collectedCount')),
        )


@dataclass(frozen=True)
class NoteInfo:
    type: Optional[str] = None
    title: Optional[str] = None
    desc: Optional[str] = None
    user: Optional[UserInfo] = None
    interact_info: Optional[InteractInfo] = None
    image_list: Optional[List[ImageItem]] = None
    video: Optional[VideoDescriptor] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['NoteInfo']:
        if not isinstance(obj, dict):
            return None
        images = _as_list(obj.get('imageList'))
        return cls(
            type=_as_str(obj.get('type')),
            title=_as_str(obj.get('title')),
            desc=_as_str(obj.get('desc')),
            user=UserInfo.from_dict(obj.get('user')),
            interact_info=InteractInfo.from_dict(obj.get('interactInfo')),
            image_list=[ImageItem.from_dict(item) for item in images]
            if images is not None else None,
            video=VideoDescriptor.from_dict(obj.get('video')),
        )


@dataclass(frozen=True)
class NoteDetail:
    note: Optional[NoteInfo] = None

    @classmethod
    def from_dict(cls, obj: Any) -> Optional['NoteDetail']:
        if not isinstance(obj, dict):
            return None
        return cls(note=NoteInfo.from_dict(obj.get('note')))


@dataclass(frozen=True)
class NoteState:
    current_note_id: Optional[str] = None
    note_detail_map: Dict[str, NoteDetail] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, obj: Any) -> 'NoteState':
        data = _as_dict(obj)
        details = {}
        for note_id, detail in _as_dict(data.get('noteDetailMap')).items():
            parsed = NoteDetail.from_dict(detail)
            if parsed is not None:
                details[note_id] = parsed
        return cls(
            current_note_id=_as_str(data.get('currentNoteId')),
            note_detail_map=details,
        )


@dataclass(frozen=True)
class InitialState:
    note: NoteState = field(default_factory=NoteState)

    @classmethod
    def from_dict(cls, obj: Any) -> 'InitialState':
        return cls(note=NoteState.from_dict(_as_dict(obj).get('note')))
