"""
Tests for the embedded state extractor.
"""

import json
import unittest

from note_scraper.core.errors import NotFoundError, ParseError
from note_scraper.core.models import ImageRef, MediaType
from note_scraper.extractors.state_extractor import EmbeddedStateExtractor, replace_undefined
from note_scraper.extractors.state_schema import ImageItem

URL = 'https://www.xiaohongshu.com/explore/n1'


def note_state(note, note_id='n1', current_id='n1'):
    return {
        'global': {'appSettings': {}},
        'note': {
            'currentNoteId': current_id,
            'noteDetailMap': {note_id: {'note': note, 'comments': {'list': []}}},
        },
    }


def state_page(state, head=''):
    payload = state if isinstance(state, str) else json.dumps(state, ensure_ascii=False)
    return (
        f'<html><head>{head}</head><body><div id="app"></div>'
        f'<script>window.__INITIAL_STATE__={payload}</script>'
        '</body></html>'
    )


def basic_note(**fields):
    note = {
        'type': 'normal',
        'title': 'T',
        'desc': 'D',
        'user': {'userId': 'u1', 'nickname': 'nick', 'avatar': 'https://a/1.jpg'},
        'interactInfo': {'likedCount': '10', 'commentCount': '2', 'collectedCount': '3'},
    }
    note.update(fields)
    return note


class TestEmbeddedStateExtractor(unittest.TestCase):
    """Primary extraction path."""

    def setUp(self):
        self.extractor = EmbeddedStateExtractor()

    def test_normal_note_round_trip(self):
        record = self.extractor.parse(URL, state_page(note_state(basic_note())))

        self.assertIsNotNone(record)
        self.assertEqual(record.url, URL)
        self.assertEqual(record.type, MediaType.NORMAL)
        self.assertEqual(record.title, 'T')
        self.assertEqual(record.desc, 'D')
        self.assertIsNone(record.video)
        self.assertEqual(record.images, [])

    def test_text_is_returned_exactly_as_encoded(self):
        note = basic_note(title='  早安 ☀️ ', desc='第一行\n第二行 #标签[话题]#')
        record = self.extractor.parse(URL, state_page(note_state(note)))
        self.assertEqual(record.title, '  早安 ☀️ ')
        self.assertEqual(record.desc, '第一行\n第二行 #标签[话题]#')

    def test_video_note_resolves_first_stream_variant(self):
        note = basic_note(type='video', video={
            'media': {'stream': {'h264': [
                {'masterUrl': 'https://v/master1.mp4', 'backupUrls': ['https://v/backup1.mp4']},
                {'masterUrl': 'https://v/master2.mp4'},
            ]}}
        })
        record = self.extractor.parse(URL, state_page(note_state(note)))

        self.assertEqual(record.type, MediaType.VIDEO)
        self.assertEqual(record.video, 'https://v/master1.mp4')

    def test_video_note_without_stream_leaves_video_unset(self):
        for video in (None, {}, {'media': {}}, {'media': {'stream': {}}}, {'media': {'stream': {'h264': []}}}):
            with self.subTest(video=video):
                note = basic_note(type='video', video=video)
                record = self.extractor.parse(URL, state_page(note_state(note)))
                self.assertEqual(record.type, MediaType.VIDEO)
                self.assertIsNone(record.video)

    def test_video_stream_ignored_for_normal_notes(self):
        note = basic_note(video={'media': {'stream': {'h264': [{'masterUrl': 'https://v/1.mp4'}]}}})
        record = self.extractor.parse(URL, state_page(note_state(note)))
        self.assertEqual(record.type, MediaType.NORMAL)
        self.assertIsNone(record.video)

    def test_images_and_live_photos(self):
        note = basic_note(imageList=[
            {'urlDefault': 'https://img/1.jpg', 'urlPre': 'https://img/1_pre.jpg'},
            {
                'urlDefault': 'https://img/2.jpg',
                'livePhoto': True,
                'stream': {'h264': [{'masterUrl': 'https://live/2.mp4', 'backupUrls': []}]},
            },
            {
                'urlDefault': 'https://img/3.jpg',
                'livePhoto': False,
                'stream': {'h264': [{'masterUrl': 'https://live/3.mp4'}]},
            },
        ])
        record = self.extractor.parse(URL, state_page(note_state(note)))

        self.assertEqual(record.images, [
            ImageRef('https://img/1.jpg'),
            ImageRef('https://img/2.jpg', 'https://live/2.mp4'),
            ImageRef('https://img/3.jpg'),
        ])

    def test_live_photo_requires_true_flag(self):
        stream = {'h264': [{'masterUrl': 'https://live/1.mp4'}]}
        cases = [
            {'urlDefault': 'https://img/1.jpg', 'stream': stream},
            {'urlDefault': 'https://img/1.jpg', 'livePhoto': 'true', 'stream': stream},
            {'urlDefault': 'https://img/1.jpg', 'livePhoto': 1, 'stream': stream},
        ]
        for data in cases:
            with self.subTest(data=data):
                item = ImageItem.from_dict(data)
                self.assertIsNone(self.extractor.resolve_live_photo(item))

        note = basic_note(imageList=[cases[0]])
        record = self.extractor.parse(URL, state_page(note_state(note)))
        self.assertIsNone(record.images[0].live_photo)

    def test_live_photo_without_stream(self):
        item = ImageItem.from_dict({'urlDefault': 'https://img/1.jpg', 'livePhoto': True, 'stream': {'h264': []}})
        self.assertIsNone(self.extractor.resolve_live_photo(item))

    def test_image_url_priority(self):
        cases = [
            ({'urlDefault': 'default', 'urlPre': 'pre',
              'infoList': [{'imageScene': 'WB_DFT', 'url': 'dft'}, {'imageScene': 'WB_PRV', 'url': 'prv'}]},
             'default'),
            ({'urlPre': 'pre',
              'infoList': [{'imageScene': 'WB_PRV', 'url': 'prv'}, {'imageScene': 'WB_DFT', 'url': 'dft'}]},
             'dft'),
            ({'urlPre': 'pre', 'infoList': [{'imageScene': 'WB_PRV', 'url': 'prv'}]}, 'prv'),
            ({'urlPre': 'pre', 'infoList': [{'imageScene': 'OTHER', 'url': 'other'}]}, 'pre'),
            ({}, ''),
        ]
        for data, expected in cases:
            with self.subTest(expected=expected):
                item = ImageItem.from_dict(data)
                self.assertEqual(self.extractor.resolve_image_url(item), expected)

    def test_first_scene_match_wins(self):
        item = ImageItem.from_dict({'infoList': [
            {'imageScene': 'WB_DFT', 'url': 'dft1'},
            {'imageScene': 'WB_DFT', 'url': 'dft2'},
        ]})
        self.assertEqual(self.extractor.resolve_image_url(item), 'dft1')

    def test_unknown_fields_are_ignored(self):
        note = basic_note(ipLocation='上海', tagList=[{'id': 't'}], imageList=[
            {'urlDefault': 'https://img/1.jpg', 'width': 1080, 'height': 1440, 'fileId': 'x'}
        ])
        record = self.extractor.parse(URL, state_page(note_state(note)))
        self.assertEqual(record.images, [ImageRef('https://img/1.jpg')])

    def test_undefined_values_are_tolerated(self):
        payload = json.dumps(note_state(basic_note(title='undefined behaviour')), ensure_ascii=False)
        payload = payload.replace('"global": {', '"global": {"loginInfo":undefined,', 1)
        record = self.extractor.parse(URL, state_page(payload))

        self.assertIsNotNone(record)
        self.assertEqual(record.title, 'undefined behaviour')

    def test_missing_marker_returns_none(self):
        self.assertIsNone(self.extractor.parse(URL, '<html><body>nothing</body></html>'))
        self.assertIsNone(self.extractor.parse(URL, ''))

    def test_malformed_json_returns_none(self):
        html = state_page('{"note":{"currentNoteId":"n1","noteDetailMap":{"n1":{"note":{')
        self.assertIsNone(self.extractor.parse(URL, html))

    def test_unknown_current_note_returns_none(self):
        html = state_page(note_state(basic_note(), note_id='other', current_id='n1'))
        self.assertIsNone(self.extractor.parse(URL, html))

    def test_wrong_shape_returns_none(self):
        for state in ({'note': {'currentNoteId': 5, 'noteDetailMap': {}}}, {'user': {}}, [1, 2]):
            with self.subTest(state=state):
                self.assertIsNone(self.extractor.parse(URL, state_page(state)))

    def test_can_extract(self):
        soup = self.extractor.make_soup(state_page(note_state(basic_note())))
        self.assertTrue(self.extractor.can_extract(soup, URL))
        self.assertFalse(self.extractor.can_extract(self.extractor.make_soup('<p>x</p>'), URL))

    def test_extract_from_soup(self):
        soup = self.extractor.make_soup(state_page(note_state(basic_note(title='from soup'))))
        record = self.extractor.extract(soup, URL)
        self.assertEqual(record.title, 'from soup')


class TestStateDecoding(unittest.TestCase):
    """Lower level decoding steps."""

    def setUp(self):
        self.extractor = EmbeddedStateExtractor()

    def test_find_state_payload_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            self.extractor.find_state_payload('<script>window.other={}</script>')

    def test_find_state_payload_allows_spacing_and_semicolon(self):
        html = '<script>\n  window.__INITIAL_STATE__ = {"a": 1};\n</script>'
        self.assertEqual(self.extractor.find_state_payload(html), '{"a": 1}')

    def test_decode_state_raises_parse_error(self):
        with self.assertRaises(ParseError):
            self.extractor.decode_state('{"note": ')
        with self.assertRaises(ParseError):
            self.extractor.decode_state('{"note": {"noteDetailMap": {}}}')

    def test_resolve_note_raises_not_found(self):
        state = self.extractor.decode_state(json.dumps({
            'note': {'currentNoteId': 'n1', 'noteDetailMap': {'n1': {'comments': {}}}}
        }))
        with self.assertRaises(NotFoundError):
            self.extractor.resolve_note(state)

    def test_replace_undefined_leaves_strings_alone(self):
        self.assertEqual(
            replace_undefined('{"a":undefined,"b":"undefined","c":[undefined],"d":"say \\"undefined\\""}'),
            '{"a":null,"b":"undefined","c":[null],"d":"say \\"undefined\\""}'
        )


if __name__ == '__main__':
    unittest.main()
