"""
Tests for the link collector and URL helpers.
"""

import io
import unittest
from unittest import mock

from note_scraper.main import run_collector
from note_scraper.ui.collector import UrlCollector
from note_scraper.utils.url_utils import ensure_scheme, get_domain, is_valid_url


class TestUrlHelpers(unittest.TestCase):

    def test_ensure_scheme(self):
        self.assertEqual(ensure_scheme('www.example.com'), 'https://www.example.com')
        self.assertEqual(ensure_scheme('  xhslink.com/o/abc '), 'https://xhslink.com/o/abc')
        self.assertEqual(ensure_scheme('//cdn.example.com/a'), 'https://cdn.example.com/a')
        self.assertEqual(ensure_scheme('http://example.com'), 'http://example.com')
        self.assertEqual(ensure_scheme('HTTPS://example.com'), 'HTTPS://example.com')
        self.assertEqual(ensure_scheme(''), '')

    def test_get_domain(self):
        self.assertEqual(get_domain('https://WWW.Example.com:8080/a'), 'www.example.com')

    def test_is_valid_url(self):
        self.assertTrue(is_valid_url('https://www.xiaohongshu.com/explore/1'))
        self.assertFalse(is_valid_url('ftp://example.com'))
        self.assertFalse(is_valid_url('example.com'))


class TestUrlCollector(unittest.TestCase):

    def test_items_are_newest_first(self):
        collector = UrlCollector(opener=mock.Mock())
        collector.add('a.com')
        collector.add(' b.com ')
        collector.add('c.com')

        self.assertEqual([item.url for item in collector.items()], ['c.com', 'b.com', 'a.com'])
        self.assertEqual(len(collector), 3)

    def test_blank_input_is_ignored(self):
        collector = UrlCollector(opener=mock.Mock())
        self.assertIsNone(collector.add('   '))
        self.assertIsNone(collector.add(''))
        self.assertEqual(len(collector), 0)

    def test_clear(self):
        collector = UrlCollector(opener=mock.Mock())
        collector.add('a.com')
        collector.clear()
        self.assertEqual(collector.items(), [])

    def test_open_adds_scheme(self):
        opener = mock.Mock()
        collector = UrlCollector(opener=opener)
        collector.add('www.example.com')
        collector.add('http://old.example.com')

        self.assertEqual(collector.open(1), 'https://www.example.com')
        opener.assert_called_once_with('https://www.example.com')

    def test_open_out_of_range(self):
        collector = UrlCollector(opener=mock.Mock())
        with self.assertRaises(IndexError):
            collector.open(0)


class TestCollectorCommandLoop(unittest.TestCase):

    def test_commands(self):
        opener = mock.Mock()
        collector = UrlCollector(opener=opener)
        stdin = io.StringIO("a.com\nb.com\n:list\n:open 1\n:open 9\n:clear\n:list\n:quit\nc.com\n")
        stdout = io.StringIO()

        run_collector(stdin=stdin, stdout=stdout, collector=collector)

        output = stdout.getvalue()
        self.assertIn("0: b.com\n1: a.com", output)
        self.assertIn("Opened https://a.com", output)
        self.assertIn("Cannot open", output)
        self.assertIn("Cleared", output)
        opener.assert_called_once_with('https://a.com')
        self.assertEqual(len(collector), 0)


if __name__ == '__main__':
    unittest.main()
