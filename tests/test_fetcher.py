"""
Tests for the document fetcher.
"""

import unittest
from unittest import mock

import requests

from note_scraper.core.errors import FetchError
from note_scraper.core.fetcher import DocumentFetcher
from note_scraper.middlewares.host_throttle import HostThrottle


def fake_response(status_code=200, text='<html></html>', content_type='text/html; charset=utf-8'):
    response = mock.Mock()
    response.status_code = status_code
    response.headers = {'Content-Type': content_type}
    response.text = text
    response.url = 'https://x/final'
    response.encoding = None
    return response


def fake_session(response=None, error=None):
    session = mock.Mock()
    session.headers = {}
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


class TestDocumentFetcher(unittest.TestCase):

    def test_browser_like_headers(self):
        session = fake_session(fake_response())
        DocumentFetcher(session=session)

        self.assertTrue(session.headers['User-Agent'].startswith('Mozilla/5.0'))
        self.assertIn('text/html', session.headers['Accept'])

    def test_custom_user_agent_and_headers(self):
        session = fake_session(fake_response())
        DocumentFetcher(user_agent='Agent/2', headers={'Referer': 'https://x/'}, session=session)
        self.assertEqual(session.headers['User-Agent'], 'Agent/2')
        self.assertEqual(session.headers['Referer'], 'https://x/')

    def test_fetch_returns_body(self):
        session = fake_session(fake_response(text='<html>ok</html>'))
        fetcher = DocumentFetcher(timeout=7, proxy='http://proxy:8080', session=session)

        self.assertEqual(fetcher.fetch('https://x/explore/1'), '<html>ok</html>')
        session.get.assert_called_once_with(
            'https://x/explore/1',
            timeout=7,
            proxies={'http': 'http://proxy:8080', 'https': 'http://proxy:8080'},
            verify=True,
            allow_redirects=True
        )

    def test_missing_charset_defaults_to_utf8(self):
        response = fake_response(content_type='text/html')
        DocumentFetcher(session=fake_session(response)).fetch('https://x/1')
        self.assertEqual(response.encoding, 'utf-8')

    def test_declared_charset_is_kept(self):
        response = fake_response(content_type='text/html; charset=gbk')
        DocumentFetcher(session=fake_session(response)).fetch('https://x/1')
        self.assertIsNone(response.encoding)

    def test_non_success_status_raises(self):
        fetcher = DocumentFetcher(session=fake_session(fake_response(status_code=461)))
        with self.assertRaises(FetchError) as ctx:
            fetcher.fetch('https://x/1')
        self.assertEqual(ctx.exception.status_code, 461)
        self.assertEqual(ctx.exception.url, 'https://x/1')

    def test_transport_errors_raise_fetch_error(self):
        errors = [
            requests.exceptions.Timeout('slow'),
            requests.exceptions.ConnectionError('refused'),
            requests.exceptions.SSLError('bad cert'),
            requests.exceptions.TooManyRedirects('loop'),
        ]
        for error in errors:
            with self.subTest(error=type(error).__name__):
                fetcher = DocumentFetcher(session=fake_session(error=error))
                with self.assertRaises(FetchError) as ctx:
                    fetcher.fetch('https://x/1')
                self.assertIs(ctx.exception.__cause__, error)
                self.assertIsNone(ctx.exception.status_code)

    def test_invalid_url_is_rejected_without_request(self):
        for url in ('ftp://x/1', 'x/1', ''):
            with self.subTest(url=url):
                session = fake_session(fake_response())
                with self.assertRaises(FetchError) as ctx:
                    DocumentFetcher(session=session).fetch(url)
                self.assertEqual(ctx.exception.url, url)
                session.get.assert_not_called()

    def test_fetch_goes_through_throttle(self):
        throttle = HostThrottle(max_per_host=1)
        fetcher = DocumentFetcher(session=fake_session(fake_response()), throttle=throttle)
        with mock.patch.object(throttle, 'slot', wraps=throttle.slot) as slot:
            fetcher.fetch('https://www.example.com:8443/a')
        slot.assert_called_once_with('www.example.com')


if __name__ == '__main__':
    unittest.main()
