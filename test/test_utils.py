#!/usr/bin/env python3

# Allow direct execution
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


import contextlib
import io

from test.helper import FakeLogger
from yt_track.utils import (
    DURATION_MS_UNKNOWN,
    ExtractorError,
    ManifestDownloadError,
    Severity,
    SignatureResolutionError,
    TrackLogger,
    UnplayableVideoError,
    UnrecognizedFormatsError,
    bool_or_none,
    bug_reports_message,
    extract_between,
    format_field,
    int_or_none,
    limit_length,
    parse_content_type,
    str_or_none,
    strip_or_none,
    variadic,
)


class TestUtil(unittest.TestCase):
    def test_int_or_none(self):
        self.assertEqual(int_or_none('42'), 42)
        self.assertEqual(int_or_none(42), 42)
        self.assertEqual(int_or_none(' 7 '), 7)
        self.assertEqual(int_or_none('1000', scale=10), 100)
        self.assertEqual(int_or_none('2', invscale=1000), 2000)
        self.assertEqual(int_or_none(None), None)
        self.assertEqual(int_or_none(''), None)
        self.assertEqual(int_or_none('1.5'), None)
        self.assertEqual(int_or_none('abc', default=-1), -1)
        self.assertEqual(int_or_none(True), None)

    def test_str_or_none(self):
        self.assertEqual(str_or_none('x'), 'x')
        self.assertEqual(str_or_none(12), '12')
        self.assertEqual(str_or_none(None), None)
        self.assertEqual(str_or_none(None, default=''), '')

    def test_bool_or_none(self):
        self.assertIs(bool_or_none(True), True)
        self.assertIs(bool_or_none(False), False)
        self.assertEqual(bool_or_none('true'), None)
        self.assertEqual(bool_or_none(1, default=False), False)

    def test_strip_or_none(self):
        self.assertEqual(strip_or_none('  http://x  '), 'http://x')
        self.assertEqual(strip_or_none(None), None)
        self.assertEqual(strip_or_none(5, default='d'), 'd')

    def test_variadic(self):
        self.assertEqual(variadic('abc'), ('abc',))
        self.assertEqual(variadic(['a', 'b']), ['a', 'b'])
        self.assertEqual(variadic({'a': 1}), ({'a': 1},))
        self.assertEqual(variadic(None), (None,))

    def test_extract_between(self):
        self.assertEqual(extract_between('a=1&clen=1234&b=2', 'clen=', '&'), '1234')
        self.assertEqual(extract_between('http://x/clen/99/dur/1', '/clen/', '/'), '99')
        self.assertEqual(extract_between('clen=&x', 'clen=', '&'), '')
        self.assertEqual(extract_between('a=1&b=2', 'clen=', '&'), None)
        self.assertEqual(extract_between('a=1&clen=1234', 'clen=', '&'), None)
        self.assertEqual(extract_between(None, 'clen=', '&'), None)

    def test_parse_content_type(self):
        self.assertEqual(parse_content_type('video/mp4'), ('video/mp4', {}))
        self.assertEqual(
            parse_content_type('audio/webm; codecs="opus"'), ('audio/webm', {'codecs': 'opus'}))
        self.assertEqual(
            parse_content_type('Video/MP4;codecs=avc1.4d401e, mp4a.40.2'),
            ('video/mp4', {'codecs': 'avc1.4d401e, mp4a.40.2'}))
        for bad in ('', 'mp4', 'video/', ';codecs=x', None):
            with self.assertRaises(ValueError):
                parse_content_type(bad)

    def test_limit_length(self):
        self.assertEqual(limit_length(None, 12), None)
        self.assertEqual(limit_length('foo', 12), 'foo')
        self.assertTrue(limit_length('foo bar baz asd', 12).startswith('foo bar'))
        self.assertTrue('...' in limit_length('foo bar baz asd', 12))
        self.assertEqual(len(limit_length('foo bar baz asd', 12)), 12)

    def test_format_field(self):
        self.assertEqual(format_field(None), '')
        self.assertEqual(format_field('abc', None, '%s: '), 'abc: ')
        self.assertEqual(format_field({'a': 1}, 'a', '[%s]'), '[1]')
        self.assertEqual(format_field({'a': 0}, 'a', '[%s]'), '')
        self.assertEqual(format_field({'a': 0}, 'a', '[%s]', ignore=None), '[0]')
        self.assertEqual(format_field({}, 'a', default='x'), 'x')

    def test_duration_sentinel(self):
        self.assertEqual(DURATION_MS_UNKNOWN, 2 ** 63 - 1)


class TestErrors(unittest.TestCase):
    def test_bug_reports_message(self):
        self.assertTrue(bug_reports_message().startswith('; please report this issue'))
        self.assertTrue(bug_reports_message(before='').startswith('Please report this issue'))
        self.assertIn('yt-track/yt-track', bug_reports_message())

    def test_extractor_error_message(self):
        err = ExtractorError('boom', video_id='abc', ie='youtube')
        self.assertTrue(str(err).startswith('[youtube] abc: boom; please report this issue'))
        self.assertEqual(err.orig_msg, 'boom')
        self.assertIs(err.severity, Severity.SUSPICIOUS)
        self.assertFalse(err.expected)

    def test_extractor_error_severity_override(self):
        err = ExtractorError('gone', severity=Severity.COMMON)
        self.assertEqual(str(err), 'gone')
        self.assertTrue(err.expected)

    def test_extractor_error_cause(self):
        cause = ValueError('bad value')
        err = ExtractorError('Failed', cause=cause, severity=Severity.FAULT)
        self.assertEqual(str(err), "Failed (caused by ValueError('bad value'))")
        self.assertIs(err.cause, cause)

    def test_unplayable_video_error(self):
        err = UnplayableVideoError('Video unavailable', video_id='abc')
        self.assertEqual(str(err), 'Video unavailable')
        self.assertEqual(err.reason, 'Video unavailable')
        self.assertEqual(err.video_id, 'abc')
        self.assertIs(err.severity, Severity.COMMON)
        self.assertTrue(err.expected)
        self.assertIsInstance(err, ExtractorError)

    def test_unplayable_video_error_without_reason(self):
        self.assertEqual(str(UnplayableVideoError(None)), 'This video is unavailable')

    def test_unrecognized_formats_error(self):
        err = UnrecognizedFormatsError(arguments={'status': 'ok'}, video_id='abc', ie='youtube')
        self.assertEqual(err.arguments, {'status': 'ok'})
        self.assertIs(err.severity, Severity.SUSPICIOUS)
        self.assertFalse(err.expected)
        self.assertIn('please report this issue', str(err))
        self.assertNotIsInstance(err, UnplayableVideoError)

    def test_fault_errors(self):
        err = ManifestDownloadError('Failed to download DASH manifest', status=404)
        self.assertEqual(err.status, 404)
        self.assertIs(err.severity, Severity.FAULT)
        self.assertEqual(str(err), 'Failed to download DASH manifest')
        self.assertIs(SignatureResolutionError('x').severity, Severity.FAULT)


class TestTrackLogger(unittest.TestCase):
    def test_logger_param(self):
        logger = FakeLogger()
        track_logger = TrackLogger({'logger': logger, 'verbose': True})
        track_logger.debug('a')
        track_logger.warning('b')
        self.assertEqual(logger.messages, {'debug': ['[debug] a'], 'warning': ['b']})

    def test_debug_needs_verbose(self):
        logger = FakeLogger()
        TrackLogger({'logger': logger}).debug('hidden')
        self.assertEqual(logger.debugs, [])

    def test_stderr_fallback(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            TrackLogger({}).warning('careful')
            TrackLogger({}).debug('hidden')
            TrackLogger({'verbose': True}).debug('shown')
        self.assertEqual(stderr.getvalue(), 'WARNING: careful\n[debug] shown\n')

    def test_no_warnings(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            TrackLogger({'no_warnings': True}).warning('careful')
        self.assertEqual(stderr.getvalue(), '')


if __name__ == '__main__':
    unittest.main()
