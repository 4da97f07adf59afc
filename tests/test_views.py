"""
Tests for the JSON and RSS views.
"""

import os
import shutil
import tempfile
import unittest
import xml.etree.ElementTree as ET
from unittest.mock import patch

from summarization.coordinator import SummaryResult
from utils.config import Settings
from views.feed_view import FeedChannel, escape_cdata, feed_guid, render_feed, write_feed
from views.formatting import format_timestamp, iso_date, rfc822
from views.json_view import render_header, render_json_view

MINUTE = 60 * 1000
WINDOW = 91 * MINUTE
T = 1_700_000_000_000  # Tue, 14 Nov 2023 22:13:20 GMT


class TestFormatting(unittest.TestCase):

    def test_rfc822(self):
        self.assertEqual(rfc822(T), "Tue, 14 Nov 2023 22:13:20 GMT")

    def test_iso_date(self):
        self.assertEqual(iso_date(T), "2023-11-14")

    def test_display_timezone(self):
        self.assertEqual(format_timestamp(T), "Nov 14, 2023, 05:13:20 PM EST")
        self.assertEqual(format_timestamp(T, "UTC"), "Nov 14, 2023, 10:13:20 PM UTC")

    def test_missing_timestamp(self):
        self.assertEqual(format_timestamp(None), "N/A")


class TestJsonView(unittest.TestCase):

    def test_throttled_header(self):
        result = SummaryResult("cached", T, True)
        header = render_header(result, T + 30 * MINUTE, WINDOW)

        self.assertIn("Summary Throttle Active", header)
        self.assertIn("Nov 14, 2023, 05:13:20 PM EST", header)
        self.assertIn("(in 61 minutes)", header)
        self.assertIn("was not called", header)

    def test_minutes_rounded_up(self):
        result = SummaryResult("cached", T, True)
        header = render_header(result, T + 30 * MINUTE + 1, WINDOW)
        self.assertIn("(in 61 minutes)", header)

    def test_fresh_header(self):
        result = SummaryResult("new", T, False)
        header = render_header(result, T, WINDOW)

        self.assertIn("Summary Freshly Generated", header)
        self.assertIn("just now", header)
        self.assertIn(format_timestamp(T + WINDOW), header)

    def test_summary_body_kept_separate(self):
        result = SummaryResult("## Trends\n* one", T, False)
        body = render_json_view(result, T, WINDOW)

        self.assertEqual(set(body), {'header', 'summary'})
        self.assertEqual(body['summary'], "## Trends\n* one")
        self.assertNotIn("## Trends", body['header'])

    def test_without_header(self):
        body = render_json_view(SummaryResult("x", T, True), T, WINDOW, include_header=False)
        self.assertIsNone(body['header'])


class TestFeedView(unittest.TestCase):

    def test_render_is_idempotent(self):
        channel = FeedChannel.from_settings(Settings(site_url="https://example.com"))
        first = render_feed(T, "## Summary\n* item", channel)
        second = render_feed(T, "## Summary\n* item", channel)
        self.assertEqual(first, second)

    def test_document_is_valid_rss(self):
        document = render_feed(T, "## Trends\n* one & two < three")
        root = ET.fromstring(document.encode('utf-8'))

        self.assertEqual(root.tag, 'rss')
        self.assertEqual(root.get('version'), '2.0')
        item = root.find('channel/item')
        self.assertEqual(item.findtext('guid'), "adtech-summary-2023-11-14")
        self.assertEqual(item.findtext('pubDate'), "Tue, 14 Nov 2023 22:13:20 GMT")
        self.assertEqual(root.findtext('channel/lastBuildDate'), "Tue, 14 Nov 2023 22:13:20 GMT")
        self.assertIn("* one & two < three", item.findtext('description'))

    def test_cdata_terminator_in_summary(self):
        summary = "code: a[b[0]]> c"
        document = render_feed(T, summary)

        self.assertIn("a[b[0]]]]><![CDATA[> c", document)
        description = ET.fromstring(document.encode('utf-8')).findtext('channel/item/description')
        self.assertIn(summary, description)

    def test_escape_cdata(self):
        self.assertEqual(escape_cdata("]]>"), "]]]]><![CDATA[>")
        self.assertEqual(escape_cdata("plain"), "plain")

    def test_channel_settings(self):
        settings = Settings(site_url="https://news.example.com", throttle_minutes=30)
        document = render_feed(T, "body", FeedChannel.from_settings(settings))
        root = ET.fromstring(document.encode('utf-8'))

        self.assertEqual(root.findtext('channel/link'), "https://news.example.com")
        self.assertIn("every 30 minutes", root.findtext('channel/item/description'))
        atom = root.find('channel/{http://www.w3.org/2005/Atom}link')
        self.assertEqual(atom.get('href'), "https://news.example.com/feed.xml")

    def test_channel_fields_are_escaped(self):
        channel = FeedChannel(title="Ads & <Tech>")
        root = ET.fromstring(render_feed(T, "body", channel).encode('utf-8'))
        self.assertEqual(root.findtext('channel/title'), "Ads & <Tech>")

    def test_guid_changes_per_utc_day(self):
        self.assertEqual(feed_guid(T), feed_guid(T + MINUTE))
        self.assertNotEqual(feed_guid(T), feed_guid(T + 24 * 60 * MINUTE))


class TestWriteFeed(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_writes_document(self):
        path = os.path.join(self.tmp_dir, 'public', 'feed.xml')
        document = render_feed(T, "body")

        self.assertTrue(write_feed(path, document))
        with open(path, encoding='utf-8') as f:
            self.assertEqual(f.read(), document)

    def test_write_failure_is_reported(self):
        path = os.path.join(self.tmp_dir, 'feed.xml')
        with patch('views.feed_view.os.replace', side_effect=PermissionError("read-only")):
            with self.assertLogs('views.feed_view', level='ERROR'):
                self.assertFalse(write_feed(path, "doc"))
        self.assertEqual(os.listdir(self.tmp_dir), [])


if __name__ == "__main__":
    unittest.main()
