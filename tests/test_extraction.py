from datetime import datetime, timezone

import feedparser

from daily_dashboard.extraction import (
    ENTRY,
    ITEM,
    build_record,
    clean_description,
    detect_style,
    entry_text,
    extract_categories,
    extract_image,
    extract_link,
    normalise_image_url,
    parse_feed,
    parse_records,
)
from daily_dashboard.models import FeedSource

NOW = datetime(2024, 10, 5, 12, 0, tzinfo=timezone.utc)

SOURCE = FeedSource(
    key="example",
    name="Example",
    url="https://example.com/feed",
    default_link="https://example.com/",
    author="Example Staff",
    default_category="General",
    base_url="https://example.com",
    description_limit=18,
)

ATOM_PAYLOAD = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <entry>
    <title type="html">Atom &lt;b&gt;entry&lt;/b&gt;</title>
    <link rel="alternate" type="text/html" href="https://example.com/atom-1"/>
    <id>tag:example.com,2024:1</id>
    <updated>2024-10-04T09:15:00+02:00</updated>
    <summary type="html">Short summary</summary>
    <author><name>Jane Writer</name></author>
    <category term="Security"/>
    <category term="Mobile"/>
  </entry>
</feed>
"""


def _rss(items):
    return (
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        f"<channel><title>T</title>{items}</channel></rss>"
    )


def _entry(item_body):
    return feedparser.parse(_rss(f"<item><title>x</title>{item_body}</item>")).entries[0]


def _atom_entry(entry_body):
    payload = f'<feed xmlns="http://www.w3.org/2005/Atom"><entry><title>x</title>{entry_body}</entry></feed>'
    return feedparser.parse(payload).entries[0]


def test_detect_style(rss_payload):
    assert detect_style(parse_feed(rss_payload)) == ITEM
    assert detect_style(parse_feed(ATOM_PAYLOAD)) == ENTRY


def test_parse_feed_tolerates_garbage():
    assert parse_feed("not a feed at all").entries == []
    assert parse_feed(None).entries == []


def test_parse_records_example_item():
    raw = _rss("<item><title>A &amp; B</title><pubDate>Wed, 02 Oct 2024 10:00:00 +0000</pubDate></item>")

    records = parse_records(raw, SOURCE, now=NOW)

    assert len(records) == 1
    assert records[0].title == "A & B"
    assert records[0].published == datetime(2024, 10, 2, 10, 0, tzinfo=timezone.utc)


def test_parse_records_converts_named_us_zones():
    raw = _rss("<item><title>Late</title><pubDate>Wed, 02 Oct 2024 10:00:00 EST</pubDate></item>")

    record = parse_records(raw, SOURCE, now=NOW)[0]

    assert record.published == datetime(2024, 10, 2, 15, 0, tzinfo=timezone.utc)


def test_parse_records_applies_source_defaults():
    raw = _rss("<item><title>Only a title</title></item>")

    record = parse_records(raw, SOURCE, now=NOW)[0]

    assert record.link == "https://example.com/"
    assert record.author == "Example Staff"
    assert record.categories == ["General"]
    assert record.published == NOW
    assert record.description == ""
    assert record.thumbnail is None
    assert record.source == "Example"


def test_parse_records_skips_untitled_entries(rss_payload):
    raw = rss_payload.replace("<title>Phone security update</title>", "<title>  </title>")

    records = parse_records(raw, SOURCE, now=NOW)

    assert [record.title for record in records] == ["GPU prices fall again"]


def test_parse_records_rss_fields(rss_payload):
    first = parse_records(rss_payload, SOURCE, now=NOW)[0]

    assert first.title == "GPU prices fall again"
    assert first.link == "https://example.com/gpu"
    assert first.description == "Cards are cheaper..."
    assert first.categories == ["Hardware"]
    assert first.thumbnail == "https://cdn.example.com/gpu.jpg"


def test_parse_records_atom_entry():
    record = parse_records(ATOM_PAYLOAD, SOURCE, now=NOW)[0]

    assert record.title == "Atom <b>entry</b>"
    assert record.link == "https://example.com/atom-1"
    assert record.published == datetime(2024, 10, 4, 7, 15, tzinfo=timezone.utc)
    assert record.author == "Jane Writer"
    assert record.categories == ["Security", "Mobile"]
    assert record.description == "Short summary"


def test_parse_records_unwraps_xhtml_titles():
    raw = (
        '<feed xmlns="http://www.w3.org/2005/Atom"><entry>'
        '<title type="xhtml"><div xmlns="http://www.w3.org/1999/xhtml">Hello <b>World</b></div></title>'
        "</entry></feed>"
    )

    assert parse_records(raw, SOURCE, now=NOW)[0].title == "Hello <b>World</b>"


def test_parse_records_reads_prefixed_atom():
    raw = (
        '<a10:feed xmlns:a10="http://www.w3.org/2005/Atom">'
        "<a10:entry><a10:title>T</a10:title></a10:entry>"
        "</a10:feed>"
    )

    assert [record.title for record in parse_records(raw, SOURCE, now=NOW)] == ["T"]


def test_parse_records_runs_enrich_hook():
    seen = []
    source = FeedSource(
        key="hook",
        name="Hook",
        url="https://example.com/feed",
        default_link="https://example.com/",
        author="Hook",
        default_category="General",
        enrich=lambda record, text: seen.append((record.title, text)),
    )

    parse_records(_rss("<item><title>One</title><description>Score: 8</description></item>"), source, now=NOW)

    assert seen == [("One", "One Score: 8")]


def test_extract_link_alternates_and_identifiers():
    assert extract_link(_atom_entry('<link href="https://example.com/a" rel="alternate"/>')) == "https://example.com/a"
    assert extract_link(_atom_entry('<link rel="self" href="https://example.com/b"/>')) == "https://example.com/b"
    assert extract_link(_atom_entry("<id>https://example.com/c</id>")) == "https://example.com/c"
    assert extract_link(_entry("<guid>https://example.com/d</guid>")) == "https://example.com/d"
    assert extract_link(_entry("<guid isPermaLink='false'>abc-123</guid>")) == ""


def test_extract_image_priority_and_rejections():
    entry = _entry(
        '<media:content url="https://cdn.example.com/generic.jpg" />'
        '<description>&lt;img src="https://cdn.example.com/avatar.png"&gt;</description>'
        '<media:thumbnail url="https://cdn.example.com/thumb.jpg" />'
    )

    assert extract_image(entry) == "https://cdn.example.com/thumb.jpg"


def test_extract_image_reads_description_markup_and_enclosures():
    escaped = _entry("<description>&lt;img src=&quot;https://example.com/photo/1&quot;&gt;</description>")
    enclosure = _entry('<enclosure url="https://example.com/cover.jpeg" type="image/jpeg" length="1" />')
    not_image = _entry('<enclosure url="https://example.com/podcast.mp3" type="audio/mpeg" length="1" />')

    assert extract_image(escaped) == "https://example.com/photo/1"
    assert extract_image(enclosure) == "https://example.com/cover.jpeg"
    assert extract_image(not_image) is None


def test_normalise_image_url_handles_relative_forms():
    assert normalise_image_url("//cdn.example.com/pic.png") == "https://cdn.example.com/pic.png"
    assert normalise_image_url("/images/pic.webp", "https://example.com/") == "https://example.com/images/pic.webp"
    assert normalise_image_url("/images/pic.webp") is None


def test_extract_categories_deduplicates_and_defaults():
    entry = _entry("<category>Rugby</category><category><![CDATA[Rugby]]></category><category>Top 14</category>")

    assert extract_categories(entry, "Default") == ["Rugby", "Top 14"]
    assert extract_categories(_entry(""), "Default") == ["Default"]


def test_entry_text_joins_title_summary_and_tags():
    entry = _entry("<description>Verdict</description><category>PS5</category>")

    assert entry_text(entry) == "x Verdict PS5"


def test_clean_description_strips_html_and_caps():
    assert clean_description("<p>Hello <em>world</em>!</p>") == "Hello world!"
    assert clean_description("abcdefghij", limit=5) == "abcde..."
    assert clean_description("   ") == ""


def test_build_record_rejects_empty_title():
    assert build_record(SOURCE, title="   ") is None
    record = build_record(SOURCE, title="T", link="ftp://example.com/file")
    assert record.link == "https://example.com/"
