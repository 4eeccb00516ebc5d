"""Tests for RSS/Atom item extraction."""

from datetime import UTC, datetime

from app.services.rss_parser import (
    clean_html_text,
    extract_image_url,
    parse_feed,
    parse_published_at,
)


class TestParseFeed:
    def test_caps_candidates_per_feed(self, make_feed, make_item) -> None:
        items = [make_item(f"Dubai story {i}", f"https://news.test/{i}") for i in range(35)]

        parsed = list(parse_feed(make_feed(*items), max_items=20))

        assert len(parsed) == 20
        assert parsed[0].link == "https://news.test/0"
        assert parsed[-1].link == "https://news.test/19"

    def test_is_lazy_and_repeatable(self, make_feed, make_item) -> None:
        document = make_feed(*(make_item(f"Story {i}", f"https://news.test/{i}") for i in range(3)))

        first = parse_feed(document)
        assert next(first).title == "Story 0"

        assert [i.link for i in parse_feed(document)] == [i.link for i in parse_feed(document)]

    def test_cdata_title_and_description(self, make_feed) -> None:
        document = make_feed(
            "<item><title><![CDATA[Emaar <b>launches</b> tower]]></title>"
            "<link>https://news.test/emaar</link>"
            "<description><![CDATA[<p>New project in Dubai Creek.</p>]]></description>"
            "</item>"
        )

        (item,) = parse_feed(document)

        assert item.title == "Emaar launches tower"
        assert item.description == "New project in Dubai Creek."

    def test_decodes_entities(self, make_feed, make_item) -> None:
        document = make_feed(
            make_item(
                "Sales &amp; rentals hit &quot;record&quot;",
                "https://news.test/record",
                description="&lt;p&gt;Prices up 5%&lt;/p&gt;",
            )
        )

        (item,) = parse_feed(document)

        assert item.title == 'Sales & rentals hit "record"'
        assert item.description == "Prices up 5%"

    def test_items_missing_title_or_link_are_dropped(self, make_feed, make_item) -> None:
        document = make_feed(
            make_item("", "https://news.test/no-title"),
            make_item("No link here", ""),
            make_item("Valid", "https://news.test/valid"),
        )

        assert [i.link for i in parse_feed(document)] == ["https://news.test/valid"]

    def test_keeps_full_content_and_pub_date(self, make_feed, make_item) -> None:
        document = make_feed(
            make_item(
                "Story",
                "https://news.test/story",
                pub_date="Tue, 02 Jul 2024 08:30:00 +0400",
                extra="<content:encoded><![CDATA[<p>Full body</p>]]></content:encoded>",
            )
        )

        (item,) = parse_feed(document)

        assert item.full_content == "<p>Full body</p>"
        assert item.published == "Tue, 02 Jul 2024 08:30:00 +0400"

    def test_atom_entries(self) -> None:
        document = (
            '<?xml version="1.0"?><feed xmlns="http://www.w3.org/2005/Atom">'
            "<title>Atom</title>"
            "<entry><title>Dubai Marina handover</title>"
            '<link rel="self" href="https://news.test/self"/>'
            '<link rel="alternate" href="https://news.test/marina"/>'
            "<summary>Units delivered early.</summary>"
            "<updated>2024-05-02T10:00:00Z</updated>"
            "<published>2024-05-01T09:00:00Z</published></entry></feed>"
        )

        (item,) = parse_feed(document)

        assert item.title == "Dubai Marina handover"
        assert item.link == "https://news.test/marina"
        assert item.description == "Units delivered early."
        assert item.published == "2024-05-01T09:00:00Z"

    def test_rss_declaring_atom_namespace_is_still_rss(self, make_item) -> None:
        document = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom" '
            'xmlns:feedburner="http://rssnamespace.org/feedburner/ext/1.0">'
            "<channel><title>Property Wire</title>"
            '<atom:link href="https://feeds.test/wire" rel="self" type="application/rss+xml"/>'
            '<feedburner:info uri="dubai"/>'
            + make_item("Dubai Hills villas sell out", "https://news.test/hills")
            + "</channel></rss>"
        )

        items = list(parse_feed(document))

        assert [i.link for i in items] == ["https://news.test/hills"]


class TestExtractImageUrl:
    def test_media_content_wins(self) -> None:
        block = (
            '<enclosure url="https://img.test/enc.jpg" type="image/jpeg"/>'
            '<media:content url="https://img.test/media.jpg" medium="image"/>'
        )
        assert extract_image_url(block, "") == "https://img.test/media.jpg"

    def test_enclosure_must_be_image(self) -> None:
        block = (
            '<enclosure url="https://audio.test/a.mp3" type="audio/mpeg"/>'
            '<enclosure type="image/png" url="https://img.test/enc.png"/>'
        )
        assert extract_image_url(block, "") == "https://img.test/enc.png"

    def test_thumbnail_before_inline_img(self) -> None:
        block = '<media:thumbnail url="https://img.test/thumb.jpg"/>'
        body = '<img src="https://img.test/inline.jpg">'
        assert extract_image_url(block, body) == "https://img.test/thumb.jpg"

    def test_inline_img_then_srcset(self) -> None:
        assert extract_image_url("", '<p><img src="https://img.test/a.jpg"></p>') == (
            "https://img.test/a.jpg"
        )
        assert extract_image_url(
            "", '<source srcset="https://img.test/b-800.jpg 800w, https://img.test/b-400.jpg 400w">'
        ) == "https://img.test/b-800.jpg"

    def test_escaped_inline_img(self) -> None:
        body = "&lt;img src=&quot;https://img.test/escaped.jpg&quot;&gt;"
        assert extract_image_url("", body) == "https://img.test/escaped.jpg"

    def test_none_when_absent(self) -> None:
        assert extract_image_url("<title>x</title>", "plain text") is None


class TestCleanHtmlText:
    def test_strips_tags_and_collapses_whitespace(self) -> None:
        assert clean_html_text("<p>Palm\n   Jumeirah</p>  ") == "Palm Jumeirah"

    def test_empty(self) -> None:
        assert clean_html_text("") == ""

    def test_escaped_less_than_in_plain_text_is_kept(self) -> None:
        assert clean_html_text("Yields &lt;b 7% in Dubai Marina") == "Yields <b 7% in Dubai Marina"


class TestParsePublishedAt:
    def test_rfc822(self) -> None:
        parsed = parse_published_at("Mon, 15 Jan 2024 10:00:00 GMT")
        assert parsed == datetime(2024, 1, 15, 10, 0, tzinfo=UTC)

    def test_iso8601(self) -> None:
        parsed = parse_published_at("2024-05-01T09:00:00Z")
        assert parsed == datetime(2024, 5, 1, 9, 0, tzinfo=UTC)

    def test_missing_or_garbage_falls_back(self) -> None:
        fallback = datetime(2024, 6, 1, tzinfo=UTC)
        assert parse_published_at("", fallback) == fallback
        assert parse_published_at("yesterday-ish", fallback) == fallback
