"""Tolerant RSS 2.0 / Atom item extraction.

Feeds in the wild are often not well-formed XML, so items are pulled out with
regular expressions instead of a namespace-aware parser. HTML inside titles and
descriptions is stripped with BeautifulSoup.
"""

import html
import re
from collections.abc import Iterator
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from itertools import islice

from bs4 import BeautifulSoup

from app.schemas.news import ParsedItem

DEFAULT_ITEM_CAP = 20

_RSS_ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>([\s\S]*?)</item>", re.IGNORECASE)
_ATOM_ENTRY_RE = re.compile(r"<entry(?:\s[^>]*)?>([\s\S]*?)</entry>", re.IGNORECASE)
_CDATA_RE = re.compile(r"<!\[CDATA\[([\s\S]*?)\]\]>")
_MARKUP_RE = re.compile(r"</?[a-zA-Z][a-zA-Z0-9]*(?:\s[^<>]*)?/?>")
_ATOM_ROOT_RE = re.compile(
    r"<feed\b[^>]*\bxmlns=[\"']http://www\.w3\.org/2005/Atom[\"']", re.IGNORECASE
)
_WHITESPACE_RE = re.compile(r"\s+")

_MEDIA_CONTENT_RE = re.compile(r"<media:content\b[^>]*\burl=\"([^\"]+)\"", re.IGNORECASE)
_ENCLOSURE_RE = re.compile(r"<enclosure\b([^>]*)>", re.IGNORECASE)
_MEDIA_THUMBNAIL_RE = re.compile(r"<media:thumbnail\b[^>]*\burl=\"([^\"]+)\"", re.IGNORECASE)
_IMG_SRC_RE = re.compile(r"<img\b[^>]*\bsrc=[\"']([^\"']+)[\"']", re.IGNORECASE)
_SRCSET_RE = re.compile(r"\bsrcset=[\"']\s*([^\s\"',]+)", re.IGNORECASE)
_ATOM_LINK_RE = re.compile(r"<link\b([^>]*)>", re.IGNORECASE)


def _attr(attrs: str, name: str) -> str | None:
    match = re.search(rf"\b{name}=[\"']([^\"']*)[\"']", attrs, re.IGNORECASE)
    return match.group(1) if match else None


def _tag_text(block: str, tag: str) -> str:
    """First non-empty of the CDATA-wrapped or plain content of <tag>."""
    pattern = re.compile(rf"<{tag}(?:\s[^>]*)?>([\s\S]*?)</{tag}>", re.IGNORECASE)
    for match in pattern.finditer(block):
        raw = match.group(1)
        cdata = _CDATA_RE.search(raw)
        if cdata and cdata.group(1).strip():
            return cdata.group(1)
        plain = _CDATA_RE.sub("", raw)
        if plain.strip():
            return plain
    return ""


def clean_html_text(raw: str) -> str:
    """Strip tags and decode entities, collapsing whitespace."""
    if not raw:
        return ""
    text = BeautifulSoup(raw, "lxml").get_text()
    # Entity-escaped markup (&lt;p&gt;) only becomes tags after the first pass;
    # a stray "<" in plain text is not a tag
    if _MARKUP_RE.search(text):
        text = BeautifulSoup(text, "lxml").get_text()
    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_image_url(block: str, html_body: str) -> str | None:
    """
    Best-effort image for an item, in priority order:
    media:content, image enclosure, media:thumbnail, <img src>, srcset.
    """
    match = _MEDIA_CONTENT_RE.search(block)
    if match:
        return match.group(1)

    for enclosure in _ENCLOSURE_RE.finditer(block):
        attrs = enclosure.group(1)
        mime = _attr(attrs, "type") or ""
        url = _attr(attrs, "url")
        if url and mime.lower().startswith("image"):
            return url

    match = _MEDIA_THUMBNAIL_RE.search(block)
    if match:
        return match.group(1)

    # Escaped HTML bodies hide their <img> tags behind entities
    body = html_body.replace("&lt;", "<").replace("&gt;", ">").replace("&quot;", '"')
    match = _IMG_SRC_RE.search(body)
    if match:
        return match.group(1)

    match = _SRCSET_RE.search(body)
    if match:
        return match.group(1)

    return None


def is_atom(document: str) -> bool:
    """True only for an Atom root element; RSS feeds may declare xmlns:atom too."""
    return _ATOM_ROOT_RE.search(document) is not None


def _atom_link(block: str) -> str:
    for match in _ATOM_LINK_RE.finditer(block):
        attrs = match.group(1)
        rel = (_attr(attrs, "rel") or "alternate").lower()
        href = _attr(attrs, "href")
        if href and rel == "alternate":
            return html.unescape(href).strip()
    return _tag_text(block, "link").strip()


def _parse_rss_item(block: str) -> ParsedItem | None:
    title = clean_html_text(_tag_text(block, "title"))
    link = html.unescape(_tag_text(block, "link")).strip()
    raw_description = _tag_text(block, "description")
    full_content = _tag_text(block, "content:encoded") or None
    published = _tag_text(block, "pubDate").strip() or _tag_text(block, "dc:date").strip()

    if not title or not link:
        return None

    return ParsedItem(
        title=title,
        link=link,
        description=clean_html_text(raw_description),
        full_content=full_content,
        published=published,
        image_url=extract_image_url(block, (full_content or "") + raw_description),
    )


def _parse_atom_entry(block: str) -> ParsedItem | None:
    title = clean_html_text(_tag_text(block, "title"))
    link = _atom_link(block)
    raw_summary = _tag_text(block, "summary")
    raw_content = _tag_text(block, "content")
    published = _tag_text(block, "published").strip() or _tag_text(block, "updated").strip()

    if not title or not link:
        return None

    return ParsedItem(
        title=title,
        link=link,
        description=clean_html_text(raw_summary or raw_content),
        full_content=raw_content or None,
        published=published,
        image_url=extract_image_url(block, raw_content + raw_summary),
    )


def parse_feed(document: str, max_items: int = DEFAULT_ITEM_CAP) -> Iterator[ParsedItem]:
    """
    Lazily yield parsed items from the first max_items candidates of a feed.

    Candidates without a title or link are dropped, so fewer than max_items
    may be yielded. Parsing the same document again yields the same items.
    """
    if is_atom(document):
        blocks, parse_block = _ATOM_ENTRY_RE.finditer(document), _parse_atom_entry
    else:
        blocks, parse_block = _RSS_ITEM_RE.finditer(document), _parse_rss_item

    for match in islice(blocks, max_items):
        item = parse_block(match.group(1))
        if item is not None:
            yield item


def parse_published_at(value: str, fallback: datetime | None = None) -> datetime:
    """Parse an RFC 822 or ISO 8601 timestamp; unparseable values fall back to now."""
    fallback = fallback or datetime.now(UTC)
    value = value.strip()
    if not value:
        return fallback

    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return fallback

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
