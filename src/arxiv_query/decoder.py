"""Decoder for arXiv API Atom responses.

A response mixes three namespaces: Atom for the feed structure, OpenSearch
for paging counts and arXiv's own extension elements. Each model field is
bound to one ``(namespace, local name)`` pair in the tables below;
elements not listed there are skipped, even when their local name matches
a bound one in another namespace. Atom elements are also accepted without
a namespace, as in documents that omit the default declaration.
"""

import xml.etree.ElementTree as ET
from typing import Any, AsyncIterable, Callable, Dict, NamedTuple

from pydantic import ValidationError

from .exceptions import FeedDecodeError
from .logging_config import get_logger
from .models import Author, Category, Entry, Feed, Link

logger = get_logger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
OPENSEARCH_NS = "http://a9.com/-/spec/opensearch/1.1/"
ARXIV_NS = "http://arxiv.org/schemas/atom"


def _qname(namespace: str, local: str) -> str:
    return f"{{{namespace}}}{local}"


FEED_TAG = _qname(ATOM_NS, "feed")
FEED_TAGS = (FEED_TAG, "feed")


class _Binding(NamedTuple):
    field: str
    convert: Callable[[ET.Element], Any]
    repeated: bool = False


def _text(element: ET.Element) -> str:
    # Character data of the element itself; text inside child elements is skipped.
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _integer(element: ET.Element) -> int:
    text = _text(element).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError as e:
        raise FeedDecodeError(f"Expected an integer in <{element.tag}>, got {text!r}", original_error=e)


def _link(element: ET.Element) -> Link:
    return Link(
        href=element.get("href", ""),
        rel=element.get("rel", ""),
        type=element.get("type", ""),
        title=element.get("title", ""),
    )


def _category(element: ET.Element) -> Category:
    return Category(term=element.get("term", ""), scheme=element.get("scheme", ""))


def _with_bare_atom(fields: Dict[str, _Binding]) -> Dict[str, _Binding]:
    prefix = _qname(ATOM_NS, "")
    bare = {tag[len(prefix):]: binding for tag, binding in fields.items() if tag.startswith(prefix)}
    return {**fields, **bare}


def _author(element: ET.Element) -> Author:
    return Author(**_bind(element, AUTHOR_FIELDS))


def _entry(element: ET.Element) -> Entry:
    return Entry(**_bind(element, ENTRY_FIELDS))


AUTHOR_FIELDS: Dict[str, _Binding] = _with_bare_atom({
    _qname(ATOM_NS, "name"): _Binding("name", _text),
    _qname(ARXIV_NS, "affiliation"): _Binding("affiliation", _text),
})

ENTRY_FIELDS: Dict[str, _Binding] = _with_bare_atom({
    _qname(ATOM_NS, "id"): _Binding("id", _text),
    _qname(ATOM_NS, "published"): _Binding("published", _text),
    _qname(ATOM_NS, "updated"): _Binding("updated", _text),
    _qname(ATOM_NS, "title"): _Binding("title", _text),
    _qname(ATOM_NS, "summary"): _Binding("summary", _text),
    _qname(ATOM_NS, "author"): _Binding("authors", _author, repeated=True),
    _qname(ATOM_NS, "link"): _Binding("links", _link, repeated=True),
    _qname(ARXIV_NS, "primary_category"): _Binding("primary_category", _category),
    _qname(ARXIV_NS, "category"): _Binding("categories", _category, repeated=True),
    _qname(ARXIV_NS, "comment"): _Binding("comment", _text),
    _qname(ARXIV_NS, "journal_ref"): _Binding("journal_ref", _text),
    _qname(ARXIV_NS, "doi"): _Binding("doi", _text),
})

FEED_FIELDS: Dict[str, _Binding] = _with_bare_atom({
    _qname(ATOM_NS, "title"): _Binding("title", _text),
    _qname(ATOM_NS, "id"): _Binding("id", _text),
    _qname(ATOM_NS, "updated"): _Binding("updated", _text),
    _qname(ATOM_NS, "link"): _Binding("links", _link, repeated=True),
    _qname(ATOM_NS, "entry"): _Binding("entries", _entry, repeated=True),
    _qname(OPENSEARCH_NS, "totalResults"): _Binding("total_results", _integer),
    _qname(OPENSEARCH_NS, "startIndex"): _Binding("start_index", _integer),
    _qname(OPENSEARCH_NS, "itemsPerPage"): _Binding("items_per_page", _integer),
})


def _bind(element: ET.Element, fields: Dict[str, _Binding]) -> Dict[str, Any]:
    """Collect the bound children of ``element``; a repeated scalar keeps its last value."""
    values: Dict[str, Any] = {}
    for child in element:
        binding = fields.get(child.tag)
        if binding is None:
            continue
        value = binding.convert(child)
        if binding.repeated:
            values.setdefault(binding.field, []).append(value)
        else:
            values[binding.field] = value
    return values


def decode_element(root: ET.Element) -> Feed:
    """
    Build a Feed from a parsed document root.

    Raises:
        FeedDecodeError: If the root is not an Atom feed or a bound value is invalid
    """
    if root.tag not in FEED_TAGS:
        raise FeedDecodeError(f"Expected an Atom <feed> root, got <{root.tag}>")
    try:
        feed = Feed(**_bind(root, FEED_FIELDS))
    except ValidationError as e:
        raise FeedDecodeError(f"Feed structure mismatch: {e}", original_error=e)
    logger.debug(f"Decoded feed with {len(feed.entries)} entries (total {feed.total_results})")
    return feed


class FeedDecoder:
    """
    Incremental decoder: push body chunks with ``feed`` then call ``close``.

    Nothing is returned until the whole document has parsed, so a
    truncated or malformed body never yields a partial Feed.
    """

    def __init__(self):
        self._parser = ET.XMLParser()

    def feed(self, data: bytes) -> None:
        try:
            self._parser.feed(data)
        except ET.ParseError as e:
            raise FeedDecodeError(f"Malformed XML: {e}", original_error=e)

    def close(self) -> Feed:
        try:
            root = self._parser.close()
        except ET.ParseError as e:
            raise FeedDecodeError(f"Malformed XML: {e}", original_error=e)
        return decode_element(root)


def decode_feed(data: bytes) -> Feed:
    """
    Decode a complete response body.

    Args:
        data: Raw XML bytes (or text)

    Returns:
        The decoded Feed

    Raises:
        FeedDecodeError: If the body is not a well-formed arXiv Atom feed
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    decoder = FeedDecoder()
    decoder.feed(data)
    return decoder.close()


async def decode_stream(chunks: AsyncIterable[bytes]) -> Feed:
    """Decode a body delivered as an async stream of byte chunks."""
    decoder = FeedDecoder()
    async for chunk in chunks:
        decoder.feed(chunk)
    return decoder.close()
