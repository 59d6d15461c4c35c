"""Build arXiv API searches and decode their Atom responses."""

from .client import ArxivClient
from .decoder import FeedDecoder, decode_feed
from .exceptions import ArxivQueryError, ConfigurationError, FeedDecodeError, TransportError
from .fields import FieldPrefix, field_code
from .models import Author, Category, Entry, Feed, Link
from .query import QueryExpression, SearchOperator, SortBy, SortOrder
from .request import (
    SearchRequest,
    apply_options,
    build_search_request,
    build_search_url,
    with_and,
    with_and_not,
    with_max_results,
    with_or,
    with_sort_by,
    with_sort_order,
    with_start,
)

__version__ = "0.1.0"

__all__ = [
    "ArxivClient",
    "ArxivQueryError",
    "Author",
    "Category",
    "ConfigurationError",
    "Entry",
    "Feed",
    "FeedDecodeError",
    "FeedDecoder",
    "FieldPrefix",
    "Link",
    "QueryExpression",
    "SearchOperator",
    "SearchRequest",
    "SortBy",
    "SortOrder",
    "TransportError",
    "apply_options",
    "build_search_request",
    "build_search_url",
    "decode_feed",
    "field_code",
    "with_and",
    "with_and_not",
    "with_max_results",
    "with_or",
    "with_sort_by",
    "with_sort_order",
    "with_start",
]
