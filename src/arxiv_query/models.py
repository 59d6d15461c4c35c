"""Data models for a decoded arXiv Atom feed."""

from datetime import datetime
from typing import Optional, Tuple

from dateutil.parser import parse as parse_date
from pydantic import BaseModel, ConfigDict, Field

from .logging_config import get_logger

logger = get_logger(__name__)


def _parse_timestamp(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_date(value)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Error parsing timestamp {value!r}: {e}")
        return None


class Author(BaseModel):
    """Represents an author of an arXiv paper."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    affiliation: str = ""


class Category(BaseModel):
    """Represents an arXiv subject category."""
    model_config = ConfigDict(frozen=True)

    term: str = ""
    scheme: str = ""


class Link(BaseModel):
    """Represents a link to paper resources."""
    model_config = ConfigDict(frozen=True)

    href: str = ""
    rel: str = ""
    type: str = ""
    title: str = ""


class Entry(BaseModel):
    """One paper in a search response."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="arXiv URI, e.g. http://arxiv.org/abs/2301.00001v1")
    published: str = ""
    updated: str = ""
    title: str = ""
    summary: str = ""
    authors: Tuple[Author, ...] = ()
    links: Tuple[Link, ...] = ()
    primary_category: Category = Field(default_factory=Category)
    categories: Tuple[Category, ...] = ()
    comment: str = ""
    journal_ref: str = ""
    doi: str = ""

    @property
    def arxiv_id(self) -> str:
        """Identifier with version, e.g. ``2301.00001v1`` or ``cs/0601001v1``."""
        # Old-style ids contain a slash of their own
        if '/abs/' in self.id:
            return self.id.split('/abs/', 1)[1]
        return self.id.rsplit('/', 1)[-1]

    @property
    def abs_url(self) -> Optional[str]:
        return self._find_link(rel='alternate')

    @property
    def pdf_url(self) -> Optional[str]:
        return self._find_link(title='pdf')

    @property
    def doi_url(self) -> Optional[str]:
        return self._find_link(title='doi')

    @property
    def published_at(self) -> Optional[datetime]:
        return _parse_timestamp(self.published)

    @property
    def updated_at(self) -> Optional[datetime]:
        return _parse_timestamp(self.updated)

    def _find_link(self, rel: Optional[str] = None, title: Optional[str] = None) -> Optional[str]:
        for link in self.links:
            if rel is not None and link.rel != rel:
                continue
            if title is not None and link.title != title:
                continue
            return link.href
        return None


class Feed(BaseModel):
    """Root of an arXiv API response, with OpenSearch paging metadata."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    id: str = ""
    updated: str = ""
    links: Tuple[Link, ...] = ()
    entries: Tuple[Entry, ...] = ()
    total_results: int = 0
    start_index: int = 0
    items_per_page: int = 0

    @property
    def updated_at(self) -> Optional[datetime]:
        return _parse_timestamp(self.updated)
