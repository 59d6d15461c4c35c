"""MCP tool server presenting arXiv search results as text."""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from .client import ArxivClient
from .config import get_config, validate_configuration
from .exceptions import ArxivQueryError, format_error_for_user
from .fields import FieldPrefix, parse_field_prefix
from .formatting import format_entry_summary, format_feed
from .logging_config import get_logger, setup_logging
from .query import SortBy, SortOrder
from .request import (
    build_search_request,
    with_and,
    with_max_results,
    with_sort_by,
    with_sort_order,
    with_start,
)

logger = get_logger(__name__)

mcp = FastMCP("arxiv-query")

# Global client instance
arxiv_client: Optional[ArxivClient] = None


async def get_client() -> ArxivClient:
    """Get or create the arXiv client instance."""
    global arxiv_client
    if arxiv_client is None:
        arxiv_client = ArxivClient(get_config().arxiv_api)
    return arxiv_client


@mcp.tool()
async def search_papers(
    query: str,
    field: str = "all",
    max_results: Optional[int] = None,
    sort_by: str = "relevance",
    sort_order: str = "descending",
    start: int = 0
) -> str:
    """
    Search for academic papers on arXiv.

    Args:
        query: Search term, e.g. "quantum error correction"
        field: Field to search: ti, au, abs, co, jr, cat, rn, id or all
        max_results: Maximum number of results to return
        sort_by: 'relevance', 'lastUpdatedDate' or 'submittedDate'
        sort_order: 'ascending' or 'descending'
        start: Offset of the first result

    Returns:
        Formatted list of matching papers, or an error message
    """
    try:
        prefix = parse_field_prefix(field)
        options = [
            with_sort_by(SortBy(sort_by)),
            with_sort_order(SortOrder(sort_order)),
            with_max_results(
                max_results if max_results is not None else get_config().server.default_max_results
            ),
        ]
        if start:
            options.append(with_start(start))
    except ValueError as e:
        logger.warning(f"Invalid search_papers arguments: {e}")
        return f"Invalid input: {e}"
    except ArxivQueryError as e:
        return format_error_for_user(e)

    try:
        client = await get_client()
        logger.info(f"Searching papers with {prefix.code}:{query}")
        feed = await client.search(prefix, query, *options)
    except ArxivQueryError as e:
        logger.error(f"Search failed for {prefix.code}:{query}: {e}")
        return format_error_for_user(e)

    logger.info(f"Returned {len(feed.entries)} of {feed.total_results} papers")
    return format_feed(feed)


@mcp.tool()
async def get_paper_details(arxiv_id: str) -> str:
    """
    Get detailed information about a specific arXiv paper.

    Args:
        arxiv_id: The arXiv identifier (e.g., "2301.00001" or "cs/0601001")

    Returns:
        Detailed paper information including abstract, authors and categories
    """
    arxiv_id = arxiv_id.strip()
    if not arxiv_id:
        return "Invalid input: arXiv ID cannot be empty"

    try:
        client = await get_client()
        feed = await client.search(FieldPrefix.ID, arxiv_id, with_max_results(1))
    except ArxivQueryError as e:
        logger.error(f"Lookup failed for {arxiv_id}: {e}")
        return format_error_for_user(e)

    if not feed.entries:
        logger.warning(f"Paper not found: {arxiv_id}")
        return f"Paper not found: {arxiv_id}. Please check the arXiv ID is correct."
    return format_entry_summary(feed.entries[0])


@mcp.tool()
async def build_query(
    title_keywords: Optional[str] = None,
    author_name: Optional[str] = None,
    abstract_keywords: Optional[str] = None,
    category: Optional[str] = None,
    all_fields: Optional[str] = None
) -> str:
    """
    Combine per-field terms with AND into an arXiv search_query.

    Args:
        title_keywords: Term to match in titles
        author_name: Author to match
        abstract_keywords: Term to match in abstracts
        category: arXiv category, e.g. cs.AI
        all_fields: Term to match in any field

    Returns:
        The search_query expression and the request URL it produces
    """
    terms = [
        (FieldPrefix.TITLE, title_keywords),
        (FieldPrefix.AUTHOR, author_name),
        (FieldPrefix.ABSTRACT, abstract_keywords),
        (FieldPrefix.SUBJECT_CATEGORY, category),
        (FieldPrefix.ALL_OF_THE_ABOVE, all_fields),
    ]
    terms = [(prefix, term.strip()) for prefix, term in terms if term and term.strip()]
    if not terms:
        return "Invalid input: at least one search field must be provided"

    (first_prefix, first_term), rest = terms[0], terms[1:]
    request = build_search_request(
        first_prefix, first_term, *(with_and(prefix, term) for prefix, term in rest)
    )
    try:
        client = await get_client()
    except ArxivQueryError as e:
        logger.error(f"Cannot build request URL: {e}")
        return format_error_for_user(e)
    return (
        f"Constructed query: {request.search_query}\n"
        f"Request URL: {request.url(client.base_url)}"
    )


def main():
    """Main entry point for the arXiv query MCP server."""
    config = get_config()
    setup_logging(config.logging, debug=config.server.debug)

    for issue in validate_configuration():
        logger.warning(f"Configuration issue: {issue}")

    logger.info("Starting arXiv query MCP server")
    try:
        mcp.run(transport='stdio')
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


if __name__ == "__main__":
    main()
