"""Plain-text rendering of decoded feeds for the tool server."""

from .models import Entry, Feed


def _author_line(entry: Entry, limit: int = 3) -> str:
    names = [author.name for author in entry.authors[:limit] if author.name]
    author_str = ', '.join(names) if names else "Unknown authors"
    if len(entry.authors) > limit:
        author_str += f" et al. ({len(entry.authors)} total authors)"
    return author_str


def format_entry_summary(entry: Entry, abstract_length: int = 500) -> str:
    """
    Format one entry as a markdown block.

    Args:
        entry: Decoded entry
        abstract_length: Characters of the summary to keep

    Returns:
        Formatted entry summary
    """
    published = entry.published_at
    published_str = published.strftime('%Y-%m-%d') if published else "Unknown date"
    category_str = entry.primary_category.term or "Unknown category"

    abstract = ' '.join(entry.summary.split())
    if len(abstract) > abstract_length:
        abstract = abstract[:abstract_length] + '...'

    summary = f"""**{' '.join(entry.title.split())}**

**Authors:** {_author_line(entry)}
**arXiv ID:** {entry.arxiv_id}
**Published:** {published_str}
**Primary Category:** {category_str}

**Abstract:**
{abstract}

**Links:**
- Abstract: {entry.abs_url or 'N/A'}
- PDF: {entry.pdf_url or 'N/A'}
"""

    if entry.comment:
        summary += f"\n**Comment:** {entry.comment}"
    if entry.journal_ref:
        summary += f"\n**Journal Reference:** {entry.journal_ref}"
    if entry.doi:
        summary += f"\n**DOI:** {entry.doi}"

    return summary


def format_feed(feed: Feed, abstract_length: int = 200) -> str:
    """Numbered listing of a feed's entries with its paging counts."""
    if not feed.entries:
        return "No papers found."

    output = f"Found {feed.total_results} papers (showing {len(feed.entries)}"
    if feed.start_index:
        output += f", starting at {feed.start_index}"
    output += "):\n\n"

    for i, entry in enumerate(feed.entries, feed.start_index + 1):
        published = entry.published_at
        abstract = ' '.join(entry.summary.split())[:abstract_length]

        output += f"{i}. **{' '.join(entry.title.split())}**\n"
        output += f"   Authors: {_author_line(entry)}\n"
        output += f"   arXiv ID: {entry.arxiv_id}\n"
        output += f"   Category: {entry.primary_category.term or 'N/A'}\n"
        if published:
            output += f"   Published: {published.strftime('%Y-%m-%d')}\n"
        output += f"   Abstract: {abstract}...\n"
        if entry.pdf_url:
            output += f"   PDF: {entry.pdf_url}\n"
        output += "\n"

    shown = feed.start_index + len(feed.entries)
    if feed.total_results > shown:
        output += f"Note: {feed.total_results - shown} more results are available."

    return output
