"""
Pagination helpers shared by the user and recipe services.

A limit of 0 means "no limit": the whole collection is one page.
"""

from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Query


def fetch_page(query: Query, limit: int, skip: int) -> Tuple[List[Any], int]:
    """
    Run a query for one page and for the total row count.

    Args:
        query: Filtered and ordered query
        limit: Maximum rows to return, 0 for all
        skip: Rows to skip

    Returns:
        tuple: (rows on the page, total matching rows)
    """
    total = query.order_by(None).count()

    # Past the end nothing can match; also keeps huge skips away from the driver
    if skip >= total:
        return [], total

    if skip:
        query = query.offset(skip)
    if limit:
        query = query.limit(limit)

    return query.all(), total


def page_meta(total: int, returned: int, limit: int, skip: int) -> Dict[str, int]:
    """
    Build the counters of a pagination envelope.

    item_count reports the requested limit, or the number of returned
    rows when no limit was given. items_per_page is how many rows can
    actually be on this page: everything when unlimited, otherwise the
    limit capped by what remains after the skipped rows.
    """
    if limit:
        items_per_page = min(limit, max(total - skip, 0))
    else:
        items_per_page = total

    return {
        "total_items": total,
        "item_count": limit or returned,
        "items_per_page": items_per_page,
    }
