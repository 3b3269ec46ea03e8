"""Read every row a repository query matches.

Protean pages query results (100 rows by default). Listings that feed
tenant containment must see all rows, so they walk the pages until the
result set reports nothing further.
"""

PAGE_SIZE = 500


def all_rows(query, page_size: int | None = None) -> list:
    """Every row matching ``query``, fetched ``page_size`` rows at a time.

    The query should carry an ``order_by`` so pages do not overlap.
    """
    size = page_size or PAGE_SIZE
    rows, offset = [], 0
    while True:
        page = query.offset(offset).limit(size).all()
        rows.extend(page.items)
        if not page.has_next or not page.items:
            return rows
        offset += size
