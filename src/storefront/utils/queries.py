"""Bounded reads over repository queries."""

from storefront.exceptions import RowLimitExceededError

# Upper bound on rows returned by a single repository read
MAX_ROWS = 10_000


def fetch_all(query, what: str) -> list:
    """Every row of ``query``, or ``RowLimitExceededError`` when there are more than ``MAX_ROWS``.

    One extra row is requested so that a full page can be told apart from a
    truncated one.
    """
    items = query.limit(MAX_ROWS + 1).all().items
    if len(items) > MAX_ROWS:
        raise RowLimitExceededError(what, MAX_ROWS)
    return items
