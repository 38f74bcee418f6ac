from urllib.parse import urlsplit, urlunsplit


def _query_key(item: str) -> str:
    return item.split("=", 1)[0]


def build_pagination_plan(
    base_url: str,
    pages: int | None,
    param: str = "page",
) -> list[str]:
    """Return the listing-index URLs for pages ``1..pages``.

    When ``base_url`` already carries ``param`` its value is rewritten and
    every other query item is kept as-is; otherwise ``param`` is appended.
    """
    if pages is None:
        return [base_url]
    if pages < 1:
        raise ValueError(f"pages must be >= 1, got {pages}")

    parts = urlsplit(base_url)
    items = [item for item in parts.query.split("&") if item] if parts.query else []
    has_param = any(_query_key(item) == param for item in items)

    plan: list[str] = []
    for page in range(1, pages + 1):
        if has_param:
            query_items = [
                f"{param}={page}" if _query_key(item) == param else item
                for item in items
            ]
        else:
            query_items = [*items, f"{param}={page}"]
        plan.append(urlunsplit(parts._replace(query="&".join(query_items))))
    return plan
