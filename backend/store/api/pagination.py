from typing import Dict

from starlette.datastructures import URL

from store.repositories.pagination import Pageable


def pagination_headers(url: URL, pageable: Pageable, total: int) -> Dict[str, str]:
    """
    `X-Total-Count` plus an RFC 5988 `Link` header with next/prev/last/first
    page URLs, built from the request URL so other query params survive.
    """
    page, size = pageable.page, pageable.size
    total_pages = pageable.total_pages(total)
    last_page = total_pages - 1 if total_pages > 0 else 0

    def link(p: int, rel: str) -> str:
        return f'<{url.include_query_params(page=p, size=size)}>; rel="{rel}"'

    links = []
    if page + 1 < total_pages:
        links.append(link(page + 1, "next"))
    if page > 0:
        links.append(link(page - 1, "prev"))
    links.append(link(last_page, "last"))
    links.append(link(0, "first"))
    return {"X-Total-Count": str(total), "Link": ",".join(links)}
