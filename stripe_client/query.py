"""Query-string building for list requests.

Renders list filters (``created[gte]=...``) and pagination cursors onto a base
URL. Pure functions over ``httpx.URL``; nothing here performs I/O.
"""

from __future__ import annotations

import httpx

from stripe_client.models.filters import ListFilter


def list_filter_to_url(list_filter: ListFilter, base_url: str | httpx.URL, key: str) -> httpx.URL:
    """Append the rendered filter for ``key`` to ``base_url``."""
    url = httpx.URL(base_url)
    for name, value in list_filter.params(key):
        url = url.copy_add_param(name, value)
    return url


def with_params(url: str | httpx.URL, **params: object) -> httpx.URL:
    """Append every non-None param, in keyword order."""
    result = httpx.URL(url)
    for name, value in params.items():
        if value is not None:
            result = result.copy_add_param(name, str(value))
    return result
