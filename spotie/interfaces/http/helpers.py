"""Request helpers shared by the route blueprints."""

from __future__ import annotations

from typing import Optional, Tuple

from flask import current_app, request

from spotie.exceptions import MissingParameterError
from spotie.settings import MAX_PAGE_SIZE


def get_catalog_service():
    return current_app.extensions['catalog_service']


def get_sharing_service():
    return current_app.extensions['sharing_service']


def get_settings():
    return current_app.extensions['settings']


def read_pagination(default_limit: int) -> Tuple[int, int]:
    """Read ``page`` and ``limit`` from the query string, clamped to sane values."""
    try:
        page = int(request.args.get('page', '1'))
    except ValueError:
        page = 1
    try:
        limit = int(request.args.get('limit', str(default_limit)))
    except ValueError:
        limit = default_limit
    return max(1, page), min(max(1, limit), MAX_PAGE_SIZE)


def require_param(value: Optional[str], name: str) -> str:
    """Return ``value`` stripped, or raise a user-input error when it is empty."""
    value = (value or '').strip()
    if not value:
        raise MissingParameterError(name)
    return value


def pagination_payload(collection) -> dict:
    return {
        "offset": collection.offset,
        "limit": collection.limit,
        "total": collection.total,
        "page": collection.current_page(),
        "total_pages": collection.total_pages(),
        "has_next": collection.has_next(),
        "has_prev": collection.has_previous(),
        "is_first": collection.is_first(),
        "is_last": collection.is_last(),
    }


__all__ = [
    "get_catalog_service",
    "get_sharing_service",
    "get_settings",
    "read_pagination",
    "require_param",
    "pagination_payload",
]
