"""
Lenient query-parameter coercion.

List endpoints accept ``page``/``limit`` (and a few numeric filters) as raw
strings and coerce them: anything missing, non-numeric or out of range falls
back to the default instead of failing the request.
"""
import math
from typing import Any, Optional

MAX_LIMIT = 100


def coerce_int(value: Any, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    if maximum is not None and number > maximum:
        return maximum
    return number


def parse_pagination(page: Any, limit: Any, default_limit: int = 20):
    """Return ``(page, limit, offset)``"""
    page = coerce_int(page, 1)
    limit = coerce_int(limit, default_limit, maximum=MAX_LIMIT)
    return page, limit, (page - 1) * limit


def pagination_meta(page: int, limit: int, total: int, total_key: str) -> dict:
    """Build the ``pagination`` block, e.g. ``totalEmployees`` for ``total_key="totalEmployees"``"""
    return {
        "currentPage": page,
        "totalPages": math.ceil(total / limit) if limit else 0,
        total_key: total,
        "limit": limit,
    }
