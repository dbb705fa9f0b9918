"""
Small stateless helpers shared across apps.
"""

from __future__ import annotations

import math


def pagination_metadata(total: int, page: int, page_size: int) -> dict:
    """
    Calculate offset pagination metadata.

    Pages past the end are allowed and simply contain no items, so the
    requested page is reported back unchanged.

    Example:
        pagination_metadata(total=120, page=2, page_size=50)
        # {
        #     "total_count": 120,
        #     "total_pages": 3,
        #     "page": 2,
        #     "page_size": 50,
        #     "has_next": True,
        #     "has_previous": True,
        # }
    """
    total_pages = math.ceil(total / page_size) if page_size > 0 else 0
    return {
        "total_count": total,
        "total_pages": total_pages,
        "page": page,
        "page_size": page_size,
        "has_next": page < total_pages,
        "has_previous": page > 1,
    }


def page_offset(page: int, page_size: int) -> int:
    """Zero-based offset of the first item on a 1-indexed page."""
    return (max(page, 1) - 1) * page_size
