"""Shared pagination helpers"""

import math


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
