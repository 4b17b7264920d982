"""Pagination DTO shared by every list query."""

import math

import attrs

from src.platform.config.core_setting import settings


def clamp_page(page: int, limit: int) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to 1..MAX_PAGE_SIZE."""
    return max(page, 1), min(max(limit, 1), settings.MAX_PAGE_SIZE)


@attrs.define(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
