# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Pagination over a resolved scope."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a scope's ordered results.

    Attributes:
        items: The records (or rows) on this page.
        total: Number of results the whole scope yields.
        page: Page number, starting at 1.
        size: Maximum items per page.
    """

    items: list[T]
    total: int
    page: int
    size: int

    @staticmethod
    def slice(results: list[T], page: int, size: int) -> Page[T]:
        """Cut page *page* of *size* items out of the full result list."""
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}")
        offset = (page - 1) * size
        return Page(items=results[offset : offset + size], total=len(results), page=page, size=size)

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def map(self, func: Callable[[T], U]) -> Page[U]:
        """Transform items, keeping the pagination metadata."""
        return Page(items=[func(item) for item in self.items], total=self.total, page=self.page, size=self.size)
