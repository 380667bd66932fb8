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
"""Sort orders and the lexicographic comparator scopes sort with."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from synthscope.kernel.exceptions import UnparseableOrderingException

R = TypeVar("R")


class Direction(str, Enum):
    """Sort direction for a single order."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> Direction:
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnparseableOrderingException(value)


@dataclass(frozen=True)
class Order:
    """A single sort order: property name + direction."""

    property: str
    direction: Direction = Direction.ASC

    @staticmethod
    def asc(property: str) -> Order:
        """Create an ascending order for the given property."""
        return Order(property=property, direction=Direction.ASC)

    @staticmethod
    def desc(property: str) -> Order:
        """Create a descending order for the given property."""
        return Order(property=property, direction=Direction.DESC)

    @property
    def is_descending(self) -> bool:
        return self.direction is Direction.DESC

    def __str__(self) -> str:
        return f"{self.property} {self.direction.value}"


@dataclass(frozen=True)
class Sort:
    """Collection of sort orders, applied left to right."""

    orders: tuple[Order, ...] = ()

    @staticmethod
    def by(*properties: str) -> Sort:
        """Create ascending sort by properties."""
        return Sort(orders=tuple(Order.asc(p) for p in properties))

    @staticmethod
    def unsorted() -> Sort:
        """No sorting."""
        return Sort()

    def and_then(self, other: Sort) -> Sort:
        """Combine sorts, appending *other*'s orders after this sort's orders."""
        return Sort(orders=self.orders + other.orders)

    def descending(self) -> Sort:
        """Return same sort but all directions flipped to desc."""
        return Sort(orders=tuple(Order.desc(o.property) for o in self.orders))

    def ascending(self) -> Sort:
        """Return same sort but all directions flipped to asc."""
        return Sort(orders=tuple(Order.asc(o.property) for o in self.orders))

    @property
    def properties(self) -> list[str]:
        return [o.property for o in self.orders]

    def __bool__(self) -> bool:
        return bool(self.orders)


def parse_orderings(args: Iterable[Any]) -> tuple[Order, ...]:
    """Normalize ``order()`` arguments into a flat tuple of :class:`Order`.

    Accepted forms, freely mixed:

    - ``"name"`` — ascending on ``name``
    - ``("name", "desc")`` — explicit direction
    - ``{"len": "desc", "name": "asc"}`` — one order per entry, in mapping order
    - :class:`Order` and :class:`Sort` instances, passed through
    """
    orders: list[Order] = []
    for arg in args:
        if isinstance(arg, Order):
            orders.append(arg)
        elif isinstance(arg, Sort):
            orders.extend(arg.orders)
        elif isinstance(arg, str):
            orders.append(Order.asc(arg))
        elif isinstance(arg, Mapping):
            for name, direction in arg.items():
                if not isinstance(name, str):
                    raise UnparseableOrderingException(arg)
                orders.append(Order(name, Direction.parse(direction)))
        elif isinstance(arg, tuple) and len(arg) == 2 and isinstance(arg[0], str):
            orders.append(Order(arg[0], Direction.parse(arg[1])))
        else:
            raise UnparseableOrderingException(arg)
    return tuple(orders)


def _compare(a: Any, b: Any) -> int:
    # None sorts before everything else
    if a is None or b is None:
        return (a is not None) - (b is not None)
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def sort_rows(rows: Iterable[R], orders: tuple[Order, ...], read: Callable[[R, str], Any]) -> list[R]:
    """Stable-sort *rows* lexicographically by *orders*.

    The first order whose values differ decides; ties fall through to the
    next order and complete ties keep their incoming order.
    """
    rows = list(rows)
    if not orders:
        return rows

    def compare(a: R, b: R) -> int:
        for order in orders:
            cmp = _compare(read(a, order.property), read(b, order.property))
            if cmp:
                return -cmp if order.is_descending else cmp
        return 0

    return sorted(rows, key=functools.cmp_to_key(compare))
