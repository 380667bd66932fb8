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
"""Filter predicates and per-field filter sets.

A predicate is one of three explicit variants:

- :class:`Equals` — the field value equals a scalar.
- :class:`OneOf` — the field value is a member of a collection.
- :class:`Predicate` — a callable returns truthy for the field value.

:func:`to_filter` coerces the raw keyword values accepted by
``Scope.where`` into one of these variants. A :class:`FilterSet` maps each
field to an ordered tuple of predicates; every predicate of every field
must pass for a row to match.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Set, ValuesView
from dataclasses import dataclass, field
from typing import Any, Union

ID_FIELD = "id"


@dataclass(frozen=True)
class Equals:
    """Match values equal to ``value``."""

    value: Any

    def matches(self, candidate: Any) -> bool:
        return candidate == self.value


@dataclass(frozen=True)
class OneOf:
    """Match values contained in ``values`` (kept in the caller's order)."""

    values: tuple[Any, ...]

    def matches(self, candidate: Any) -> bool:
        return candidate in self.values


@dataclass(frozen=True)
class Predicate:
    """Match values for which ``function`` returns truthy."""

    function: Callable[[Any], Any]

    def matches(self, candidate: Any) -> bool:
        return bool(self.function(candidate))


Filter = Union[Equals, OneOf, Predicate]

_FILTER_TYPES = (Equals, OneOf, Predicate)


_COLLECTION_TYPES = (list, tuple, range, Set, ValuesView, Iterator)


def to_filter(value: Any) -> Filter:
    """Coerce a ``where`` keyword value into a filter variant.

    Lists, tuples, ranges, set-like views and iterators become
    :class:`OneOf`; callables other than classes become :class:`Predicate`;
    filter instances pass through unchanged and any other value becomes
    :class:`Equals`. Strings and mappings are scalars.
    """
    if isinstance(value, _FILTER_TYPES):
        return value
    if isinstance(value, _COLLECTION_TYPES):
        return OneOf(tuple(value))
    if callable(value) and not isinstance(value, type):
        return Predicate(value)
    return Equals(value)


def never(_value: Any) -> bool:
    return False


@dataclass(frozen=True)
class FilterSet:
    """Immutable mapping of field name to the predicates registered on it."""

    filters: Mapping[str, tuple[Filter, ...]] = field(default_factory=dict)

    @staticmethod
    def of(**conditions: Any) -> FilterSet:
        """One single-predicate list per keyword."""
        return FilterSet({name: (to_filter(value),) for name, value in conditions.items()})

    def merge(self, other: FilterSet) -> FilterSet:
        """Concatenate *other*'s predicates after this set's, per field."""
        merged: dict[str, tuple[Filter, ...]] = dict(self.filters)
        for name, predicates in other.filters.items():
            merged[name] = merged.get(name, ()) + tuple(predicates)
        return FilterSet(merged)

    @property
    def fields(self) -> list[str]:
        return list(self.filters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.filters)

    def __bool__(self) -> bool:
        return bool(self.filters)

    def matches_id(self, id: Any) -> bool:
        """Whether *id* passes every predicate registered on the id field."""
        return all(f.matches(id) for f in self.filters.get(ID_FIELD, ()))

    def matches_row(self, read: Callable[[str], Any]) -> bool:
        """Whether a row passes every non-id predicate.

        ``read`` returns the row's value for a field name, so the same check
        serves full records and extracted field maps.
        """
        for name, predicates in self.filters.items():
            if name == ID_FIELD:
                continue
            value = read(name)
            if not all(f.matches(value) for f in predicates):
                return False
        return True
