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
"""Scope — an immutable, composable, lazily resolved query over a synthetic model.

Scope-returning operations (``where``, ``order``, ``with_context``,
``merge``, ``none``) never touch the data source; each returns a new scope.
Terminal operations (``all``, iteration, ``find``, ``find_by_id``,
``pluck``, ``pluck_rows``, ``ids``, ``count``, ``is_empty``, ...) resolve
the scope from scratch every time they are called:

1. ``all_ids(context)``, narrowed by every predicate on ``id``.
2. ``load_by_ids`` (or ``extract_by_ids`` for plucks) for the narrowed ids.
3. Drop ids that did not resolve, then every non-id predicate.
4. Stable sort by the ordering list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from synthscope.data.context import Context
from synthscope.data.filter import ID_FIELD, FilterSet, Predicate, never, to_filter
from synthscope.data.ordering import Order, parse_orderings, sort_rows
from synthscope.data.page import Page
from synthscope.kernel.exceptions import (
    IncompatibleScopeException,
    InvalidColumnException,
    QueryException,
    RecordNotFoundException,
    UnknownScopeMethodException,
)

if TYPE_CHECKING:
    from synthscope.data.ports.adapter import RecordAdapterPort

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _read_record(record: Any, name: str) -> Any:
    return getattr(record, name)


def _read_row(row: Mapping[str, Any], name: str) -> Any:
    return row.get(name)


def _model_name(model: Any) -> str:
    return getattr(model, "__name__", type(model).__name__)


class Scope(Generic[R]):
    """Immutable query descriptor: model + context + filters + orderings.

    Args:
        model: The adapter that supplies ids and records.
        context: Values for the model's declared context keys.
        filters: A :class:`FilterSet`, or a mapping of field to a list of
            raw filter values.
        orderings: Raw ordering arguments, as accepted by :meth:`order`.

    Raises:
        UnknownContextKeyException: *context* has undeclared keys.
        UnparseableOrderingException: an ordering argument is not understood.
    """

    __slots__ = ("_model", "_context", "_filters", "_orderings")

    def __init__(
        self,
        model: RecordAdapterPort[R],
        context: Mapping[str, Any] | None = None,
        filters: FilterSet | Mapping[str, Any] | None = None,
        orderings: Any = (),
    ) -> None:
        if not isinstance(filters, FilterSet):
            filters = FilterSet(
                {name: tuple(to_filter(v) for v in values) for name, values in (filters or {}).items()}
            )
        object.__setattr__(self, "_model", model)
        object.__setattr__(
            self,
            "_context",
            Context(model.context_key_names(), dict(context or {}), owner=_model_name(model)),
        )
        object.__setattr__(self, "_filters", filters)
        object.__setattr__(self, "_orderings", parse_orderings(orderings))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Scope is immutable")

    def __copy__(self) -> Scope[R]:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Scope[R]:
        return self

    @property
    def model(self) -> RecordAdapterPort[R]:
        return self._model

    @property
    def context(self) -> Context:
        return self._context

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def orderings(self) -> tuple[Order, ...]:
        return self._orderings

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def merge(self, other: Any) -> Scope[R]:
        """Combine with *other*: context overlaid, filters ANDed, orderings appended.

        *other* may be a scope or a model class (meaning its unfiltered scope).

        Raises:
            IncompatibleScopeException: *other* is bound to a different model.
        """
        if not isinstance(other, Scope) and hasattr(other, "scope"):
            other = other.scope()
        if not isinstance(other, Scope) or other._model is not self._model:
            other_model = other._model if isinstance(other, Scope) else other
            raise IncompatibleScopeException(_model_name(self._model), _model_name(other_model))
        return Scope(
            self._model,
            context=self._context.merge(other._context),
            filters=self._filters.merge(other._filters),
            orderings=self._orderings + other._orderings,
        )

    def with_context(self, **values: Any) -> Scope[R]:
        """Add context values; later values win over earlier ones."""
        return self.merge(Scope(self._model, context=values))

    def where(self, **conditions: Any) -> Scope[R]:
        """Narrow by field conditions.

        Each value may be a scalar (equality), a list, tuple, range, set or
        iterator (membership), a callable (predicate), or an explicit filter
        instance. Conditions accumulate across calls, so
        ``where(f=1).where(f=2)`` matches nothing.
        """
        return self.merge(Scope(self._model, filters=FilterSet.of(**conditions)))

    def order(self, *args: Any) -> Scope[R]:
        """Append orderings: ``"name"``, ``("name", "desc")``, ``{"name": "desc"}``, Order or Sort."""
        return self.merge(Scope(self._model, orderings=args))

    def none(self) -> Scope[R]:
        """A scope that matches no records."""
        return self.where(**{ID_FIELD: Predicate(never)})

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        registry = getattr(self._model, "scope_methods", dict)()
        if name not in registry:
            raise UnknownScopeMethodException(_model_name(self._model), name)
        factory = registry[name]

        def call(*args: Any, **kwargs: Any) -> Any:
            result = factory(self._model, *args, **kwargs)
            return self.merge(result) if isinstance(result, Scope) else result

        call.__name__ = name
        call.__doc__ = factory.__doc__
        return call

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def ids(self) -> list[Any]:
        """Ids the scope would yield, before loading any record.

        Only ``id`` predicates are applied; field predicates need records.
        """
        return [id for id in self._model.all_ids(self._context) if self._filters.matches_id(id)]

    def all(self) -> list[R]:
        """Every matching record, ordered. Resolved fresh on each call."""
        ids = self.ids()
        loaded = [rec for rec in self._model.load_by_ids(ids, self._context) if rec is not None]
        matched = [rec for rec in loaded if self._filters.matches_row(lambda name, rec=rec: _read_record(rec, name))]
        logger.debug(
            "Resolved %s scope: %d candidate ids, %d loaded, %d matched",
            _model_name(self._model),
            len(ids),
            len(loaded),
            len(matched),
        )
        return sort_rows(matched, self._orderings, _read_record)

    def __iter__(self) -> Iterator[R]:
        return iter(self.all())

    def count(self) -> int:
        return len(self.all())

    def is_empty(self) -> bool:
        return self.count() == 0

    def exists(self) -> bool:
        return not self.is_empty()

    def first(self) -> R | None:
        results = self.all()
        return results[0] if results else None

    def page(self, page: int = 1, size: int = 20) -> Page[R]:
        """Page *page* (1-based) of *size* records from the ordered results."""
        return Page.slice(self.all(), page, size)

    def find_by_id(self, id: Any) -> R | None:
        """The record with *id* if the scope resolves it, else ``None``.

        A point lookup through ``load_by_id``; ``all_ids`` is not consulted.
        """
        if not self._filters.matches_id(id):
            return None
        record = self._model.load_by_id(id, self._context)
        if record is None or not self._filters.matches_row(lambda name: _read_record(record, name)):
            return None
        return record

    def find(self, id: Any) -> R:
        """Like :meth:`find_by_id`, but raises when the id does not resolve.

        Raises:
            RecordNotFoundException: the scope does not resolve *id*.
        """
        record = self.find_by_id(id)
        if record is None:
            raise RecordNotFoundException(_model_name(self._model), id)
        return record

    def pluck_rows(self, *columns: str) -> list[dict[str, Any]]:
        """``{column: value}`` rows for the matching records, ordered.

        Values come from the model's ``extract_by_ids``, which may compute
        them without building whole records.

        Raises:
            InvalidColumnException: a column is not declared on the model.
        """
        self._assert_valid_columns(columns)

        useful = list(dict.fromkeys([*columns, *self._filters.fields, *(o.property for o in self._orderings)]))
        ids = self.ids()
        rows = [row for row in self._model.extract_by_ids(ids, useful, self._context) if row is not None]
        matched = [row for row in rows if self._filters.matches_row(row.get)]
        logger.debug(
            "Plucked %s columns %s: %d candidate ids, %d matched",
            _model_name(self._model),
            list(columns),
            len(ids),
            len(matched),
        )
        return [{col: row.get(col) for col in columns} for row in sort_rows(matched, self._orderings, _read_row)]

    def pluck(self, *columns: str) -> list[Any]:
        """Column values for the matching records, ordered.

        One column gives a flat list of values; several give one tuple per
        record, in the requested column order.
        """
        rows = self.pluck_rows(*columns)
        if len(columns) == 1:
            return [row[columns[0]] for row in rows]
        return [tuple(row[col] for col in columns) for row in rows]

    def _assert_valid_columns(self, columns: tuple[str, ...]) -> None:
        if not columns:
            raise QueryException(
                "pluck requires at least one column",
                code="COLUMN_MISSING",
                context={"model": _model_name(self._model)},
            )
        declared = self._model.column_names()
        invalid = [col for col in columns if col not in declared]
        if invalid:
            raise InvalidColumnException(_model_name(self._model), invalid)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scope):
            return self.all() == other.all()
        if isinstance(other, (list, tuple)):
            return self.all() == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = [_model_name(self._model)]
        if self._context:
            parts.append(f"context={sorted(self._context)}")
        if self._filters:
            parts.append(f"where={self._filters.fields}")
        if self._orderings:
            parts.append(f"order={[str(o) for o in self._orderings]}")
        return f"<Scope {' '.join(parts)}>"
