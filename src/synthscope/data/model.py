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
"""Base class for synthetic models — read-only records from a user-provided source.

A synthetic model behaves like a table-backed model for querying purposes,
but its records come from two class-level functions the subclass provides:
``all_ids(context)`` and ``load_by_id(id, context)``. Everything else
(filtering, ordering, plucking, context injection) is handled by
:class:`~synthscope.data.scope.Scope`.

Usage::

    class Color(SyntheticModel, columns=("name", "len"), context_keys=("palette",)):

        @classmethod
        def all_ids(cls, context):
            return list(range(len(context.palette)))

        @classmethod
        def load_by_id(cls, id, context):
            if not 0 <= id < len(context.palette):
                return None
            name = context.palette[id]
            return cls(id=id, name=name, len=len(name))

        @scope_method
        def short(cls):
            return cls.where(len=lambda n: n <= 4)

    Color.with_context(palette=["red", "blue"]).short().order("name").pluck("name")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, ClassVar, TypeVar

from synthscope.data.context import Context
from synthscope.data.filter import ID_FIELD
from synthscope.data.page import Page
from synthscope.data.scope import Scope
from synthscope.kernel.exceptions import (
    ColumnAlreadyDeclaredException,
    MissingIdentifierException,
    ModelDefinitionException,
    NotImplementedException,
    UnknownFieldException,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="SyntheticModel")

_SCOPE_METHOD_MARKER = "__synthscope_scope_method__"


def scope_method(func: Callable[..., Any]) -> classmethod:
    """Register a class-level shorthand that scopes can call by name.

    The decorated function becomes a classmethod. When it is invoked on a
    scope, a :class:`Scope` result is merged into that scope; any other
    result is returned unchanged.
    """
    setattr(func, _SCOPE_METHOD_MARKER, True)
    return classmethod(func)


def _column(name: str) -> property:
    def read(self: SyntheticModel) -> Any:
        return self._values.get(name)

    return property(read, doc=f"The ``{name}`` column.")


class SyntheticModel:
    """Read-only record whose class doubles as its own data source adapter."""

    __columns__: ClassVar[tuple[str, ...]] = (ID_FIELD,)
    __context_keys__: ClassVar[tuple[str, ...]] = ()
    __scope_methods__: ClassVar[dict[str, Callable[..., Any]]] = {}

    _values: dict[str, Any]

    def __init_subclass__(
        cls,
        columns: Iterable[str] = (),
        context_keys: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)

        declared = list(cls.__columns__)
        for name in columns:
            if name in declared:
                raise ColumnAlreadyDeclaredException(cls.__name__, name)
            if hasattr(SyntheticModel, name):
                raise ModelDefinitionException(
                    f"Column {name!r} on {cls.__name__} collides with a SyntheticModel attribute",
                    code="COLUMN_RESERVED",
                    context={"model": cls.__name__, "column": name},
                )
            declared.append(name)
            setattr(cls, name, _column(name))
        cls.__columns__ = tuple(declared)

        keys = list(cls.__context_keys__)
        for key in context_keys:
            if key.startswith("_") or hasattr(Context, key):
                raise ModelDefinitionException(
                    f"Context key {key!r} on {cls.__name__} collides with a Context attribute",
                    code="CONTEXT_KEY_RESERVED",
                    context={"model": cls.__name__, "key": key},
                )
            if key not in keys:
                keys.append(key)
        cls.__context_keys__ = tuple(keys)

        registry = dict(cls.__scope_methods__)
        for attr, value in vars(cls).items():
            if isinstance(value, classmethod) and getattr(value.__func__, _SCOPE_METHOD_MARKER, False):
                registry[attr] = value.__func__
        cls.__scope_methods__ = registry

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def __init__(self, **values: Any) -> None:
        cls = type(self)
        if ID_FIELD not in values:
            raise MissingIdentifierException(cls.__name__)
        unknown = [name for name in values if name not in cls.__columns__]
        if unknown:
            raise UnknownFieldException(cls.__name__, unknown)
        object.__setattr__(self, "_values", {name: values.get(name) for name in cls.__columns__})

    id = _column(ID_FIELD)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} records are read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} records are read-only")

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={self._values.get(name)!r}" for name in type(self).__columns__)
        return f"{type(self).__name__}({fields})"

    def to_dict(self) -> dict[str, Any]:
        """Every declared column and its value, in declaration order."""
        return dict(self._values)

    # ------------------------------------------------------------------
    # Adapter contract
    # ------------------------------------------------------------------

    @classmethod
    def all_ids(cls, context: Context) -> Sequence[Any]:
        """Every id for which ``load_by_id`` would return a record.

        Must be overridden by subclasses.
        """
        raise NotImplementedException(cls.__name__, "all_ids")

    @classmethod
    def load_by_id(cls: type[M], id: Any, context: Context) -> M | None:
        """The record with *id*, or ``None``. Must be overridden by subclasses."""
        raise NotImplementedException(cls.__name__, "load_by_id")

    @classmethod
    def load_by_ids(cls: type[M], ids: Sequence[Any], context: Context) -> list[M | None]:
        """Records for *ids* in the same order, ``None`` where an id does not resolve.

        Override when the source can load a batch more efficiently.
        """
        return [cls.load_by_id(id, context) for id in ids]

    @classmethod
    def extract_by_ids(
        cls, ids: Sequence[Any], columns: Sequence[str], context: Context
    ) -> list[Mapping[str, Any] | None]:
        """One ``{column: value}`` map per id, in order, ``None`` for missing ids.

        Rows may carry unrequested columns but must carry every requested
        one. The default loads full records and projects them; override when
        the requested columns are cheaper to compute than whole records.
        """
        logger.debug("Extracting %s columns %s through load_by_ids", cls.__name__, list(columns))
        records = {rec.id: rec for rec in cls.load_by_ids(ids, context) if rec is not None}
        rows: list[Mapping[str, Any] | None] = []
        for id in ids:
            rec = records.get(id)
            rows.append(None if rec is None else {col: getattr(rec, col) for col in columns})
        return rows

    @classmethod
    def context_key_names(cls) -> tuple[str, ...]:
        return cls.__context_keys__

    @classmethod
    def column_names(cls) -> tuple[str, ...]:
        return cls.__columns__

    @classmethod
    def scope_methods(cls) -> dict[str, Callable[..., Any]]:
        """Registered ``@scope_method`` functions by name."""
        return dict(cls.__scope_methods__)

    # ------------------------------------------------------------------
    # Scope delegation
    # ------------------------------------------------------------------

    @classmethod
    def scope(cls: type[M]) -> Scope[M]:
        """An unfiltered, unordered scope over every record."""
        return Scope(cls)

    @classmethod
    def with_context(cls: type[M], **values: Any) -> Scope[M]:
        return cls.scope().with_context(**values)

    @classmethod
    def where(cls: type[M], **conditions: Any) -> Scope[M]:
        return cls.scope().where(**conditions)

    @classmethod
    def order(cls: type[M], *args: Any) -> Scope[M]:
        return cls.scope().order(*args)

    @classmethod
    def none(cls: type[M]) -> Scope[M]:
        return cls.scope().none()

    @classmethod
    def merge(cls: type[M], other: Any) -> Scope[M]:
        return cls.scope().merge(other)

    @classmethod
    def all(cls: type[M]) -> list[M]:
        return cls.scope().all()

    @classmethod
    def find(cls: type[M], id: Any) -> M:
        return cls.scope().find(id)

    @classmethod
    def find_by_id(cls: type[M], id: Any) -> M | None:
        return cls.scope().find_by_id(id)

    @classmethod
    def ids(cls) -> list[Any]:
        return cls.scope().ids()

    @classmethod
    def is_empty(cls) -> bool:
        return cls.scope().is_empty()

    @classmethod
    def exists(cls) -> bool:
        return cls.scope().exists()

    @classmethod
    def count(cls) -> int:
        return cls.scope().count()

    @classmethod
    def first(cls: type[M]) -> M | None:
        return cls.scope().first()

    @classmethod
    def page(cls: type[M], page: int = 1, size: int = 20) -> Page[M]:
        return cls.scope().page(page, size)

    @classmethod
    def pluck(cls, *columns: str) -> list[Any]:
        return cls.scope().pluck(*columns)

    @classmethod
    def pluck_rows(cls, *columns: str) -> list[dict[str, Any]]:
        return cls.scope().pluck_rows(*columns)
