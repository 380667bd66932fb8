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
"""Immutable, validated context injected into a model's load operations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from synthscope.kernel.exceptions import UnknownContextKeyException


class Context(Mapping[str, Any]):
    """Read-only mapping from declared context keys to caller-supplied values.

    Values are reachable by key (``context["fruit_service"]``) or by
    attribute (``context.fruit_service``). A declared key that was never
    supplied reads as ``None`` through attribute access, so load functions
    can probe optional dependencies without a ``KeyError``.

    Usage::

        ctx = Context(("fruit_service",), {"fruit_service": FruitService()})
        ctx.fruit_service.lookup_fruit("red")
    """

    __slots__ = ("_allowed", "_values", "_owner")

    def __init__(
        self,
        allowed: Iterable[str],
        values: Mapping[str, Any] | None = None,
        owner: str = "model",
    ) -> None:
        allowed = frozenset(allowed)
        values = dict(values or {})
        unknown = sorted(k for k in values if k not in allowed)
        if unknown:
            raise UnknownContextKeyException(owner, unknown)
        object.__setattr__(self, "_allowed", allowed)
        object.__setattr__(self, "_values", values)
        object.__setattr__(self, "_owner", owner)

    @property
    def allowed_keys(self) -> frozenset[str]:
        return self._allowed

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._allowed:
            return self._values.get(name)
        raise AttributeError(f"{type(self).__name__} for {self._owner} has no key {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def merge(self, other: Mapping[str, Any]) -> Context:
        """Return a new context overlaid by *other*; *other* wins on collision."""
        return Context(self._allowed, {**self._values, **other}, owner=self._owner)

    def __repr__(self) -> str:
        return f"Context({self._values!r})"
