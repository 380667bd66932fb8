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
"""Inbound port: the contract a synthetic data source satisfies."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from synthscope.data.context import Context

R = TypeVar("R", covariant=True)


@runtime_checkable
class RecordAdapterPort(Protocol[R]):
    """Record source behind a scope.

    ``all_ids`` must be deterministic for a given context. The batch
    operations return one entry per requested id, in request order, with
    ``None`` where an id does not resolve.
    """

    def all_ids(self, context: Context) -> Sequence[Any]: ...

    def load_by_id(self, id: Any, context: Context) -> R | None: ...

    def load_by_ids(self, ids: Sequence[Any], context: Context) -> list[R | None]: ...

    def extract_by_ids(
        self, ids: Sequence[Any], columns: Sequence[str], context: Context
    ) -> list[Mapping[str, Any] | None]: ...

    def context_key_names(self) -> tuple[str, ...]: ...

    def column_names(self) -> tuple[str, ...]: ...
