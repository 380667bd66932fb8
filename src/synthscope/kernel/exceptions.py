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
"""Exception hierarchy for SynthScope.

Every error the scope engine raises derives from :class:`SynthScopeException`,
so callers can catch one type to handle all of them, or a specific subclass
for targeted handling. Errors are raised at the point of violation and are
never recovered internally.
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# Base Exception
# =============================================================================


class SynthScopeException(Exception):
    """Base exception for all SynthScope errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "RECORD_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Query Exceptions
# =============================================================================


class QueryException(SynthScopeException):
    """A scope was built or used with invalid arguments."""


class UnknownContextKeyException(QueryException):
    """A context was built with keys the model does not declare."""

    def __init__(self, model: str, keys: list[str]) -> None:
        super().__init__(
            f"Unknown context keys {keys!r} for {model}",
            code="CONTEXT_UNKNOWN_KEY",
            context={"model": model, "keys": keys},
        )


class UnparseableOrderingException(QueryException):
    """An ordering argument is not a name, a name+direction, or an Order/Sort."""

    def __init__(self, argument: Any) -> None:
        super().__init__(
            f"Unable to interpret ordering argument {argument!r}",
            code="ORDERING_UNPARSEABLE",
            context={"argument": argument},
        )


class IncompatibleScopeException(QueryException):
    """Two scopes bound to different models were merged."""

    def __init__(self, model: str, other: str) -> None:
        super().__init__(
            f"Cannot merge a scope on {other} into a scope on {model}",
            code="SCOPE_INCOMPATIBLE",
            context={"model": model, "other": other},
        )


class InvalidColumnException(QueryException):
    """``pluck`` was asked for columns the model does not declare."""

    def __init__(self, model: str, columns: list[str]) -> None:
        super().__init__(
            f"No such column {', '.join(repr(c) for c in columns)} to pluck from {model}",
            code="COLUMN_INVALID",
            context={"model": model, "columns": columns},
        )


class UnknownScopeMethodException(QueryException, AttributeError):
    """No scope method of that name is registered on the model."""

    def __init__(self, model: str, name: str) -> None:
        super().__init__(
            f"{model} has no scope method {name!r}",
            code="SCOPE_METHOD_UNKNOWN",
            context={"model": model, "name": name},
        )


# =============================================================================
# Lookup Exceptions
# =============================================================================


class RecordNotFoundException(SynthScopeException):
    """``find`` was called with an id the scope does not resolve."""

    def __init__(self, model: str, id: Any) -> None:
        super().__init__(
            f"Couldn't find {model} with id={id!r}",
            code="RECORD_NOT_FOUND",
            context={"model": model, "id": id},
        )


# =============================================================================
# Model Definition Exceptions
# =============================================================================


class ModelDefinitionException(SynthScopeException):
    """A model class or record was declared or constructed incorrectly."""


class MissingIdentifierException(ModelDefinitionException):
    """A record was constructed without an ``id``."""

    def __init__(self, model: str) -> None:
        super().__init__(f"Id missing for {model}", code="RECORD_MISSING_ID", context={"model": model})


class UnknownFieldException(ModelDefinitionException):
    """A record was constructed with fields its model does not declare."""

    def __init__(self, model: str, fields: list[str]) -> None:
        super().__init__(
            f"No such column {', '.join(repr(f) for f in fields)} on {model}",
            code="RECORD_UNKNOWN_FIELD",
            context={"model": model, "fields": fields},
        )


class ColumnAlreadyDeclaredException(ModelDefinitionException):
    """A column name was declared more than once on the same model."""

    def __init__(self, model: str, column: str) -> None:
        super().__init__(
            f"Column {column!r} already configured on {model}",
            code="COLUMN_DUPLICATE",
            context={"model": model, "column": column},
        )


# =============================================================================
# Adapter Exceptions
# =============================================================================


class NotImplementedException(SynthScopeException, NotImplementedError):
    """A required adapter operation was not overridden by the model."""

    def __init__(self, model: str, operation: str) -> None:
        super().__init__(
            f"{model} must implement {operation}()",
            code="ADAPTER_NOT_IMPLEMENTED",
            context={"model": model, "operation": operation},
        )
