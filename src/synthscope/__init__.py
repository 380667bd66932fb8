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
"""SynthScope — ActiveRecord-style scopes for data that doesn't live in a table.

Records come from user-provided functions (computed values, external
services, in-memory lists) instead of a database, but can be filtered,
ordered, plucked and composed like a relational query. All records are
read-only.
"""

from synthscope.core.config import Config, config_properties
from synthscope.data import (
    Context,
    Direction,
    Equals,
    FilterSet,
    OneOf,
    Order,
    Page,
    Predicate,
    RecordAdapterPort,
    Scope,
    Sort,
    SyntheticModel,
    scope_method,
)
from synthscope.kernel.exceptions import (
    IncompatibleScopeException,
    InvalidColumnException,
    MissingIdentifierException,
    NotImplementedException,
    RecordNotFoundException,
    SynthScopeException,
    UnknownContextKeyException,
    UnknownFieldException,
    UnparseableOrderingException,
)
from synthscope.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Context",
    "Direction",
    "Equals",
    "FilterSet",
    "IncompatibleScopeException",
    "InvalidColumnException",
    "MissingIdentifierException",
    "NotImplementedException",
    "OneOf",
    "Order",
    "Page",
    "Predicate",
    "RecordAdapterPort",
    "RecordNotFoundException",
    "Scope",
    "Sort",
    "SyntheticModel",
    "SynthScopeException",
    "UnknownContextKeyException",
    "UnknownFieldException",
    "UnparseableOrderingException",
    "config_properties",
    "configure_logging",
    "scope_method",
]
