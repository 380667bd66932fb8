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
"""SynthScope Data — query scopes over synthetic models.

The pieces, bottom-up:

- :class:`Context` — validated, read-only dependencies for load functions.
- :class:`Equals`, :class:`OneOf`, :class:`Predicate`, :class:`FilterSet`.
- :class:`Order`, :class:`Sort` — lexicographic, per-key direction.
- :class:`RecordAdapterPort` — what a data source must provide.
- :class:`SyntheticModel` — record base class and default adapter behaviour.
- :class:`Scope` — the immutable, lazily resolved query.
"""

from synthscope.data.context import Context
from synthscope.data.filter import Equals, FilterSet, OneOf, Predicate, to_filter
from synthscope.data.model import SyntheticModel, scope_method
from synthscope.data.ordering import Direction, Order, Sort, parse_orderings
from synthscope.data.page import Page
from synthscope.data.ports.adapter import RecordAdapterPort
from synthscope.data.scope import Scope

__all__ = [
    "Context",
    "Direction",
    "Equals",
    "FilterSet",
    "OneOf",
    "Order",
    "Page",
    "Predicate",
    "RecordAdapterPort",
    "Scope",
    "Sort",
    "SyntheticModel",
    "parse_orderings",
    "scope_method",
    "to_filter",
]
