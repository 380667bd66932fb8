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
"""Tests for Scope — composition, resolution, plucking and shorthand scopes."""

from __future__ import annotations

import copy
import logging

import pytest

from synthscope.data.filter import OneOf
from synthscope.data.model import SyntheticModel, scope_method
from synthscope.data.ordering import Order, Sort
from synthscope.data.scope import Scope
from synthscope.kernel.exceptions import (
    IncompatibleScopeException,
    InvalidColumnException,
    NotImplementedException,
    QueryException,
    RecordNotFoundException,
    UnknownContextKeyException,
    UnknownScopeMethodException,
    UnparseableOrderingException,
)

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class FruitService:
    FRUIT = {
        "red": "apple",
        "orange": "orange",
        "yellow": "banana",
        "green": "avocado",
        "blue": "blueberry",
        "indigo": "plum",
        "violet": "grape",
    }

    def lookup_fruit(self, color_name: str) -> str:
        return self.FRUIT[color_name]


class ShoutingFruitService(FruitService):
    def lookup_fruit(self, color_name: str) -> str:
        return super().lookup_fruit(color_name).upper()


COLORS = ("red", "orange", "yellow", "green", "blue", "indigo", "violet")


class Color(SyntheticModel, columns=("name", "fruit", "len"), context_keys=("fruit_service",)):
    @classmethod
    def load_by_id(cls, id, context):
        if not isinstance(id, int) or not 0 <= id < len(COLORS):
            return None
        name = COLORS[id]
        return cls(id=id, name=name, fruit=context.fruit_service.lookup_fruit(name), len=len(name))

    @classmethod
    def all_ids(cls, context):
        return list(range(len(COLORS)))

    @scope_method
    def last_three(cls):
        return cls.where(id=[4, 5, 6])

    @scope_method
    def evens(cls):
        return cls.where(id=[0, 2, 4, 6])

    @scope_method
    def odds(cls):
        return cls.where(id=[1, 3, 5])

    @scope_method
    def palette_size(cls):
        return len(COLORS)


ANIMALS = ("horse", "chicken", "monkey", "bear")


class Animal(SyntheticModel, columns=("len", "even")):
    @classmethod
    def all_ids(cls, context):
        return list(ANIMALS)

    @classmethod
    def load_by_id(cls, id, context):
        if id not in ANIMALS:
            return None
        return cls(id=id, len=len(id), even=len(id) % 2 == 0)

    @classmethod
    def extract_by_ids(cls, ids, columns, context):
        if set(columns) - {"id", "len"}:
            return super().extract_by_ids(ids, columns, context)
        # Deliberately wrong len so tests can tell this path was taken
        return [{"id": id, "len": 99} for id in ids]


class Tally(SyntheticModel, columns=("value",)):
    """Model that only supports point lookups."""

    @classmethod
    def load_by_id(cls, id, context):
        return cls(id=id, value=id * 10)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def colors() -> Scope[Color]:
    return Color.with_context(fruit_service=FruitService())


@pytest.fixture
def red(colors):
    return colors.find(0)


@pytest.fixture
def orange(colors):
    return colors.find(1)


@pytest.fixture
def yellow(colors):
    return colors.find(2)


@pytest.fixture
def blue(colors):
    return colors.find(4)


SORTED_NAMES = ["blue", "green", "indigo", "orange", "red", "violet", "yellow"]
SORTED_NAME_FRUITS = ["blueberry", "avocado", "plum", "orange", "apple", "grape", "banana"]
LENGTH_ORDERED_NAMES = ["indigo", "orange", "violet", "yellow", "green", "blue", "red"]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_unknown_context_key_raises(self) -> None:
        with pytest.raises(UnknownContextKeyException) as exc_info:
            Color.with_context(fruit_service=FruitService(), weather="sunny")
        assert exc_info.value.context["keys"] == ["weather"]

    def test_unknown_context_key_raises_on_direct_construction(self) -> None:
        with pytest.raises(UnknownContextKeyException):
            Scope(Color, context={"flavor": 1})

    def test_raw_filters_are_coerced(self, colors) -> None:
        scope = Scope(Color, context=colors.context, filters={"id": [[1, 4]]})
        assert scope.filters.filters["id"] == (OneOf((1, 4)),)
        assert scope.pluck("id") == [1, 4]

    def test_unparseable_ordering_raises(self) -> None:
        with pytest.raises(UnparseableOrderingException):
            Color.order(42)

    def test_scope_is_immutable(self, colors) -> None:
        with pytest.raises(AttributeError):
            colors.context = {}  # type: ignore[misc]

    def test_repr_does_not_resolve(self) -> None:
        scope = Tally.where(value=10).order({"value": "desc"})
        assert repr(scope) == "<Scope Tally where=['value'] order=['value desc']>"


# ---------------------------------------------------------------------------
# all / iteration
# ---------------------------------------------------------------------------


class TestAll:
    def test_all_matches_find_over_ids(self, colors) -> None:
        assert colors.all() == [colors.find(id) for id in colors.ids()]

    def test_limited_scope(self, colors) -> None:
        assert colors.last_three().all() == [colors.find(id) for id in (4, 5, 6)]

    def test_combined_scope(self, colors) -> None:
        assert colors.last_three().evens().all() == [colors.find(4), colors.find(6)]

    def test_self_contradictory_scope(self, colors) -> None:
        assert colors.odds().evens().all() == []

    def test_iteration_is_restartable(self, colors) -> None:
        scope = colors.order("name")
        first = [c.name for c in scope]
        second = [c.name for c in scope]
        assert first == second == SORTED_NAMES

    def test_unimplemented_all_ids_raises(self) -> None:
        with pytest.raises(NotImplementedException) as exc_info:
            Tally.all()
        assert exc_info.value.context["operation"] == "all_ids"
        assert isinstance(exc_info.value, NotImplementedError)


# ---------------------------------------------------------------------------
# is_empty / count / exists / first
# ---------------------------------------------------------------------------


class TestEmptiness:
    def test_unfiltered_scope_is_not_empty(self, colors) -> None:
        assert colors.is_empty() is False

    def test_limited_scope_is_not_empty(self, colors) -> None:
        assert colors.last_three().is_empty() is False

    def test_none_scope_is_empty(self, colors) -> None:
        assert colors.none().is_empty() is True

    def test_excluding_restriction_is_empty(self, colors) -> None:
        assert colors.where(id=97).is_empty() is True

    @pytest.mark.parametrize(
        "build",
        [
            lambda s: s,
            lambda s: s.none(),
            lambda s: s.odds().evens(),
            lambda s: s.where(name="blue"),
            lambda s: s.where(len=lambda n: n > 10),
        ],
    )
    def test_is_empty_agrees_with_all(self, colors, build) -> None:
        scope = build(colors)
        assert scope.is_empty() == (len(scope.all()) == 0)
        assert scope.exists() == (not scope.is_empty())

    def test_count(self, colors) -> None:
        assert colors.count() == 7
        assert colors.odds().count() == 3

    def test_first(self, colors, blue) -> None:
        assert colors.order("name").first() == blue
        assert colors.none().first() is None


# ---------------------------------------------------------------------------
# find / find_by_id
# ---------------------------------------------------------------------------


class TestFind:
    def test_find_valid_id(self, colors, yellow) -> None:
        assert colors.find(2) == yellow

    def test_find_invalid_id_raises(self, colors) -> None:
        with pytest.raises(RecordNotFoundException) as exc_info:
            colors.find(87)
        assert exc_info.value.context == {"model": "Color", "id": 87}

    def test_find_outside_scope_raises(self, colors) -> None:
        with pytest.raises(RecordNotFoundException):
            colors.last_three().find(2)

    def test_find_by_id_valid(self, colors, yellow) -> None:
        assert colors.find_by_id(2) == yellow

    def test_find_by_id_invalid_returns_none(self, colors) -> None:
        assert colors.find_by_id(87) is None

    def test_find_by_id_in_filtered_scope(self, colors, blue) -> None:
        assert colors.last_three().find_by_id(4) == blue

    def test_find_by_id_outside_filtered_scope(self, colors) -> None:
        assert colors.last_three().find_by_id(2) is None

    def test_find_by_id_applies_field_filters(self, colors) -> None:
        assert colors.where(name="blue").find_by_id(4) is not None
        assert colors.where(name="red").find_by_id(4) is None

    def test_find_by_id_does_not_enumerate_ids(self) -> None:
        record = Tally.where(id=lambda id: id > 2).find_by_id(5)
        assert record is not None
        assert record.value == 50
        assert Tally.where(id=lambda id: id > 2).find_by_id(1) is None


# ---------------------------------------------------------------------------
# merge
# ---------------------------------------------------------------------------


class TestMerge:
    def test_two_unfiltered_scopes(self, colors) -> None:
        merged = colors.merge(colors)
        assert merged == colors.all()
        assert merged != colors.last_three()

    def test_two_identical_scopes(self, colors) -> None:
        assert colors.evens().merge(colors.evens()) == colors.evens()

    def test_intersection(self, colors) -> None:
        assert colors.odds().merge(colors.last_three()) == colors.where(id=5)

    def test_no_intersection(self, colors) -> None:
        assert colors.odds().merge(colors.evens()) == colors.none()

    def test_merge_accepts_model_class(self, colors) -> None:
        assert colors.merge(Color).count() == 7

    def test_merge_keeps_inputs_unchanged(self, colors) -> None:
        odds = colors.odds()
        odds.merge(colors.last_three())
        assert odds.pluck("id") == [1, 3, 5]

    def test_later_context_wins(self) -> None:
        scope = Color.with_context(fruit_service=FruitService()).with_context(
            fruit_service=ShoutingFruitService()
        )
        assert scope.find(0).fruit == "APPLE"

    def test_orderings_are_appended(self, colors) -> None:
        scope = colors.order({"len": "desc"}).merge(Color.order("name"))
        assert [o.property for o in scope.orderings] == ["len", "name"]
        assert scope.pluck("name") == LENGTH_ORDERED_NAMES

    def test_merge_is_associative(self, colors) -> None:
        a = colors.where(len=[3, 6]).order({"len": "desc"})
        b = Color.with_context(fruit_service=ShoutingFruitService()).where(len=[6, 5]).order("name")
        c = Color.with_context(fruit_service=FruitService()).odds()

        left = a.merge(b).merge(c)
        right = a.merge(b.merge(c))
        assert left.all() == right.all()
        assert dict(left.context) == dict(right.context)
        assert left.orderings == right.orderings
        assert left.pluck("name", "fruit") == [("indigo", "plum"), ("orange", "orange")]
        assert right.pluck("name", "fruit") == [("indigo", "plum"), ("orange", "orange")]

    def test_merging_other_model_raises(self, colors) -> None:
        with pytest.raises(IncompatibleScopeException):
            colors.merge(Animal.scope())


# ---------------------------------------------------------------------------
# none / where
# ---------------------------------------------------------------------------


class TestWhere:
    def test_none_on_limited_scope(self, colors) -> None:
        assert colors.last_three().none().all() == []

    def test_single_id(self, colors) -> None:
        assert colors.where(id=3) == [colors.find(3)]

    def test_range_of_ids(self, colors) -> None:
        assert colors.where(id=range(0, 3)).ids() == [0, 1, 2]

    def test_dict_keys_as_membership(self, colors) -> None:
        wanted = {"red": 1, "blue": 2}
        assert colors.where(name=wanted.keys()).pluck("name") == ["red", "blue"]

    def test_multiple_ids(self, colors) -> None:
        assert colors.where(id=[1, 4]) == [colors.find(1), colors.find(4)]

    def test_single_field_value(self, colors, orange) -> None:
        assert colors.where(name="orange") == [orange]

    def test_multiple_field_values(self, colors, orange, blue) -> None:
        assert colors.where(name=["orange", "blue"]) == [orange, blue]

    def test_mix_of_fields(self, colors, orange, blue) -> None:
        assert colors.where(id=[1, 3, 4], name=["yellow", "orange", "blue"]) == [orange, blue]

    def test_sequential_where_calls(self, colors, orange, blue) -> None:
        assert colors.where(id=[1, 3, 4]).where(name=["yellow", "orange", "blue"]) == [orange, blue]

    def test_repeated_field_narrows(self, colors) -> None:
        assert colors.where(len=6).where(len=3).is_empty()

    def test_predicate_value(self, colors, blue) -> None:
        assert colors.where(name=lambda n: n.startswith("b")) == [blue]

    def test_where_does_not_mutate(self, colors) -> None:
        colors.where(id=1)
        assert colors.count() == 7

    def test_ids_apply_only_id_filters(self, colors) -> None:
        assert colors.where(id=[1, 2, 3], name="red").ids() == [1, 2, 3]


# ---------------------------------------------------------------------------
# order
# ---------------------------------------------------------------------------


class TestOrder:
    def test_single_column(self, colors) -> None:
        scope = colors.order("name")
        assert [c.name for c in scope] == SORTED_NAMES
        assert scope.pluck("name") == SORTED_NAMES
        assert scope.pluck("fruit") == SORTED_NAME_FRUITS

    def test_explicit_ascending(self, colors) -> None:
        scope = colors.order({"name": "asc"})
        assert [c.name for c in scope] == SORTED_NAMES
        assert scope.pluck("name") == SORTED_NAMES
        assert scope.pluck("fruit") == SORTED_NAME_FRUITS

    def test_reverse(self, colors) -> None:
        scope = colors.order({"name": "desc"})
        assert [c.name for c in scope] == SORTED_NAMES[::-1]
        assert scope.pluck("name") == SORTED_NAMES[::-1]
        assert scope.pluck("fruit") == SORTED_NAME_FRUITS[::-1]

    def test_multiple_columns(self, colors) -> None:
        scope = colors.order({"len": "desc"}, "name")
        assert [c.name for c in scope] == LENGTH_ORDERED_NAMES
        assert scope.pluck("name") == LENGTH_ORDERED_NAMES

    def test_tuple_and_order_arguments(self, colors) -> None:
        scope = colors.order(("len", "desc"), Order.asc("name"))
        assert scope.pluck("name") == LENGTH_ORDERED_NAMES

    def test_sort_argument(self, colors) -> None:
        scope = colors.order(Sort.by("len").descending().and_then(Sort.by("name")))
        assert scope.pluck("name") == LENGTH_ORDERED_NAMES

    def test_unordered_keeps_id_order(self, colors) -> None:
        assert colors.pluck("name") == list(COLORS)

    def test_ordering_by_filtered_but_unplucked_column(self, colors) -> None:
        assert colors.where(len=6).order("name").pluck("id") == [5, 1, 6, 2]


# ---------------------------------------------------------------------------
# pluck / pluck_rows
# ---------------------------------------------------------------------------


class TestPluck:
    def test_single_column(self, colors) -> None:
        assert colors.odds().pluck("id") == [1, 3, 5]

    def test_multiple_columns(self, colors) -> None:
        assert colors.odds().pluck("id", "name") == [(1, "orange"), (3, "green"), (5, "indigo")]

    def test_columns_in_different_sequence(self, colors) -> None:
        assert colors.odds().pluck("name", "id") == [("orange", 1), ("green", 3), ("indigo", 5)]

    def test_pluck_rows(self, colors) -> None:
        assert colors.odds().pluck_rows("name", "id") == [
            {"name": "orange", "id": 1},
            {"name": "green", "id": 3},
            {"name": "indigo", "id": 5},
        ]

    def test_invalid_column(self, colors) -> None:
        with pytest.raises(InvalidColumnException) as exc_info:
            colors.odds().pluck("flavor")
        assert exc_info.value.context["columns"] == ["flavor"]

    def test_valid_and_invalid_columns(self, colors) -> None:
        with pytest.raises(InvalidColumnException) as exc_info:
            colors.odds().pluck("id", "flavor", "smell")
        assert exc_info.value.context["columns"] == ["flavor", "smell"]

    def test_no_columns(self, colors) -> None:
        with pytest.raises(QueryException) as exc_info:
            colors.pluck()
        assert exc_info.value.code == "COLUMN_MISSING"


class TestPluckWithCustomExtractor:
    IDS = ("horse", "chicken", "monkey")

    @pytest.fixture
    def scope(self) -> Scope[Animal]:
        return Animal.where(id=self.IDS)

    def test_uses_custom_extractor(self, scope) -> None:
        assert scope.pluck("id") == list(self.IDS)
        assert scope.pluck("len") == [99, 99, 99]
        assert scope.pluck_rows("len") == [{"len": 99}, {"len": 99}, {"len": 99}]
        assert scope.pluck("id", "len") == [("horse", 99), ("chicken", 99), ("monkey", 99)]
        assert scope.pluck_rows("id", "len") == [
            {"id": "horse", "len": 99},
            {"id": "chicken", "len": 99},
            {"id": "monkey", "len": 99},
        ]

    def test_falls_back_to_default_extractor(self, scope) -> None:
        assert scope.pluck("len", "even") == [(5, False), (7, False), (6, True)]
        assert scope.where(even=False).pluck("len", "even") == [(5, False), (7, False)]
        assert scope.where(even=False).pluck("id") == ["horse", "chicken"]
        assert scope.pluck("id", "len", "even") == [
            ("horse", 5, False),
            ("chicken", 7, False),
            ("monkey", 6, True),
        ]
        assert scope.pluck_rows("id", "len", "even") == [
            {"id": "horse", "len": 5, "even": False},
            {"id": "chicken", "len": 7, "even": False},
            {"id": "monkey", "len": 6, "even": True},
        ]

    def test_records_are_unaffected(self, scope) -> None:
        assert [a.len for a in scope] == [5, 7, 6]


# ---------------------------------------------------------------------------
# Shorthand scope methods
# ---------------------------------------------------------------------------


class TestScopeMethods:
    def test_class_level_call_returns_scope(self) -> None:
        assert isinstance(Color.odds(), Scope)

    def test_scope_result_is_merged(self, colors) -> None:
        scope = colors.where(name=["orange", "green", "red"]).odds()
        assert scope.pluck("name") == ["orange", "green"]

    def test_context_survives_shorthand(self, colors) -> None:
        assert colors.last_three().pluck("fruit") == ["blueberry", "plum", "grape"]

    def test_plain_value_passes_through(self, colors) -> None:
        assert colors.palette_size() == 7

    def test_unknown_method_raises(self, colors) -> None:
        with pytest.raises(UnknownScopeMethodException):
            colors.bogus()
        assert not hasattr(colors, "bogus")


# ---------------------------------------------------------------------------
# Equality, page, logging
# ---------------------------------------------------------------------------


class TestValueSemantics:
    def test_equal_to_matching_list(self, colors, orange) -> None:
        assert colors.where(id=1) == [orange]
        assert colors.where(id=1) == (orange,)

    def test_not_equal_to_unrelated_value(self, colors) -> None:
        assert colors != 37
        assert colors != None  # noqa: E711

    def test_scopes_are_unhashable(self, colors) -> None:
        with pytest.raises(TypeError):
            hash(colors)

    def test_copy_returns_same_scope(self, colors) -> None:
        scope = colors.where(id=[1, 2])
        assert copy.copy(scope) is scope
        assert copy.deepcopy(scope) is scope

    def test_deepcopy_of_container_holding_scopes(self, colors) -> None:
        holder = {"odd": colors.odds(), "names": ["x"]}
        copied = copy.deepcopy(holder)
        assert copied["odd"] is holder["odd"]
        assert copied["names"] is not holder["names"]
        assert copied["odd"].ids() == [1, 3, 5]


class TestPage:
    def test_page_slices_ordered_results(self, colors) -> None:
        page = colors.order("name").page(2, 3)
        assert [c.name for c in page.items] == ["orange", "red", "violet"]
        assert page.total == 7
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is True

    def test_page_past_end_is_empty(self, colors) -> None:
        assert colors.page(9, 3).items == []


class TestResolutionLogging:
    def test_resolution_logs_at_debug(self, colors, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="synthscope.data.scope")
        colors.odds().all()
        assert any("Resolved Color scope" in r.getMessage() for r in caplog.records)
