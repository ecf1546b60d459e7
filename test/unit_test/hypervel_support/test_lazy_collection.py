"""Unit tests for the generator-backed LazyCollection."""

import pytest

from hypervel_support.collection import Collection
from hypervel_support.lazy_collection import LazyCollection


def counting_source(seen, limit=100):
    def generate():
        for n in range(1, limit):
            seen.append(n)
            yield n

    return generate


class TestLazyCollectionSources:
    @pytest.mark.parametrize(
        "source,expected",
        [
            (None, []),
            ([1, 2], [1, 2]),
            ({"a": 1}, {"a": 1}),
            ("text", ["text"]),
            (Collection([3]), [3]),
        ],
    )
    def test_sources(self, source, expected):
        assert LazyCollection(source).all() == expected

    def test_generator_function_is_rerun_on_each_iteration(self):
        lazy = LazyCollection(lambda: iter([1, 2]))

        assert lazy.all() == [1, 2]
        assert lazy.all() == [1, 2]

    def test_one_shot_iterator_is_buffered(self):
        lazy = LazyCollection(iter([1, 2]))

        assert lazy.count() == 2
        assert lazy.all() == [1, 2]

    def test_times_and_range(self):
        assert LazyCollection.times(3).all() == [1, 2, 3]
        assert LazyCollection.times(2, lambda n: n * 5).all() == [5, 10]
        assert LazyCollection.range(1, 4).all() == [1, 2, 3, 4]
        assert LazyCollection.range(3, 1).all() == [3, 2, 1]

    def test_make(self):
        assert LazyCollection.make([1]).all() == [1]


class TestLazyEvaluation:
    def test_nothing_runs_until_consumed(self):
        seen = []
        lazy = LazyCollection(counting_source(seen)).map(lambda n: n * 2)

        assert seen == []
        assert lazy.first() == 2
        assert seen == [1]

    def test_take_stops_pulling_items(self):
        seen = []

        result = LazyCollection(counting_source(seen)).filter(lambda n: n % 2).take(2).all()

        assert result == {0: 1, 2: 3}
        assert seen == [1, 2, 3]

    def test_take_negative_returns_tail(self):
        assert LazyCollection([1, 2, 3]).take(-2).values().all() == [2, 3]

    def test_skip(self):
        assert LazyCollection([1, 2, 3]).skip(1).values().all() == [2, 3]

    def test_reject_keys_values(self):
        lazy = LazyCollection({"a": 1, "b": 2, "c": 3}).reject(lambda item: item == 2)

        assert lazy.keys().all() == ["a", "c"]
        assert lazy.values().all() == [1, 3]

    def test_filter_without_callback(self):
        assert LazyCollection([0, 1, None, 2]).filter().values().all() == [1, 2]


class TestLazyChunking:
    def test_chunk_keeps_keys(self):
        chunks = LazyCollection([1, 2, 3]).chunk(2)

        assert [chunk.all() for chunk in chunks] == [[1, 2], {2: 3}]
        assert LazyCollection([1]).chunk(0).all() == []

    def test_chunk_while_groups_runs(self):
        chunks = LazyCollection(list("AABCCC")).chunk_while(lambda item, key, chunk: item == chunk.last())

        assert [chunk.values().all() for chunk in chunks] == [["A", "A"], ["B"], ["C", "C", "C"]]

    def test_chunk_while_on_empty_source(self):
        assert LazyCollection([]).chunk_while(lambda item: True).all() == []

    def test_chunk_while_single_item(self):
        chunks = LazyCollection([7]).chunk_while(lambda item: False)

        assert [chunk.all() for chunk in chunks] == [[7]]


class TestLazyEagerResults:
    def test_collect(self):
        collected = LazyCollection([1, 2]).collect()

        assert isinstance(collected, Collection)
        assert collected.all() == [1, 2]

    def test_count_len_and_empty(self):
        assert LazyCollection([1, 2]).count() == 2
        assert len(LazyCollection([1])) == 1
        assert LazyCollection([]).is_empty() is True
        assert LazyCollection([0]).is_not_empty() is True

    def test_first_with_callback_and_default(self):
        assert LazyCollection([1, 2, 3]).first(lambda n: n > 1) == 2
        assert LazyCollection([]).first(default="none") == "none"

    def test_each_stops_on_false(self):
        seen = []
        LazyCollection([1, 2, 3]).each(lambda n: seen.append(n) or n < 2)

        assert seen == [1, 2]

    def test_to_array_and_iter(self):
        assert LazyCollection([Collection([1])]).to_array() == [[1]]
        assert list(LazyCollection([1, 2])) == [1, 2]

    def test_conditionable_and_macro(self):
        LazyCollection.macro("doubled", lambda self: self.map(lambda n: n * 2))

        result = LazyCollection([1, 2]).when(True, lambda lazy: lazy.doubled())

        assert result.all() == [2, 4]
