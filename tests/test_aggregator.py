# tests/test_aggregator.py
from unittest.mock import MagicMock

import pytest

from wordtally.core.aggregator import FrequencyAggregator, count_partition, split_partitions
from wordtally.errors import AggregationError


def _normalized(table):
    return {word.casefold(): count for word, count in table.items()}


# --- Test 1: Counting ---

def test_case_variants_collapse_to_one_key():
    table = FrequencyAggregator(max_workers=2).aggregate(["The", "the", "THE"])

    assert len(table) == 1
    assert table["the"] == 3
    # Which casing survives is not fixed; only the normalized key is
    assert next(iter(table)).casefold() == "the"


def test_counts_mixed_words():
    words = ["to", "and", "to", "to", "and", "a", "team", "team", "team", "team", "team",
             "$", "Broadridge", "to", "and", "a", "team", "$", "Broadridge", "a"]

    table = FrequencyAggregator(max_workers=4).aggregate(words)

    assert _normalized(table) == {
        "to": 4, "and": 3, "a": 3, "team": 6, "$": 2, "broadridge": 2,
    }


def test_empty_input_yields_empty_table():
    table = FrequencyAggregator().aggregate([])
    assert len(table) == 0
    assert dict(table) == {}


def test_blank_tokens_are_skipped():
    table = FrequencyAggregator(max_workers=1).aggregate(["", "  ", "a"])
    assert dict(table) == {"a": 1}


@pytest.mark.parametrize("workers", [1, 2, 3, 7, 16, 64])
def test_parallel_matches_sequential(workers):
    tokens = ("Lorem ipsum dolor sit amet IPSUM lorem Dolor dolor x " * 37).split()
    tokens += ["Tail", "tail"]

    sequential = FrequencyAggregator(max_workers=1).aggregate(tokens)
    parallel = FrequencyAggregator(max_workers=workers).aggregate(tokens)

    assert _normalized(parallel) == _normalized(sequential)
    assert parallel.total == len(tokens)


# --- Test 2: Failures ---

def test_none_token_raises_aggregation_error():
    logger = MagicMock()
    aggregator = FrequencyAggregator(max_workers=2, logger=logger)

    with pytest.raises(AggregationError) as exc_info:
        aggregator.aggregate(["aaa", "bbb", "ccc", None, ""])

    assert isinstance(exc_info.value.__cause__, TypeError)
    logger.error.assert_called_once()


def test_none_token_fails_sequential_too():
    with pytest.raises(AggregationError):
        FrequencyAggregator(max_workers=1).aggregate([None])


@pytest.mark.parametrize("workers", [0, -3])
def test_invalid_worker_count(workers):
    with pytest.raises(ValueError):
        FrequencyAggregator(max_workers=workers)


# --- Test 3: Helpers ---

def test_split_partitions_covers_every_index():
    ranges = split_partitions(10, 3)
    assert [len(r) for r in ranges] == [4, 3, 3]
    assert [i for r in ranges for i in r] == list(range(10))


def test_split_partitions_never_exceeds_size():
    assert len(split_partitions(2, 8)) == 2
    assert split_partitions(0, 4) == []


def test_count_partition_reports_absolute_position():
    with pytest.raises(TypeError, match="position 12"):
        count_partition(["a", None], offset=11)


def test_sharp_s_and_ss_stay_separate():
    table = FrequencyAggregator(max_workers=2).aggregate(["straße", "strasse", "Straße"])
    assert len(table) == 2
    assert table["STRAßE"] == 2
    assert table["strasse"] == 1
