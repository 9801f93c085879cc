"""
Tests for the seeded random number generator.
"""

import pytest

from dashboard.features.synthetic.rng import Mulberry32, fnv1a_32


@pytest.mark.parametrize(
    "value,expected",
    [("", 0x811C9DC5), ("a", 0xE40C292C), ("foobar", 0xBF9CF968)],
)
def test_fnv1a_32_reference_values(value, expected):
    assert fnv1a_32(value) == expected


def test_fnv1a_32_stays_unsigned():
    assert 0 <= fnv1a_32("player:76561198000000000") <= 0xFFFFFFFF


def test_same_seed_same_stream():
    first = Mulberry32(12345)
    second = Mulberry32(12345)
    assert [first.next_float() for _ in range(50)] == [second.next_float() for _ in range(50)]


def test_different_keys_differ():
    first = Mulberry32.from_key("player:1")
    second = Mulberry32.from_key("player:2")
    assert [first.next_float() for _ in range(5)] != [second.next_float() for _ in range(5)]


def test_floats_in_unit_interval():
    rng = Mulberry32(0)
    assert all(0 <= rng.next_float() < 1 for _ in range(1000))


def test_randint_bounds_inclusive():
    rng = Mulberry32(99)
    values = {rng.randint(-2, 2) for _ in range(500)}
    assert values == {-2, -1, 0, 1, 2}


def test_sample_is_distinct_and_leaves_input_untouched():
    rng = Mulberry32(7)
    values = list(range(22))

    sample = rng.sample(values, 4)

    assert len(set(sample)) == 4
    assert set(sample) <= set(values)
    assert values == list(range(22))


def test_shuffle_is_a_permutation():
    rng = Mulberry32(3)
    values = list(range(10))
    rng.shuffle(values)
    assert sorted(values) == list(range(10))
