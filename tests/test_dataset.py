import pytest

from config import Config
from dataset import Dataset


def test_generate_random_defaults():
    ds = Dataset.generate_random()

    assert len(ds) == Config.default_length
    assert all(1 <= v <= 100 for v in ds.values)


@pytest.mark.parametrize("requested, expected", [(1, 5), (5, 5), (17, 17), (30, 30), (100, 30)])
def test_generate_random_clamps_length(requested, expected):
    assert len(Dataset.generate_random(requested)) == expected


def test_generate_random_is_seeded():
    a = Dataset.generate_random(12, seed=42)
    b = Dataset.generate_random(12, seed=42)

    assert a.values == b.values


def test_generate_random_custom_range():
    ds = Dataset.generate_random(20, low=7, high=9, seed=1)

    assert set(ds.values) <= {7, 8, 9}


def test_generate_random_rejects_inverted_range():
    with pytest.raises(ValueError):
        Dataset.generate_random(10, low=50, high=10)


def test_from_text_accepts_mixed_separators():
    ds = Dataset.from_text("5, 3 8;1\n9")

    assert ds.values == [5, 3, 8, 1, 9]


def test_from_text_rejects_bad_token():
    with pytest.raises(ValueError, match="Not an integer: 'x'"):
        Dataset.from_text("1, 2, x, 4, 5")


def test_from_text_enforces_length():
    with pytest.raises(ValueError, match="between 5 and 30"):
        Dataset.from_text("1 2 3")

    assert Dataset.from_text("1 2 3", enforce_bounds=False).values == [1, 2, 3]


def test_from_text_follows_config_bounds():
    Config.min_length = 2

    assert Dataset.from_text("2 1").values == [2, 1]


def test_dict_round_trip():
    ds = Dataset([4, 1, 3])

    assert Dataset.from_dict(ds.to_dict()).values == [4, 1, 3]


def test_is_sorted():
    assert Dataset([1, 2, 2, 3]).is_sorted()
    assert not Dataset([2, 1]).is_sorted()
    assert Dataset().is_sorted()
