"""Tests for tiers module."""
import pytest

from ecoclicker.tiers import classify


@pytest.mark.parametrize(
    "harm, index, label",
    [
        (0, 0, "balanced"),
        (250, 0, "balanced"),
        (250.1, 1, "strained"),
        (500, 1, "strained"),
        (750, 2, "critical"),
        (751, 3, "catastrophic"),
        (50_000, 3, "catastrophic"),
    ],
)
def test_default_bands(harm, index, label):
    tier = classify(harm)
    assert tier.index == index
    assert tier.label == label


def test_percentage():
    assert classify(100, max_harm=400).percentage == pytest.approx(25.0)


def test_custom_thresholds():
    tier = classify(60, max_harm=100, thresholds=(50.0,), labels=("ok", "bad"))
    assert (tier.index, tier.label) == (1, "bad")


def test_label_count_mismatch():
    with pytest.raises(ValueError):
        classify(10, thresholds=(50.0,), labels=("a", "b", "c"))
