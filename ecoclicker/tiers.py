from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_HARM = 1000.0
DEFAULT_THRESHOLDS: tuple[float, ...] = (25.0, 50.0, 75.0)
DEFAULT_LABELS: tuple[str, ...] = ("balanced", "strained", "critical", "catastrophic")


@dataclass(frozen=True)
class HarmTier:
    """Ordinal harm band, 0 is healthiest."""

    index: int
    label: str
    percentage: float


def classify(
    harm: float,
    max_harm: float = DEFAULT_MAX_HARM,
    thresholds: tuple[float, ...] = DEFAULT_THRESHOLDS,
    labels: tuple[str, ...] = DEFAULT_LABELS,
) -> HarmTier:
    """Map a harm level onto its tier.

    *thresholds* are ascending inclusive upper bounds, in percent of
    *max_harm*. Anything above the last threshold falls in the final tier,
    so ``len(labels)`` must be ``len(thresholds) + 1``.
    """
    if len(labels) != len(thresholds) + 1:
        raise ValueError(
            f"Expected {len(thresholds) + 1} tier labels, got {len(labels)}"
        )
    percentage = harm / max_harm * 100.0
    for index, upper in enumerate(thresholds):
        if percentage <= upper:
            return HarmTier(index, labels[index], percentage)
    last = len(thresholds)
    return HarmTier(last, labels[last], percentage)
