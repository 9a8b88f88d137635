"""ConditionState enum for vehicle damage tiers."""

from enum import Enum


class ConditionState(Enum):
    """Vehicle condition tiers. Lower value = worse condition."""

    DESTROYED = 1
    CRITICAL = 2
    HEAVILY_DAMAGED = 3
    DAMAGED = 4
    PRISTINE = 5

    @property
    def label(self) -> str:
        """Display label, e.g. "Heavily Damaged"."""
        return self.name.replace("_", " ").title()

    @classmethod
    def from_label(cls, label: str) -> "ConditionState":
        return cls[label.strip().upper().replace(" ", "_")]

    @classmethod
    def for_ratio(cls, ratio: float) -> "ConditionState":
        """
        Tier for a current/max durability ratio.

        r >= 1.0 Pristine, r >= 0.5 Damaged, r >= 0.25 Heavily Damaged,
        r > 0 Critical, otherwise Destroyed.
        """
        if ratio >= 1.0:
            return cls.PRISTINE
        if ratio >= 0.5:
            return cls.DAMAGED
        if ratio >= 0.25:
            return cls.HEAVILY_DAMAGED
        if ratio > 0:
            return cls.CRITICAL
        return cls.DESTROYED
