"""Synthetic measurement values."""

from __future__ import annotations

import math
import random

DEFAULT_STEP = 100.0
PERTURBATION_SPAN = 100


class ValueGenerator:
    """Produces readings as a running baseline plus a bounded random perturbation.

    The baseline is shared by every channel of a tick and advances by ``step``
    once per tick; each reading adds an independent perturbation in ``[0, 100)``
    with one decimal place.
    """

    def __init__(self, *, step: float = DEFAULT_STEP, seed: int | None = None) -> None:
        self.step = step
        self.baseline = 0.0
        self._rng = random.Random(seed)

    def perturbation(self) -> float:
        return math.floor(self._rng.random() * PERTURBATION_SPAN * 10) / 10

    def reading(self, baseline: float, channel: int) -> float:
        """Return the reading for ``channel`` on top of ``baseline``.

        The perturbation is drawn independently per call and does not depend on
        ``channel``; every channel of a tick shares the same distribution.
        """
        return round(baseline + self.perturbation(), 1)

    def advance(self) -> float:
        """Move the baseline to the next tick and return the new value."""
        self.baseline += self.step
        return self.baseline
