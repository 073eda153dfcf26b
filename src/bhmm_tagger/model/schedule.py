"""Simulated-annealing temperature schedule."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class AnnealingSchedule:
    """Geometric cooling from ``maximum`` towards ``minimum``.

    After sweep ``k`` (0-based) the temperature is multiplied by ``rate`` when
    ``k`` is a multiple of ``decrease``, provided the result does not fall
    below ``minimum``. The temperature never rises.
    """

    maximum: float
    minimum: float
    rate: float = 1.0
    decrease: int = 1
    temperature: float = field(init=False)

    def __post_init__(self) -> None:
        if not 0 < self.minimum <= self.maximum:
            raise ValueError(f"Expected 0 < min <= max, got min={self.minimum}, max={self.maximum}")
        if self.rate <= 0:
            raise ValueError(f"Cooling rate must be positive, got {self.rate}")
        if self.decrease < 1:
            raise ValueError(f"Decrease interval must be at least 1, got {self.decrease}")
        self.temperature = self.maximum

    def step(self, sweep: int) -> float:
        """Apply the update that follows sweep *sweep* and return the temperature."""

        if sweep % self.decrease == 0:
            cooled = self.temperature * self.rate
            if self.minimum <= cooled <= self.temperature:
                self.temperature = cooled
        return self.temperature


__all__ = ["AnnealingSchedule"]
