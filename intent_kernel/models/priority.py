"""Priority Vector — the common currency of every decision in the kernel."""

import math
from datetime import datetime, timezone
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DIMENSIONS: Tuple[str, ...] = ("cost", "latency", "security", "carbon")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def clamp_unit(value: float) -> float:
    """Clamp a value into [0.0, 1.0]. NaN maps to 0.0."""
    if math.isnan(value) or value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


class PriorityVector(BaseModel):
    """
    How strongly a user wants each dimension optimized.

    0.0 means "don't care", 1.0 means "very important". Out-of-range
    inputs are clamped, never rejected.
    """

    model_config = ConfigDict(frozen=True)

    cost: float = 0.5
    latency: float = 0.5
    security: float = 0.5
    carbon: float = 0.3
    user_id: str = "default"                # Stamped once by the learner
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("cost", "latency", "security", "carbon", mode="before")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_unit(float(value))

    @classmethod
    def default(cls, user_id: str = "default") -> "PriorityVector":
        """Balanced default priorities."""
        return cls(cost=0.5, latency=0.5, security=0.5, carbon=0.3, user_id=user_id)

    def adjusted(self, **changes: float) -> "PriorityVector":
        """Return a new vector with some priorities changed (re-clamped)."""
        data = self.model_dump()
        data.update(changes)
        return PriorityVector.model_validate(data)

    def with_user(self, user_id: str) -> "PriorityVector":
        """Return a copy stamped with a user id."""
        return self.model_copy(update={"user_id": user_id})

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.cost, self.latency, self.security, self.carbon)

    def dominant_dimension(self) -> str:
        """Name of the highest priority (earliest dimension wins ties)."""
        best = DIMENSIONS[0]
        for name in DIMENSIONS[1:]:
            if getattr(self, name) > getattr(self, best):
                best = name
        return best

    def __str__(self) -> str:
        return (
            f"PriorityVector[cost={self.cost:.2f}, latency={self.latency:.2f}, "
            f"security={self.security:.2f}, carbon={self.carbon:.2f}, "
            f"user={self.user_id}]"
        )
