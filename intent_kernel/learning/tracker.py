"""
Intent History Tracker — learns what each user tends to ask for.

Prediction is a recency-weighted average over a trailing window of the
user's history (weights 1, 2, ... n, most recent heaviest). Older history
is retained but no longer consulted.

This is the only stateful component of the kernel. All state lives in the
injected IntentHistoryStore, which serializes access per user.
"""

import logging
from typing import List, Optional, Sequence

from intent_kernel.history.store import IntentHistoryStore
from intent_kernel.models.priority import DIMENSIONS, PriorityVector

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 10


class InvalidUserIdError(ValueError):
    """Raised when a caller passes a missing or blank user id."""
    pass


def _check_user_id(user_id: str) -> None:
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidUserIdError(f"Invalid user id: {user_id!r}")


def _weighted_average(window: Sequence[PriorityVector], user_id: str) -> PriorityVector:
    """Linearly recency-weighted mean of each dimension."""
    total_weight = 0.0
    sums = dict.fromkeys(DIMENSIONS, 0.0)

    for i, vector in enumerate(window):
        weight = i + 1
        for name in DIMENSIONS:
            sums[name] += getattr(vector, name) * weight
        total_weight += weight

    return PriorityVector(
        user_id=user_id,
        **{name: sums[name] / total_weight for name in DIMENSIONS},
    )


class IntentHistoryTracker:
    """Records user priority vectors and forecasts the next one."""

    def __init__(
        self,
        store: Optional[IntentHistoryStore] = None,
        window_size: int = DEFAULT_WINDOW_SIZE,
    ):
        if window_size < 1:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self.store = store or IntentHistoryStore()
        self.window_size = window_size

    def learn(self, user_id: str, vector: PriorityVector) -> PriorityVector:
        """Record a vector for a user. Returns the stored, user-stamped copy."""
        _check_user_id(user_id)
        stamped = vector.with_user(user_id)
        size = self.store.append(user_id, stamped)
        logger.debug("Learned intent for %s (history size %d)", user_id, size)
        return stamped

    def predict(self, user_id: str) -> PriorityVector:
        """Forecast a user's next vector; the default vector if no history."""
        _check_user_id(user_id)
        with self.store.reading(user_id) as history:
            predicted = self._predict_from(history, user_id)
        logger.debug("Predicted %s", predicted)
        return predicted

    def consistency_score(self, user_id: str) -> float:
        """
        How predictable a user is, in [0, 1].

        One minus the mean squared deviation of each entry's cost and
        latency from the current prediction, floored at zero. Returns 0.0
        with fewer than two entries.
        """
        _check_user_id(user_id)
        with self.store.reading(user_id) as history:
            if len(history) < 2:
                return 0.0
            entries = list(history)
            predicted = self._predict_from(entries, user_id)

        total_variance = 0.0
        for vector in entries:
            total_variance += (vector.cost - predicted.cost) ** 2
            total_variance += (vector.latency - predicted.latency) ** 2
        total_variance /= len(entries)

        return max(0.0, 1.0 - total_variance)

    def history_size(self, user_id: str) -> int:
        _check_user_id(user_id)
        return self.store.size(user_id)

    def history(self, user_id: str) -> List[PriorityVector]:
        """Full history for a user, oldest first."""
        _check_user_id(user_id)
        return self.store.snapshot(user_id)

    def _predict_from(
        self, history: Sequence[PriorityVector], user_id: str
    ) -> PriorityVector:
        if not history:
            logger.debug("No history for %s, returning default", user_id)
            return PriorityVector.default(user_id=user_id)
        window = history[-self.window_size:]
        return _weighted_average(window, user_id)
