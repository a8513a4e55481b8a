"""Tests for the Intent History Tracker and its store."""

import threading

import pytest

from intent_kernel.history.store import IntentHistoryStore
from intent_kernel.learning.tracker import IntentHistoryTracker, InvalidUserIdError
from intent_kernel.models.priority import PriorityVector


class TestIntentHistoryStore:
    def setup_method(self):
        self.store = IntentHistoryStore()

    def test_starts_empty(self):
        assert self.store.users() == []
        assert self.store.size("alice") == 0
        assert self.store.snapshot("alice") == []

    def test_append_preserves_order(self):
        first = PriorityVector(cost=0.1)
        second = PriorityVector(cost=0.2)
        assert self.store.append("alice", first) == 1
        assert self.store.append("alice", second) == 2
        assert [v.cost for v in self.store.snapshot("alice")] == [0.1, 0.2]

    def test_snapshot_is_a_copy(self):
        self.store.append("alice", PriorityVector())
        snapshot = self.store.snapshot("alice")
        snapshot.clear()
        assert self.store.size("alice") == 1

    def test_users_listed(self):
        self.store.append("alice", PriorityVector())
        self.store.append("bob", PriorityVector())
        self.store.size("carol")  # Read only, no history
        assert sorted(self.store.users()) == ["alice", "bob"]

    def test_concurrent_appends(self):
        """Concurrent writers for the same and different users lose nothing."""
        def writer(user_id):
            for _ in range(200):
                self.store.append(user_id, PriorityVector())

        threads = [
            threading.Thread(target=writer, args=(f"user_{i % 3}",))
            for i in range(9)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert self.store.size("user_0") == 600
        assert self.store.size("user_1") == 600
        assert self.store.size("user_2") == 600

    def test_distinct_users_do_not_block(self):
        """Holding one user's lock must not block another user."""
        done = threading.Event()

        self.store.append("alice", PriorityVector())
        with self.store.reading("alice"):
            t = threading.Thread(
                target=lambda: (self.store.append("bob", PriorityVector()), done.set())
            )
            t.start()
            assert done.wait(timeout=2.0)
        t.join()
        assert self.store.size("bob") == 1

    def test_reads_do_not_register_users(self):
        assert self.store.size("ghost") == 0
        assert self.store.snapshot("ghost") == []
        with self.store.reading("ghost") as history:
            assert len(history) == 0
        assert self.store.users() == []
        assert self.store.registered_count() == 0


class TestIntentHistoryTracker:
    def setup_method(self):
        self.tracker = IntentHistoryTracker()

    def test_predict_without_history_is_default(self):
        predicted = self.tracker.predict("nobody")
        assert predicted.as_tuple() == PriorityVector.default().as_tuple()
        assert predicted.user_id == "nobody"

    def test_predict_after_single_learn(self):
        learned = PriorityVector(cost=0.9, latency=0.2, security=0.4, carbon=0.1)
        self.tracker.learn("alice", learned)
        assert self.tracker.predict("alice").as_tuple() == learned.as_tuple()

    def test_learn_stamps_user_id(self):
        original = PriorityVector(cost=0.9)
        stored = self.tracker.learn("alice", original)
        assert stored.user_id == "alice"
        assert original.user_id == "default"
        assert self.tracker.history("alice")[0].user_id == "alice"

    def test_recency_weighting(self):
        """Weights 1 and 2: (0.0*1 + 0.9*2) / 3 = 0.6."""
        self.tracker.learn("alice", PriorityVector(cost=0.0, latency=0.3))
        self.tracker.learn("alice", PriorityVector(cost=0.9, latency=0.6))
        predicted = self.tracker.predict("alice")
        assert predicted.cost == pytest.approx(0.6)
        assert predicted.latency == pytest.approx(0.5)

    def test_window_bounds_influence(self):
        tracker = IntentHistoryTracker(window_size=3)
        for _ in range(5):
            tracker.learn("alice", PriorityVector(cost=1.0))
        for _ in range(3):
            tracker.learn("alice", PriorityVector(cost=0.0))

        assert tracker.history_size("alice") == 8
        assert tracker.predict("alice").cost == pytest.approx(0.0)

    def test_default_window_is_ten(self):
        assert self.tracker.window_size == 10
        for _ in range(20):
            self.tracker.learn("alice", PriorityVector(security=0.0))
        for _ in range(10):
            self.tracker.learn("alice", PriorityVector(security=1.0))
        assert self.tracker.predict("alice").security == pytest.approx(1.0)

    def test_users_are_independent(self):
        self.tracker.learn("alice", PriorityVector(cost=0.9))
        self.tracker.learn("bob", PriorityVector(cost=0.1))
        assert self.tracker.predict("alice").cost == pytest.approx(0.9)
        assert self.tracker.predict("bob").cost == pytest.approx(0.1)

    def test_consistency_needs_two_entries(self):
        assert self.tracker.consistency_score("alice") == 0.0
        self.tracker.learn("alice", PriorityVector())
        assert self.tracker.consistency_score("alice") == 0.0

    def test_identical_history_is_fully_consistent(self):
        for _ in range(4):
            self.tracker.learn("alice", PriorityVector(cost=0.7, latency=0.3))
        assert self.tracker.consistency_score("alice") == pytest.approx(1.0)

    def test_erratic_history_is_less_consistent(self):
        self.tracker.learn("steady", PriorityVector(cost=0.5, latency=0.5))
        self.tracker.learn("steady", PriorityVector(cost=0.5, latency=0.5))
        self.tracker.learn("erratic", PriorityVector(cost=0.0, latency=1.0))
        self.tracker.learn("erratic", PriorityVector(cost=1.0, latency=0.0))

        steady = self.tracker.consistency_score("steady")
        erratic = self.tracker.consistency_score("erratic")
        assert erratic < steady
        assert 0.0 <= erratic <= 1.0

    def test_consistency_value(self):
        """Prediction (1/3, 2/3); deviations (1/3)^2 * 2 and (2/3)^2 * 2 over 2 entries."""
        self.tracker.learn("alice", PriorityVector(cost=1.0, latency=0.0))
        self.tracker.learn("alice", PriorityVector(cost=0.0, latency=1.0))
        expected = 1.0 - ((1 / 3) ** 2 * 2 + (2 / 3) ** 2 * 2) / 2
        assert self.tracker.consistency_score("alice") == pytest.approx(expected)

    @pytest.mark.parametrize("bad_id", [None, "", "   ", 42])
    def test_invalid_user_id_fails_fast(self, bad_id):
        with pytest.raises(InvalidUserIdError):
            self.tracker.learn(bad_id, PriorityVector())
        with pytest.raises(InvalidUserIdError):
            self.tracker.predict(bad_id)
        with pytest.raises(ValueError):
            self.tracker.consistency_score(bad_id)

    def test_injected_store_is_used(self):
        store = IntentHistoryStore()
        tracker = IntentHistoryTracker(store=store)
        tracker.learn("alice", PriorityVector())
        assert store.size("alice") == 1

    def test_window_must_be_positive(self):
        with pytest.raises(ValueError):
            IntentHistoryTracker(window_size=0)

    def test_concurrent_learn_and_predict(self):
        errors = []

        def worker(user_id):
            try:
                for i in range(100):
                    self.tracker.learn(user_id, PriorityVector(cost=(i % 10) / 10))
                    predicted = self.tracker.predict(user_id)
                    assert 0.0 <= predicted.cost <= 1.0
            except AssertionError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(f"u{i % 2}",)) for i in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert self.tracker.history_size("u0") == 300
        assert self.tracker.history_size("u1") == 300

    def test_reads_for_unknown_users_leave_no_state(self):
        for i in range(1000):
            self.tracker.predict(f"ghost_{i}")
            self.tracker.consistency_score(f"ghost_{i}")
            assert self.tracker.history_size(f"ghost_{i}") == 0
            assert self.tracker.history(f"ghost_{i}") == []
        assert self.tracker.store.users() == []
        assert self.tracker.store.registered_count() == 0

        self.tracker.learn("alice", PriorityVector())
        assert self.tracker.store.users() == ["alice"]
