"""Tests for the per-method cost history."""

from datetime import datetime

from costlens.costs.history import CostHistoryTracker


class TestCostHistoryTracker:
    """Tests for history growth and ordering."""

    def test_unchanged_cost_not_appended(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        tracker.update([make_entry("work", "n", entry_id="X")])
        tracker.update([make_entry("work", "n", entry_id="X")])
        assert len(tracker.history("X")) == 1

        tracker.update([make_entry("work", "n*n", entry_id="X")])
        history = tracker.history("X")
        assert len(history) == 2
        assert history[0].exec_cost.polynomial == "n*n"
        assert history[1].exec_cost.polynomial == "n"

    def test_constant_runs_grow_history_once(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        for _ in range(5):
            tracker.update([make_entry("work", "3 + n", entry_id="X")])
        assert len(tracker.history("X")) == 1

    def test_returns_appended_entries(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        tracker.update([make_entry("a", "n"), make_entry("b", "n")])
        changed = make_entry("b", "n*n")
        appended = tracker.update([make_entry("a", "n"), changed])
        assert appended == [changed]

    def test_entries_stamped_with_clock(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        entry = make_entry("work")
        tracker.update([entry])
        assert entry.timestamp == datetime(2024, 1, 1, 12, 0, 0)

    def test_head_is_most_recent(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        for polynomial in ("1", "n", "n*n", "n"):
            tracker.update([make_entry("work", polynomial, entry_id="X")])
        history = tracker.history("X")
        assert len(history) == 4
        assert all(history[0].timestamp >= e.timestamp for e in history)
        assert [e.timestamp for e in history] == sorted(
            (e.timestamp for e in history), reverse=True
        )

    def test_clock_going_backwards(self, make_entry) -> None:
        times = iter([datetime(2024, 1, 2), datetime(2024, 1, 1)])
        tracker = CostHistoryTracker(clock=lambda: next(times))
        tracker.update([make_entry("work", "n", entry_id="X")])
        tracker.update([make_entry("work", "n*n", entry_id="X")])
        history = tracker.history("X")
        assert history[0].timestamp >= history[1].timestamp

    def test_unknown_id(self) -> None:
        tracker = CostHistoryTracker()
        assert tracker.history("missing") == []
        assert tracker.head("missing") is None
        assert not tracker.attach_change_causes("missing", ["x()"])
        assert "missing" not in tracker

    def test_attach_change_causes_to_head(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        tracker.update([make_entry("work", "n", entry_id="X")])
        tracker.update([make_entry("work", "n*n", entry_id="X")])

        assert tracker.attach_change_causes("X", ["for (;;)"])
        history = tracker.history("X")
        assert history[0].change_cause_methods == ["for (;;)"]
        assert history[1].change_cause_methods is None

    def test_history_returns_copy(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        tracker.update([make_entry("work", entry_id="X")])
        tracker.history("X").clear()
        assert len(tracker.history("X")) == 1

    def test_clear(self, make_entry, clock) -> None:
        tracker = CostHistoryTracker(clock=clock)
        tracker.update([make_entry("work")])
        tracker.clear()
        assert len(tracker) == 0
        assert tracker.ids() == []
