"""Tests for the debounced autosave timer."""

import threading

from pagecraft.editor.autosave import AutosaveStatus, AutosaveTimer


class TestAutosaveTimer:
    """Tests for AutosaveTimer."""

    def test_initial_status(self, fake_timers):
        """Test a fresh timer is idle."""
        timer = AutosaveTimer(delay=0.6, timer_factory=fake_timers)

        assert timer.status == AutosaveStatus.IDLE
        assert timer.pending is False

    def test_touch_then_expire(self, fake_timers):
        """Test a touch marks saving and expiry marks saved."""
        saved = []
        timer = AutosaveTimer(delay=0.6, timer_factory=fake_timers, on_saved=lambda: saved.append(True))

        timer.touch()

        assert timer.status == AutosaveStatus.SAVING
        assert fake_timers.timers[0].delay == 0.6
        assert fake_timers.timers[0].started is True

        fake_timers.timers[0].fire()

        assert timer.status == AutosaveStatus.SAVED
        assert timer.pending is False
        assert saved == [True]

    def test_stale_expiry_ignored(self, fake_timers):
        """Test a superseded timer cannot flip the status."""
        timer = AutosaveTimer(delay=0.6, timer_factory=fake_timers)

        timer.touch()
        timer.touch()
        fake_timers.timers[0].fire()

        assert fake_timers.timers[0].cancelled is True
        assert timer.status == AutosaveStatus.SAVING

    def test_close(self, fake_timers):
        """Test close cancels and ignores later changes."""
        with AutosaveTimer(delay=0.6, timer_factory=fake_timers) as timer:
            timer.touch()

        assert fake_timers.timers[0].cancelled is True

        fake_timers.timers[0].fire()
        timer.touch()

        assert timer.status == AutosaveStatus.SAVING
        assert len(fake_timers.timers) == 1

    def test_delay_from_environment(self, monkeypatch, fake_timers):
        """Test the default delay comes from PAGECRAFT_AUTOSAVE_DELAY."""
        monkeypatch.setenv("PAGECRAFT_AUTOSAVE_DELAY", "1.5")

        assert AutosaveTimer(timer_factory=fake_timers).delay == 1.5

    def test_real_timer(self):
        """Test the default threading timer flips the status."""
        done = threading.Event()
        timer = AutosaveTimer(delay=0.01, on_saved=done.set)

        timer.touch()

        assert done.wait(timeout=2)
        assert timer.status == AutosaveStatus.SAVED
