from __future__ import annotations

from unittest.mock import patch

import pytest

from backlightd.daemon import dimming
from backlightd.daemon.dimming import DimmingStateMachine, DimState, ramp_proportions
from backlightd.daemon.notifications import PowerNotifications


class _Engine:
    def __init__(self):
        self.calls: list[tuple[float, bool]] = []
        self.is_dimmed = False

    def set_proportion(self, proportion: float) -> None:
        self.calls.append((proportion, self.is_dimmed))


class _Idle:
    """Idle source driven by a function of the call number."""

    def __init__(self, fn):
        self.fn = fn
        self.n = 0

    def idle_ms(self) -> int:
        value = self.fn(self.n)
        self.n += 1
        return value


class _Counter:
    def __init__(self):
        self.count = 0

    def poll_sensor(self) -> bool:
        self.count += 1
        return False

    def refresh_power_state(self) -> bool:
        self.count += 1
        return False

    def trigger_lock(self) -> bool:
        self.count += 1
        return True


def _machine(idle_fn, *, threshold_s=5.0, lock_delay_s=300.0, notifications=None):
    engine = _Engine()
    sensor, power, lock = _Counter(), _Counter(), _Counter()
    m = DimmingStateMachine(
        engine,
        _Idle(idle_fn),
        sensor=sensor,
        power=power,
        notifications=notifications or PowerNotifications(),
        lock=lock,
        idle_threshold_s=threshold_s,
        lock_delay_s=lock_delay_s,
        ramp_step_delay_s=0.01,
        dimmed_poll_interval_s=0.5,
        active_poll_interval_s=2.0,
    )
    return m, engine, sensor, power, lock


@pytest.fixture(autouse=True)
def _no_sleep():
    with patch("backlightd.daemon.dimming.time.sleep") as sleep:
        yield sleep


def test_ramp_has_1001_exact_non_increasing_values() -> None:
    ramp = ramp_proportions()
    assert len(ramp) == 1001
    assert ramp[0] == 1.0
    assert ramp[-1] == 0.0
    assert ramp[500] == 0.5
    assert all(a >= b for a, b in zip(ramp, ramp[1:]))


def test_wait_for_idle_sleeps_in_bounded_chunks(_no_sleep) -> None:
    samples = [1000, 3000, 6000]
    m, _engine, sensor, _power, _lock = _machine(lambda n: samples[n])

    assert m.wait_for_idle() == 6000
    assert [c.args[0] for c in _no_sleep.call_args_list] == [2.0, 2.0]
    assert sensor.count == 2
    assert m.state is DimState.ACTIVE


def test_wait_for_idle_keeps_waiting_when_user_returns(_no_sleep) -> None:
    samples = [4500, 200, 5200]
    m, *_ = _machine(lambda n: samples[n])

    assert m.wait_for_idle() == 5200
    assert [c.args[0] for c in _no_sleep.call_args_list] == [0.5, 2.0]


def test_full_ramp_ends_dimmed_at_floor() -> None:
    m, engine, *_ = _machine(lambda n: 5000 + 10 * n)

    assert m.dim(5000) is True

    proportions = [p for p, _ in engine.calls]
    assert proportions[:1001] == ramp_proportions()
    assert all(dimmed is False for _, dimmed in engine.calls[:1001])
    # Final write happens with the dimmed flag already set.
    assert engine.calls[-1] == (0.0, True)
    assert len(engine.calls) == 1002
    assert engine.is_dimmed is True
    assert m.state is DimState.DIMMED


@pytest.mark.parametrize("k", [0, 1, 400, 1000])
def test_ramp_aborts_at_step_k_and_restores(k) -> None:
    # Call n == step n; idle drops just before step k.
    m, engine, *_ = _machine(lambda n: 0 if n >= k else 5000 + 10 * n)

    assert m.dim(5000) is False

    assert [p for p, _ in engine.calls[:-1]] == ramp_proportions()[:k]
    assert engine.calls[-1] == (1.0, False)
    assert engine.is_dimmed is False
    assert m.state is DimState.ACTIVE


def test_notifications_are_drained_during_ramp() -> None:
    notes = PowerNotifications()
    m, _engine, _sensor, power, _lock = _machine(lambda n: 5000 + n, notifications=notes)

    notes.request()
    m.dim(5000)

    assert power.count == 1
    assert notes.pending is False


def test_lock_fires_once_per_dimmed_episode() -> None:
    samples = [100_000, 100_500, 101_000, 101_500, 0]
    m, engine, sensor, _power, lock = _machine(lambda n: samples[n % len(samples)], lock_delay_s=60.0)
    engine.is_dimmed = True

    m.wait_for_wake()

    assert lock.count == 1
    assert sensor.count == 3
    assert engine.is_dimmed is False
    assert engine.calls[-1] == (1.0, False)
    assert m.state is DimState.ACTIVE

    # Re-armed for the next episode.
    m.wait_for_wake()
    assert lock.count == 2


def test_lock_not_fired_before_delay() -> None:
    samples = [10_000, 10_500, 11_000, 100]
    m, _engine, _sensor, _power, lock = _machine(lambda n: samples[n], lock_delay_s=60.0)

    m.wait_for_wake()
    assert lock.count == 0


def test_wake_requires_strict_decrease() -> None:
    # A repeated sample (no new input, coarse clock) is not a wake.
    samples = [20_000, 20_000, 20_000, 19_999]
    m, *_ = _machine(lambda n: samples[n])

    m.wait_for_wake()
    assert m.idle_source.n == 4


def test_end_to_end_wake_during_ramp_at_step_400() -> None:
    # call 0: threshold check; call 1 + i: before ramp step i.
    def idle(n: int) -> int:
        if n == 0:
            return 5000
        step = n - 1
        return 0 if step >= 400 else 5000 + 10 * step

    m, engine, *_ = _machine(idle, threshold_s=5.0)

    assert m.run_once() is False
    assert engine.calls[-1] == (1.0, False)
    assert engine.is_dimmed is False
    assert len(engine.calls) == 401
    assert m.state is DimState.ACTIVE


def test_run_once_full_cycle_reaches_dimmed_and_wakes() -> None:
    def idle(n: int) -> int:
        # Threshold check, 1001 ramp samples, then one Dimmed baseline and a wake.
        return 0 if n >= 1004 else 5000 + n

    m, engine, *_ = _machine(idle)

    assert m.run_once() is True
    assert (0.0, True) in engine.calls
    assert engine.calls[-1] == (1.0, False)
    assert m.state is DimState.ACTIVE
