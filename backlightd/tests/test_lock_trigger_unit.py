from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

from backlightd.core.lock_trigger import LockTrigger


def test_no_command_does_nothing() -> None:
    with patch("backlightd.core.lock_trigger.subprocess.Popen") as popen:
        assert LockTrigger(None).trigger_lock() is False
    popen.assert_not_called()


def test_spawns_command_without_arguments_detached() -> None:
    with patch("backlightd.core.lock_trigger.subprocess.Popen") as popen:
        popen.return_value = MagicMock(pid=4242)
        assert LockTrigger("/usr/bin/xlock").trigger_lock() is True

    args, kwargs = popen.call_args
    assert args == (["/usr/bin/xlock"],)
    assert kwargs["start_new_session"] is True
    assert kwargs["stdin"] is subprocess.DEVNULL
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["stderr"] is subprocess.DEVNULL


def test_spawn_failure_is_logged_and_reported(caplog) -> None:
    with patch("backlightd.core.lock_trigger.subprocess.Popen", side_effect=FileNotFoundError("nope")):
        assert LockTrigger("/missing/locker").trigger_lock() is False
    assert "Failed to start lock command" in caplog.text


def test_previous_child_is_reaped_before_respawn() -> None:
    trigger = LockTrigger("/usr/bin/xlock")
    old = MagicMock(pid=1)
    old.poll.return_value = 0
    trigger._process = old

    with patch("backlightd.core.lock_trigger.subprocess.Popen") as popen:
        popen.return_value = MagicMock(pid=2)
        assert trigger.trigger_lock() is True

    old.poll.assert_called_once()
    assert trigger._process.pid == 2
