from __future__ import annotations

from pathlib import Path

import pytest

from backlightd.core.channels import KEYBOARD, SCREEN, ChannelState
from backlightd.core.devices import BrightnessFile
from backlightd.core.engine import BrightnessEngine
from backlightd.core.policies.light_tables import KEYBOARD_TABLE, SCREEN_TABLE
from backlightd.core.sensors import light_sensor as ls


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.mark.parametrize(
    "text,expected",
    [
        ("(5,0)\n", 5),
        ("(12,40)", 12),
        ("7", 7),
        ("", None),
        (None, None),
        ("(,)", None),
    ],
)
def test_parse_light_sample(text, expected) -> None:
    assert ls.parse_light_sample(text) == expected


def _engine(tmp_path: Path) -> BrightnessEngine:
    screen = ChannelState(
        name=SCREEN,
        device=BrightnessFile(_write(tmp_path / "bl" / "brightness", "100\n")),
        min_brightness=0,
        max_brightness=100,
    )
    kbd = ChannelState(
        name=KEYBOARD,
        device=BrightnessFile(_write(tmp_path / "kbd" / "brightness", "100\n")),
        min_brightness=0,
        max_brightness=100,
    )
    screen.seed_from_device()
    kbd.seed_from_device()
    return BrightnessEngine([screen, kbd])


def test_poll_sensor_updates_multipliers_and_reapplies(tmp_path) -> None:
    engine = _engine(tmp_path)
    sensor = _write(tmp_path / "applesmc" / "light", "(0,0)\n")
    adapter = ls.LightSensorAdapter(engine, sensor)

    assert adapter.poll_sensor() is True
    assert adapter.last_sample == 0
    assert engine.channel(SCREEN).sensor_multiplier == SCREEN_TABLE[0]
    assert engine.channel(KEYBOARD).sensor_multiplier == KEYBOARD_TABLE[0]
    # Dark room: half-bright screen, full keyboard.
    assert (tmp_path / "bl" / "brightness").read_text() == "50\n"
    assert (tmp_path / "kbd" / "brightness").read_text() == "100\n"


def test_poll_sensor_same_sample_does_not_reapply(tmp_path) -> None:
    engine = _engine(tmp_path)
    sensor = _write(tmp_path / "applesmc" / "light", "(3,0)\n")
    adapter = ls.LightSensorAdapter(engine, sensor)
    adapter.poll_sensor()

    calls = []
    engine.reapply = lambda: calls.append(1)  # type: ignore[method-assign]

    assert adapter.poll_sensor() is False
    assert calls == []


def test_missing_sensor_keeps_defaults(tmp_path) -> None:
    engine = _engine(tmp_path)
    adapter = ls.LightSensorAdapter(engine, None)

    assert adapter.poll_sensor() is False
    assert adapter.last_sample is None
    assert engine.channel(SCREEN).sensor_multiplier == 1.0
    assert engine.channel(KEYBOARD).sensor_multiplier == 0.5


def test_saturated_sensor_returns_to_defaults(tmp_path) -> None:
    engine = _engine(tmp_path)
    sensor = _write(tmp_path / "applesmc" / "light", "(4,0)\n")
    adapter = ls.LightSensorAdapter(engine, sensor)
    adapter.poll_sensor()

    _write(sensor, "(250,0)\n")
    assert adapter.poll_sensor() is True
    assert engine.channel(SCREEN).sensor_multiplier == 1.0
    assert engine.channel(KEYBOARD).sensor_multiplier == 0.5
