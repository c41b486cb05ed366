"""Tests for WatchdogConfig validation."""

import dataclasses

import pytest

from procdog import WatchdogConfig


def test_defaults():
    config = WatchdogConfig(command=["sleep", "1"])
    assert config.command == ("sleep", "1")
    assert config.timeout == 5
    assert config.restart is False
    assert config.poll_interval == 1.0
    assert config.interrupt_grace == 0.5
    assert config.kill_after == 5.0


def test_config_is_frozen():
    config = WatchdogConfig(command=["true"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.timeout = 10  # type: ignore[misc]


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"command": []}, "command cannot be empty"),
        ({"command": ["sleep", 1]}, "must be strings"),
        ({"timeout": 0}, "timeout must be positive"),
        ({"timeout": -3}, "timeout must be positive"),
        ({"poll_interval": 0}, "poll_interval must be positive"),
        ({"interrupt_grace": -0.1}, "interrupt_grace cannot be negative"),
        ({"kill_after": -1}, "kill_after cannot be negative"),
    ],
)
def test_invalid_settings_are_rejected(overrides, message):
    settings = {"command": ["true"], **overrides}
    with pytest.raises(ValueError, match=message):
        WatchdogConfig(**settings)
