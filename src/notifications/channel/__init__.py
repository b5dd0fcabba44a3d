"""Channel adapter registry.

E-mail is the only channel the marketplace sends on. The recording fake is
the default adapter; ``set_channel`` installs a real one.
"""

EMAIL = "Email"

_channel_instances: dict[str, object] = {}


def get_channel(channel_type: str = EMAIL):
    """Return the configured adapter for ``channel_type`` (singleton per type)."""
    if channel_type not in _channel_instances:
        if channel_type == EMAIL:
            from notifications.channel.fake_email import FakeEmailAdapter

            _channel_instances[channel_type] = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def set_channel(channel_type: str, adapter) -> None:
    _channel_instances[channel_type] = adapter


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
