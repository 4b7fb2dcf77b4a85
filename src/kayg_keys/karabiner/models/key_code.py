from __future__ import annotations

from typing import TypeAlias

KeyCode: TypeAlias = str

# Keys Karabiner expects under `consumer_key_code` rather than `key_code`.
# https://karabiner-elements.pqrs.org/docs/json/complex-modifications-manipulator-definition/to/
CONSUMER_KEY_CODES = frozenset(
    {
        "play_or_pause",
        "scan_next_track",
        "scan_previous_track",
        "fast_forward",
        "rewind",
        "mute",
        "volume_increment",
        "volume_decrement",
        "display_brightness_increment",
        "display_brightness_decrement",
        "eject",
    }
)
