"""
The `kayg-primary` Karabiner profile.

The keyboard runs Colemak-DH (matrix) on macOS, but Karabiner sees physical
QWERTY key codes before macOS applies the layout. Every mapping below is
therefore written against the *physical* QWERTY position: `j` is the key
labelled J on an Apple keyboard, whatever letter Colemak-DH puts there.

Layer triggers are held together with hyper (caps lock, see
`essential_modifiers`).
"""

from __future__ import annotations

from typing import Dict, List

from kayg_keys.layers import (
    LayerIR,
    ProfileIR,
    app,
    hyper_layer,
    remap,
    rule,
    shell,
    to_hyper,
    to_meh,
    with_optional_any,
)

PROFILE_NAME = "kayg-primary"

PARAMETERS: Dict[str, int | bool] = {
    "duo_layer.threshold_milliseconds": 100,
}


def _btt(trigger_name: str) -> str:
    return f"open -g 'btt://trigger_named/?trigger_name={trigger_name}'"


def _raycast(path: str) -> str:
    return f"open -g 'raycast://extensions/{path}'"


def navigation_layer() -> LayerIR:
    return hyper_layer(
        "spacebar",
        description="Navigation Layer",
        notification=True,
        manipulators=[
            # line start / page down / page up / line end
            remap("y", "left_arrow+left_command"),
            remap("u", "down_arrow+fn"),
            remap("i", "up_arrow+fn"),
            remap("o", "right_arrow+left_command"),
            # arrows, vim style
            remap("h", "left_arrow"),
            remap("j", "down_arrow"),
            remap("k", "up_arrow"),
            remap("l", "right_arrow"),
            remap(";", "delete_or_backspace"),
            # word left / document start / document end / word right
            remap("n", "left_arrow+left_option"),
            remap("m", "up_arrow+left_command"),
            remap(",", "down_arrow+left_command"),
            remap(".", "right_arrow+left_option"),
        ],
    )


def select_layer() -> LayerIR:
    """Navigation layer with shift held: the same motions extend the selection."""

    return hyper_layer(
        "v",
        description="Select Layer",
        notification=True,
        manipulators=[
            remap("y", "left_arrow+left_command"),
            remap("u", "down_arrow+fn"),
            remap("i", "up_arrow+fn"),
            remap("o", "right_arrow+left_command"),
            remap("h", "left_arrow+left_shift"),
            remap("j", "down_arrow+left_shift"),
            remap("k", "up_arrow+left_shift"),
            remap("l", "right_arrow+left_shift"),
            remap(";", "delete_or_backspace"),
            remap("n", "left_arrow+left_option+left_shift"),
            remap("m", "up_arrow+left_option+left_shift"),
            remap(",", "down_arrow+left_option+left_shift"),
            remap(".", "right_arrow+left_option+left_shift"),
        ],
    )


def number_layer() -> LayerIR:
    # 7 8 9 -    on u i o p
    # 4 5 6 =    on j k l ;
    # 0 1 2 3    on n m , .
    return hyper_layer(
        "z",
        description="Number Pad Layer",
        notification=True,
        manipulators=[
            remap("u", "7"),
            remap("i", "8"),
            remap("o", "9"),
            remap("p", "-"),
            remap("j", "4"),
            remap("k", "5"),
            remap("l", "6"),
            remap(";", "="),
            remap("n", "0"),
            remap("m", "1"),
            remap(",", "2"),
            remap(".", "3"),
        ],
    )


def symbol_layer() -> LayerIR:
    """The number pad, shifted: & * ( _ / $ % ^ + / ) ! @ #."""

    return hyper_layer(
        "x",
        description="Symbol Layer",
        notification=True,
        manipulators=[
            remap(key, f"{target}+left_shift")
            for key, target in [
                ("u", "7"),
                ("i", "8"),
                ("o", "9"),
                ("p", "-"),
                ("j", "4"),
                ("k", "5"),
                ("l", "6"),
                (";", "="),
                ("n", "0"),
                ("m", "1"),
                (",", "2"),
                (".", "3"),
            ]
        ],
    )


def function_key_layer() -> LayerIR:
    # F9 F10 F11 F12   on u i o p
    # F5 F6  F7  F8    on j k l ;
    # F1 F2  F3  F4    on m , . /
    return hyper_layer(
        "c",
        description="Function Key Layer",
        notification=True,
        manipulators=[
            remap("u", "f9"),
            remap("i", "f10"),
            remap("o", "f11"),
            remap("p", "f12"),
            remap("j", "f5"),
            remap("k", "f6"),
            remap("l", "f7"),
            remap(";", "f8"),
            remap("m", "f1"),
            remap(",", "f2"),
            remap(".", "f3"),
            remap("/", "f4"),
        ],
    )


def application_layer() -> LayerIR:
    return hyper_layer(
        "a",
        description="Application layer",
        notification=True,
        manipulators=[
            remap("tab", shell(_raycast("raycast/navigation/switch-windows"))),
            # home row: most used apps
            remap("m", app("1Password")),
            remap("h", app("Safari")),
            remap("j", app("iTerm")),
            remap("k", app("Cursor")),
            remap("l", app("Notes")),
            remap(";", shell(_btt("Open Apple Music → Search"))),
        ],
    )


def raycast_layer() -> LayerIR:
    return hyper_layer(
        "q",
        description="Raycast Layer",
        notification=True,
        manipulators=[
            remap(";", shell("open raycast://extensions/benvp/audio-device/set-output-device")),
            remap("l", shell("open raycast://extensions/benvp/audio-device/set-input-device")),
            remap(
                "r",
                shell("open raycast://extensions/raycast/typing-practice/start-typing-practice"),
            ),
        ],
    )


def window_management_layer() -> LayerIR:
    return hyper_layer(
        "w",
        description="Window Management Layer",
        notification=True,
        manipulators=[
            # top 30%
            remap("y", shell(_btt("Move/Resize: Top Major Left"))),
            remap("p", shell(_btt("Move/Resize: Top Major Right"))),
            # bottom 70%
            remap("h", shell(_btt("Move/Resize: Major Left"))),
            remap("j", shell(_btt("Move/Resize: Minor Left"))),
            remap("k", shell(_btt("Move/Resize: Major Center"))),
            remap("l", shell(_btt("Move/Resize: Minor Right"))),
            remap(";", shell(_btt("Move/Resize: Major Right"))),
            # maximise and halves
            remap("n", shell(_raycast("raycast/window-management/almost-maximize"))),
            remap("m", shell(_raycast("raycast/window-management/maximize"))),
            remap(",", shell(_raycast("raycast/window-management/left-half"))),
            remap(".", shell(_raycast("raycast/window-management/right-half"))),
        ],
    )


def essential_modifiers() -> LayerIR:
    # Tab -> Meh                                  ] -> option+control
    # Caps -> Hyper                               ' -> control+shift
    #                                             / -> command+option
    # Left cmd -> Esc (tap)             Right cmd -> option, backspace (tap)
    return rule(
        "Essential Modifiers",
        [
            # left hand: three and four modifier combinations
            remap(
                "grave_accent_and_tilde",
                "left_command+left_option+left_control",
                alone="grave_accent_and_tilde",
            ),
            remap("tab", to_meh(), alone="tab"),
            remap("caps_lock", to_hyper(), alone="escape"),
            remap("left_command", "left_command", alone="escape"),
            # right hand top row starts with option
            remap("[", "left_option+left_shift", alone="["),
            remap("]", "left_option+left_control", alone="]"),
            # middle row starts with control
            remap("quote", "left_control+left_shift", alone="quote"),
            # bottom row starts with command
            remap("slash", "left_command+left_option", alone="slash"),
            remap(".", "left_command+left_control", alone="."),
            remap(",", "left_command+left_shift", alone=","),
            remap("right_command", "left_option", alone="delete_or_backspace"),
        ],
    )


def qwerty_to_colemak_dh() -> LayerIR:
    return rule(
        "Colemak DH",
        with_optional_any(
            remap(qwerty, colemak)
            for qwerty, colemak in [
                # top row
                ("q", "q"),
                ("w", "w"),
                ("e", "f"),
                ("r", "p"),
                ("t", "b"),
                ("y", "j"),
                ("u", "l"),
                ("i", "u"),
                ("o", "y"),
                ("p", ";"),
                # middle row
                ("a", "a"),
                ("s", "r"),
                ("d", "s"),
                ("f", "t"),
                ("g", "g"),
                ("h", "m"),
                ("j", "n"),
                ("k", "e"),
                ("l", "i"),
                (";", "o"),
                # bottom row
                ("z", "z"),
                ("x", "x"),
                ("c", "c"),
                ("v", "d"),
                ("b", "v"),
                ("n", "k"),
                ("m", "h"),
            ]
        ),
    )


def media_layer() -> LayerIR:
    """
    Volume and playback on hyper+m.

    Not part of `primary_layers()`: hyper+m stays unregistered, so this
    layer is dormant and kept for re-activation.
    """

    return hyper_layer(
        "m",
        description="Media Layer",
        notification=True,
        manipulators=[
            remap("w", "volume_up"),
            remap("s", "volume_down"),
            remap("d", "vk_consumer_previous"),
            remap("spacebar", "play_or_pause"),
        ],
    )


def primary_layers() -> List[LayerIR]:
    """Rules in priority order; the engine uses the first one that matches."""

    return [
        navigation_layer(),
        select_layer(),
        number_layer(),
        symbol_layer(),
        function_key_layer(),
        application_layer(),
        raycast_layer(),
        window_management_layer(),
        essential_modifiers(),
        qwerty_to_colemak_dh(),
    ]


def primary_profile() -> ProfileIR:
    return ProfileIR(name=PROFILE_NAME, layers=primary_layers(), parameters=dict(PARAMETERS))
