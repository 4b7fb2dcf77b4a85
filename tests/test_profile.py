from __future__ import annotations

import json

from kayg_keys.karabiner.backend import KarabinerBackend
from kayg_keys.karabiner.writer import render
from kayg_keys.layers.lint import lint_profile
from kayg_keys.profile import PROFILE_NAME, media_layer, primary_profile


def _compiled() -> dict:
    return json.loads(render(KarabinerBackend().compile(primary_profile())))


def _rule(data: dict, description: str) -> dict:
    return next(r for r in data["rules"] if r["description"] == description)


def _manipulator(rule: dict, key_code: str) -> dict:
    return next(m for m in rule["manipulators"] if m["from"].get("key_code") == key_code)


def test_rule_order() -> None:
    data = _compiled()

    assert [r["description"] for r in data["rules"]] == [
        "Navigation Layer",
        "Select Layer",
        "Number Pad Layer",
        "Symbol Layer",
        "Function Key Layer",
        "Application layer",
        "Raycast Layer",
        "Window Management Layer",
        "Essential Modifiers",
        "Colemak DH",
    ]


def test_primary_profile_lints_clean() -> None:
    profile = primary_profile()

    assert profile.name == PROFILE_NAME
    assert lint_profile(profile) == []


def test_compile_is_deterministic() -> None:
    backend = KarabinerBackend()

    first = render(backend.compile(primary_profile()))
    second = render(backend.compile(primary_profile()))
    assert first == second


def test_navigation_page_down() -> None:
    nav = _rule(_compiled(), "Navigation Layer")
    page_down = _manipulator(nav, "u")

    assert page_down["conditions"] == [
        {"type": "variable_if", "name": "hyper-spacebar", "value": 1}
    ]
    assert page_down["to"] == [{"key_code": "down_arrow", "modifiers": ["fn"]}]
    assert "to_if_alone" not in page_down


def test_tab_is_meh_and_taps_tab() -> None:
    essential = _rule(_compiled(), "Essential Modifiers")
    tab = _manipulator(essential, "tab")

    assert tab["to"] == [{"key_code": "left_shift", "modifiers": ["left_control", "left_option"]}]
    assert tab["to_if_alone"] == [{"key_code": "tab"}]
    assert "conditions" not in tab


def test_caps_lock_is_hyper_and_taps_escape() -> None:
    essential = _rule(_compiled(), "Essential Modifiers")
    caps = _manipulator(essential, "caps_lock")

    assert caps["to"] == [
        {"key_code": "left_command", "modifiers": ["left_control", "left_option", "left_shift"]}
    ]
    assert caps["to_if_alone"] == [{"key_code": "escape"}]


def test_colemak_ignores_held_modifiers() -> None:
    colemak = _rule(_compiled(), "Colemak DH")

    assert len(colemak["manipulators"]) == 27
    e = _manipulator(colemak, "e")
    assert e["from"]["modifiers"] == {"optional": ["any"]}
    assert e["to"] == [{"key_code": "f"}]
    assert _manipulator(colemak, "p")["to"] == [{"key_code": "semicolon"}]


def test_application_layer_launches_apps() -> None:
    apps = _rule(_compiled(), "Application layer")

    assert _manipulator(apps, "j")["to"] == [{"shell_command": "open -a iTerm.app"}]
    assert _manipulator(apps, "m")["to"] == [{"shell_command": "open -a 1Password.app"}]


def test_duo_threshold_is_not_written() -> None:
    parameters = _compiled()["parameters"]

    assert "duo_layer.threshold_milliseconds" not in parameters
    assert parameters["basic.simultaneous_threshold_milliseconds"] == 50


def test_media_layer_is_dormant() -> None:
    data = _compiled()

    assert "Media Layer" not in [r["description"] for r in data["rules"]]
    for rule in data["rules"]:
        for manip in rule["manipulators"]:
            for event in manip.get("to", []):
                assert event.get("set_variable", {}).get("name") != "hyper-m"


def test_media_layer_compiles_on_its_own() -> None:
    out = KarabinerBackend().compile_layer(media_layer())

    assert out.description == "Media Layer"
    assert len(out.manipulators) == 5
    assert out.manipulators[0].from_.key_code == "m"
    play = next(m for m in out.manipulators if m.from_.key_code == "spacebar")
    assert play.to[0].consumer_key_code == "play_or_pause"
