from __future__ import annotations

import json
import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from kayg_keys.karabiner.compiler import compile_toml_config
from kayg_keys.layers.dsl import hyper_layer, remap, to_hyper
from kayg_keys.layers.frontend import LayerFrontend
from kayg_keys.layers.ir import Emit, KeyChord, LaunchApp, RunShell, SimultaneousTrigger

CONFIG_PATH = Path(__file__).with_name("test_layers.toml")


def _load():
    frontend = LayerFrontend()
    return frontend.parse_config(frontend.load_toml(CONFIG_PATH))


def test_parse_config_basic() -> None:
    profile = _load()

    assert profile.name == "test-profile"
    assert [layer.description for layer in profile.layers] == [
        "Navigation Layer",
        "Apps",
        "Duo",
        "Essential Modifiers",
        "Colemak DH",
    ]
    assert profile.parameters["duo_layer.threshold_milliseconds"] == 120


def test_toml_layer_matches_dsl_declaration() -> None:
    nav = _load().layers[0]

    assert nav == hyper_layer(
        "spacebar",
        [remap("j", "down_arrow"), remap("u", "down_arrow+fn")],
        description="Navigation Layer",
        notification=True,
    )


def test_parse_actions() -> None:
    apps = _load().layers[1]

    assert apps.manipulators[0].actions == [LaunchApp(app="Safari")]
    assert apps.manipulators[1].actions == [
        RunShell(command="open -g 'raycast://extensions/raycast/navigation/switch-windows'")
    ]


def test_parse_duo_and_bare_rules() -> None:
    profile = _load()
    duo, essential, colemak = profile.layers[2:]

    assert duo.trigger == SimultaneousTrigger(keys=["f", "d"])

    assert essential.trigger is None
    caps = essential.manipulators[0]
    assert caps.key == "caps_lock"
    assert caps.actions == [to_hyper()]
    assert caps.alone == [Emit(chord=KeyChord(key="escape"))]

    assert colemak.manipulators[0].optional_any


def test_map_requires_exactly_one_action() -> None:
    config = {
        "name": "bad",
        "layer": [{"description": "x", "map": [{"from": "a", "to": "b", "app": "Safari"}]}],
    }

    with pytest.raises(ValidationError):
        LayerFrontend().parse_config(config)


def test_bad_trigger_expression() -> None:
    config = {"name": "bad", "layer": [{"trigger": "a+b", "map": [{"from": "a", "to": "b"}]}]}

    with pytest.raises(ValueError):
        LayerFrontend().parse_config(config)


def test_compile_toml_config(tmp_path: Path) -> None:
    out_path = tmp_path / "out.json"
    compile_toml_config(CONFIG_PATH, out_path)

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["parameters"]["basic.to_if_alone_timeout_milliseconds"] == 400
    assert "duo_layer.threshold_milliseconds" not in data["parameters"]
    assert len(data["rules"]) == 5

    duo_toggle = data["rules"][2]["manipulators"][0]
    assert duo_toggle["parameters"] == {"basic.simultaneous_threshold_milliseconds": 120}
    assert duo_toggle["from"]["simultaneous"] == [{"key_code": "f"}, {"key_code": "d"}]


def test_parameters_accept_dotted_keys() -> None:
    frontend = LayerFrontend()
    data = tomllib.loads(
        "\n".join(
            [
                'name = "dotted"',
                "[parameters]",
                "duo_layer.threshold_milliseconds = 100",
                "basic.to_if_alone_timeout_milliseconds = 300",
                '"simlayer.threshold_milliseconds" = 150',
            ]
        )
    )

    profile = frontend.parse_config(data)
    assert profile.parameters == {
        "duo_layer.threshold_milliseconds": 100,
        "basic.to_if_alone_timeout_milliseconds": 300,
        "simlayer.threshold_milliseconds": 150,
    }
