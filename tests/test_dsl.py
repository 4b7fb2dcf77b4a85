from __future__ import annotations

import pytest
from pydantic import ValidationError

from kayg_keys.layers.dsl import (
    emit,
    layer,
    parse_keychord,
    parse_trigger,
    remap,
    to_hyper,
    to_meh,
    with_optional_any,
)
from kayg_keys.layers.ir import (
    HYPER,
    Emit,
    HoldTrigger,
    KeyChord,
    Modifier,
    ModifierTrigger,
    SimultaneousTrigger,
)


def _norm_mods(modifiers) -> set[str]:
    return {getattr(mod, "value", mod) for mod in modifiers}


def test_parse_keychord_key_and_modifiers() -> None:
    chord = parse_keychord("left_command+left_arrow")

    assert chord == KeyChord(key="left_arrow", modifiers=frozenset({Modifier.LEFT_COMMAND}))
    assert parse_keychord("down_arrow+fn").modifiers == frozenset({Modifier.FN})


def test_parse_keychord_all_modifiers_uses_first_as_key() -> None:
    chord = parse_keychord("left_option+left_shift")

    assert chord.key == "left_option"
    assert _norm_mods(chord.modifiers) == {"left_shift"}
    assert parse_keychord("left_command").modifiers == frozenset()


@pytest.mark.parametrize(
    ("expr", "key"),
    [
        (";", "semicolon"),
        ("[", "open_bracket"),
        (",", "comma"),
        (".", "period"),
        ("/", "slash"),
        ("=", "equal_sign"),
        ("7", "7"),
        ("F9", "f9"),
    ],
)
def test_parse_keychord_key_aliases(expr: str, key: str) -> None:
    assert parse_keychord(expr).key == key


def test_parse_keychord_hyphen_with_modifier() -> None:
    chord = parse_keychord("-+left_shift")

    assert chord.key == "hyphen"
    assert _norm_mods(chord.modifiers) == {"left_shift"}


def test_emit_modifier_groups() -> None:
    meh = to_meh().chord
    assert meh.key == "left_shift"
    assert _norm_mods(meh.modifiers) == {"left_option", "left_control"}

    hyper = to_hyper().chord
    assert hyper.key == "left_command"
    assert _norm_mods(hyper.modifiers) == {"left_option", "left_control", "left_shift"}

    assert emit("hyper+j").chord.key == "j"


@pytest.mark.parametrize("expr", ["", "a+b", "left_shift+a+b", "a++b"])
def test_parse_keychord_errors(expr: str) -> None:
    with pytest.raises(ValueError):
        parse_keychord(expr)


def test_parse_trigger_modes() -> None:
    assert parse_trigger("hyper+spacebar") == ModifierTrigger(key="spacebar", modifiers=HYPER)
    assert parse_trigger("left_command+;") == ModifierTrigger(
        key="semicolon", modifiers=frozenset({Modifier.LEFT_COMMAND})
    )
    assert parse_trigger("f") == HoldTrigger(key="f")
    assert parse_trigger("caps_lock", mode="layer") == HoldTrigger(key="caps_lock")
    assert parse_trigger("s", mode="simlayer", threshold_ms=120) == SimultaneousTrigger(
        keys=["s"], threshold_ms=120
    )
    assert parse_trigger("f+d", mode="duo") == SimultaneousTrigger(keys=["f", "d"])


def test_parse_trigger_lone_modifier_key_is_hold_layer() -> None:
    assert parse_trigger("right_command") == HoldTrigger(key="right_command")
    assert parse_trigger("caps_lock") == HoldTrigger(key="caps_lock")
    assert parse_trigger("right_command", mode="simlayer") == SimultaneousTrigger(
        keys=["right_command"]
    )
    assert layer("f", [], mode="simlayer").trigger == SimultaneousTrigger(keys=["f"])


@pytest.mark.parametrize(
    ("expr", "kwargs"),
    [
        ("hyper+a+b", {}),
        ("hyper", {}),
        ("f", {"mode": "bogus"}),
        ("hyper+a", {"threshold_ms": 10}),
        ("f", {"mode": "duo"}),
        ("f+d", {"mode": "simlayer"}),
        ("f+d", {}),
    ],
)
def test_parse_trigger_errors(expr: str, kwargs: dict) -> None:
    with pytest.raises(ValueError):
        parse_trigger(expr, **kwargs)


def test_simultaneous_trigger_key_count_validated() -> None:
    with pytest.raises(ValidationError):
        SimultaneousTrigger(keys=["a", "b", "c"])
    with pytest.raises(ValidationError):
        SimultaneousTrigger(keys=[])


def test_remap_source_modifiers_and_fallback() -> None:
    manip = remap("left_shift+j", "down_arrow", alone="escape")

    assert manip.key == "j"
    assert _norm_mods(manip.mandatory) == {"left_shift"}
    assert manip.actions == [Emit(chord=KeyChord(key="down_arrow"))]
    assert manip.alone == [Emit(chord=KeyChord(key="escape"))]


def test_remap_accepts_several_actions() -> None:
    manip = remap("j", ["down_arrow", "down_arrow"])

    assert len(manip.actions) == 2


def test_with_optional_any_copies() -> None:
    original = [remap("e", "f"), remap("r", "p")]
    relaxed = with_optional_any(original)

    assert all(m.optional_any for m in relaxed)
    assert not any(m.optional_any for m in original)
