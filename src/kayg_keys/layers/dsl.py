from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .ir import (
    HYPER,
    MEH,
    Action,
    Emit,
    HoldTrigger,
    KeyChord,
    KeyCode,
    LaunchApp,
    LayerIR,
    ManipulatorIR,
    Modifier,
    ModifierTrigger,
    RunShell,
    SimultaneousTrigger,
    Trigger,
)


_MODIFIER_TOKENS = {m.value for m in Modifier}

# Punctuation shorthands accepted wherever a key is expected.
_KEY_ALIASES: dict[str, str] = {
    "[": "open_bracket",
    "]": "close_bracket",
    ";": "semicolon",
    "'": "quote",
    ",": "comma",
    ".": "period",
    "/": "slash",
    "\\": "backslash",
    "-": "hyphen",
    "=": "equal_sign",
    "`": "grave_accent_and_tilde",
}

# Modifier groups in a trigger: generic modifiers, either side matches.
_TRIGGER_GROUPS = {"hyper": HYPER, "meh": MEH}

# Modifier groups in an emitted chord: the first token is the key that gets pressed.
_EMIT_GROUPS: dict[str, tuple[str, ...]] = {
    "hyper": ("left_command", "left_option", "left_control", "left_shift"),
    "meh": ("left_shift", "left_option", "left_control"),
}

TRIGGER_MODES = ("modifier", "layer", "simlayer", "duo")

ActionLike = str | Action | Sequence[str | Action]


def normalize_key(token: str) -> KeyCode:
    token = token.strip()
    if token in _KEY_ALIASES:
        return _KEY_ALIASES[token]
    return token.lower()


def _tokenize(expr: str, *, chord_sep: str = "+") -> list[str]:
    expr = expr.strip()
    if not expr:
        raise ValueError("expression is empty")
    tokens = [t.strip() for t in expr.split(chord_sep)]
    if any(not t for t in tokens):
        raise ValueError(f"invalid expression (empty token): {expr!r}")
    return tokens


def parse_keychord(expr: str) -> KeyChord:
    """
    Parse a chord expression such as ``left_command+left_arrow`` into a KeyChord.

    Token order is free. When every token is a modifier (``left_option+left_shift``)
    the first one is the key and the rest modify it, so modifier keys can be
    emitted on their own.
    """

    tokens: list[str] = []
    for token in _tokenize(expr):
        group = _EMIT_GROUPS.get(token.lower())
        if group is not None:
            tokens.extend(group)
        else:
            tokens.append(normalize_key(token))

    keys = [t for t in tokens if t not in _MODIFIER_TOKENS]
    if not keys:
        key, mod_tokens = tokens[0], tokens[1:]
    elif len(keys) == 1:
        key, mod_tokens = keys[0], [t for t in tokens if t in _MODIFIER_TOKENS]
    else:
        raise ValueError(f"chord expression must have exactly one key: {expr!r}")

    modifiers = frozenset(Modifier(t) for t in mod_tokens if t != key)
    return KeyChord(key=key, modifiers=modifiers)


def parse_trigger(
    expr: str,
    *,
    mode: Optional[str] = None,
    threshold_ms: Optional[int] = None,
) -> Trigger:
    """
    Parse a layer trigger expression.

    ``hyper+spacebar`` and ``left_command+k`` are modifier triggers; a bare key is
    a hold layer unless ``mode`` says ``simlayer``; ``f+d`` with mode ``duo`` is a
    duo layer. A lone modifier key (``right_command``) is a hold layer too.
    """

    tokens = _tokenize(expr)
    if mode is None and len(tokens) == 1 and tokens[0].lower() not in _TRIGGER_GROUPS:
        mode = "layer"

    modifiers: set[Modifier] = set()
    keys: list[KeyCode] = []
    for token in tokens:
        lowered = token.lower()
        if lowered in _TRIGGER_GROUPS:
            modifiers.update(_TRIGGER_GROUPS[lowered])
        elif lowered in _MODIFIER_TOKENS and mode in (None, "modifier"):
            modifiers.add(Modifier(lowered))
        else:
            keys.append(normalize_key(token))

    if mode is None:
        mode = "modifier" if modifiers else "layer"
    if mode not in TRIGGER_MODES:
        raise ValueError(f"unknown trigger mode {mode!r} (expected one of {TRIGGER_MODES})")
    if threshold_ms is not None and mode not in ("simlayer", "duo"):
        raise ValueError(f"threshold only applies to simlayer/duo triggers: {expr!r}")

    if mode == "modifier":
        if not modifiers or len(keys) != 1:
            raise ValueError(f"modifier trigger needs modifiers and one key: {expr!r}")
        return ModifierTrigger(key=keys[0], modifiers=frozenset(modifiers))

    if modifiers:
        raise ValueError(f"{mode} trigger does not take modifiers: {expr!r}")
    if mode == "layer":
        if len(keys) != 1:
            raise ValueError(f"layer trigger needs exactly one key: {expr!r}")
        return HoldTrigger(key=keys[0])
    if mode == "simlayer":
        if len(keys) != 1:
            raise ValueError(f"simlayer trigger needs exactly one key: {expr!r}")
        return SimultaneousTrigger(keys=keys, threshold_ms=threshold_ms)
    if len(keys) != 2:
        raise ValueError(f"duo trigger needs exactly two keys: {expr!r}")
    return SimultaneousTrigger(keys=keys, threshold_ms=threshold_ms)


def emit(expr: str) -> Emit:
    return Emit(chord=parse_keychord(expr))


def app(name: str) -> LaunchApp:
    return LaunchApp(app=name)


def shell(command: str) -> RunShell:
    return RunShell(command=command)


def to_hyper() -> Emit:
    """All four modifiers, pressed as left_command + option/control/shift."""

    return emit("hyper")


def to_meh() -> Emit:
    """Control, option and shift, pressed as left_shift + option/control."""

    return emit("meh")


def _as_actions(value: ActionLike) -> list[Action]:
    if isinstance(value, (str, Action)):
        value = [value]
    actions: list[Action] = []
    for item in value:
        actions.append(emit(item) if isinstance(item, str) else item)
    return actions


def remap(
    key: str,
    to: ActionLike,
    *,
    alone: Optional[ActionLike] = None,
    optional_any: bool = False,
) -> ManipulatorIR:
    """Declare one manipulator: `key` (optionally with held modifiers) -> `to`."""

    source = parse_keychord(key)
    return ManipulatorIR(
        key=source.key,
        mandatory=source.modifiers,
        optional_any=optional_any,
        actions=_as_actions(to),
        alone=_as_actions(alone) if alone is not None else None,
    )


def with_optional_any(manipulators: Iterable[ManipulatorIR]) -> list[ManipulatorIR]:
    """Let each manipulator fire regardless of other held modifiers."""

    return [m.model_copy(update={"optional_any": True}) for m in manipulators]


def rule(description: str, manipulators: Sequence[ManipulatorIR]) -> LayerIR:
    """A bare rule: manipulators without an activation trigger."""

    return LayerIR(description=description, manipulators=list(manipulators))


def layer(
    trigger: Trigger | str,
    manipulators: Sequence[ManipulatorIR],
    *,
    description: Optional[str] = None,
    notification: bool = False,
    variable: Optional[str] = None,
    mode: Optional[str] = None,
) -> LayerIR:
    if isinstance(trigger, str):
        trigger = parse_trigger(trigger, mode=mode)
    return LayerIR(
        description=description,
        trigger=trigger,
        variable=variable,
        notification=notification,
        manipulators=list(manipulators),
    )


def hyper_layer(
    key: str,
    manipulators: Sequence[ManipulatorIR],
    *,
    description: Optional[str] = None,
    notification: bool = False,
) -> LayerIR:
    """A layer active while hyper + `key` is held."""

    trigger = ModifierTrigger(key=normalize_key(key), modifiers=HYPER)
    return layer(trigger, manipulators, description=description, notification=notification)


def simlayer(
    key: str,
    manipulators: Sequence[ManipulatorIR],
    *,
    threshold_ms: Optional[int] = None,
    description: Optional[str] = None,
    notification: bool = False,
) -> LayerIR:
    trigger = SimultaneousTrigger(keys=[normalize_key(key)], threshold_ms=threshold_ms)
    return layer(trigger, manipulators, description=description, notification=notification)


def duo_layer(
    first: str,
    second: str,
    manipulators: Sequence[ManipulatorIR],
    *,
    threshold_ms: Optional[int] = None,
    description: Optional[str] = None,
    notification: bool = False,
) -> LayerIR:
    trigger = SimultaneousTrigger(
        keys=[normalize_key(first), normalize_key(second)],
        threshold_ms=threshold_ms,
    )
    return layer(trigger, manipulators, description=description, notification=notification)
