from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, List, Optional, TypeAlias

from pydantic import BaseModel, ConfigDict, Field


class Modifier(str, Enum):
    """Declaration-side modifier tokens; must distinguish left/right."""

    COMMAND = "command"
    CONTROL = "control"
    OPTION = "option"
    SHIFT = "shift"
    FN = "fn"
    CAPS_LOCK = "caps_lock"

    LEFT_COMMAND = "left_command"
    LEFT_CONTROL = "left_control"
    LEFT_OPTION = "left_option"
    LEFT_SHIFT = "left_shift"

    RIGHT_COMMAND = "right_command"
    RIGHT_CONTROL = "right_control"
    RIGHT_OPTION = "right_option"
    RIGHT_SHIFT = "right_shift"


KeyCode: TypeAlias = str

HYPER: FrozenSet[Modifier] = frozenset(
    {Modifier.COMMAND, Modifier.CONTROL, Modifier.OPTION, Modifier.SHIFT}
)
MEH: FrozenSet[Modifier] = frozenset({Modifier.CONTROL, Modifier.OPTION, Modifier.SHIFT})


class _Value(BaseModel):
    model_config = ConfigDict(frozen=True)


class KeyChord(_Value):
    """The emitted key chord (one key + optional modifiers)."""

    key: KeyCode
    modifiers: FrozenSet[Modifier] = Field(default_factory=frozenset)


class Action(_Value):
    """Base type for manipulator actions."""


class Emit(Action):
    """Emit a key chord."""

    chord: KeyChord


class LaunchApp(Action):
    """Bring an application to the front by name."""

    app: str


class RunShell(Action):
    """Run a shell command (also used for URI deep links via `open`)."""

    command: str


class ManipulatorIR(_Value):
    """One source key -> actions mapping, with an optional tap-alone fallback."""

    key: KeyCode
    mandatory: FrozenSet[Modifier] = Field(default_factory=frozenset)
    optional_any: bool = False
    actions: List[Action] = Field(min_length=1)
    alone: Optional[List[Action]] = None


class Trigger(_Value):
    """Base type for layer activation triggers."""


class ModifierTrigger(Trigger):
    """Layer is active while `modifiers + key` is held (hyper-style)."""

    key: KeyCode
    modifiers: FrozenSet[Modifier] = Field(min_length=1)


class HoldTrigger(Trigger):
    """Layer is active while `key` is held; a bare tap still emits `key`."""

    key: KeyCode


class SimultaneousTrigger(Trigger):
    """
    Layer is active while `keys` are held together.

    One key makes a simlayer (the layer key is pressed together with each
    mapped key), two keys make a duo layer.
    """

    keys: List[KeyCode] = Field(min_length=1, max_length=2)
    threshold_ms: Optional[int] = Field(default=None, gt=0)


class LayerIR(_Value):
    """A named group of manipulators, optionally gated by a trigger."""

    description: Optional[str] = None
    trigger: Optional[Trigger] = None
    variable: Optional[str] = None
    notification: bool = False
    manipulators: List[ManipulatorIR]

    def state_variable(self) -> Optional[str]:
        """Name of the engine variable tracking whether this layer is active."""

        if self.variable:
            return self.variable

        trigger = self.trigger
        if trigger is None:
            return None
        if isinstance(trigger, ModifierTrigger):
            if trigger.modifiers == HYPER:
                return f"hyper-{trigger.key}"
            mods = "+".join(sorted(m.value for m in trigger.modifiers))
            return f"{mods}-{trigger.key}"
        if isinstance(trigger, HoldTrigger):
            return f"layer-{trigger.key}"
        if isinstance(trigger, SimultaneousTrigger):
            if len(trigger.keys) == 1:
                return f"simlayer-{trigger.keys[0]}"
            return "duo-layer-" + "-".join(trigger.keys)
        raise ValueError(f"unsupported trigger: {type(trigger).__name__}")


class ProfileIR(_Value):
    """The ordered layers written out as one named profile."""

    name: str
    layers: List[LayerIR]
    parameters: Dict[str, int | bool] = Field(default_factory=dict)
